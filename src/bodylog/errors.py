"""Error types raised by the bodylog services."""


class BodylogError(Exception):
    """Base class for failures reported back to callers."""

    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthorizedError(BodylogError):
    """No authenticated user could be resolved for the request."""

    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ValidationError(BodylogError):
    """Input was rejected before reaching the store."""

    code = "validation"

    def __init__(self, message: str, field_errors: dict[str, list[str]] | None = None):
        super().__init__(message)
        self.field_errors = field_errors or {}

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Create an error for a single invalid field."""
        return cls(f"Invalid {field}: {message}", {field: [message]})


class StoreFailure(BodylogError):
    """The persistent store call failed."""

    code = "store_failure"


class NotFoundError(BodylogError):
    """A required record does not exist."""

    code = "not_found"
