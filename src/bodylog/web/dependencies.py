"""Shared FastAPI dependencies and response helpers."""

from fastapi import Request
from fastapi.responses import JSONResponse

from ..db.store import RecordStore
from ..services import ActionResult

STATUS_CODES = {
    "unauthorized": 401,
    "not_found": 404,
    "validation": 422,
    "store_failure": 503,
}


def get_store(request: Request) -> RecordStore:
    """Get a record store bound to the app's database."""
    return RecordStore(request.app.state.db_path)


def action_response(result: ActionResult) -> JSONResponse:
    """Render an action result, mapping failures to HTTP status codes."""
    if result.ok:
        return JSONResponse(result.to_dict())
    status_code = STATUS_CODES.get(result.error_code, 500)
    return JSONResponse(result.to_dict(), status_code=status_code)
