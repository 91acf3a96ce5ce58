"""Request identity.

Authentication happens upstream in the identity provider, which forwards
the authenticated user id in a request header. A missing header means no
authenticated user.
"""

from fastapi import Request

USER_ID_HEADER = "X-User-Id"


async def get_authenticated_user_id(request: Request) -> str | None:
    """Return the authenticated user id for the request, if any."""
    user_id = request.headers.get(USER_ID_HEADER, "").strip()
    return user_id or None
