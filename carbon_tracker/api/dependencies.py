"""
Shared FastAPI dependencies and response helpers.
"""

from fastapi import HTTPException, Request, Response, status

from carbon_tracker.auth.security import SessionTokenError, decode_session_token, extract_session_token
from carbon_tracker.config.settings import settings
from carbon_tracker.models.dtos import SessionDTO


async def get_current_session(request: Request) -> SessionDTO:
    """
    Resolve the caller's session from the request.

    Raises:
        HTTPException: 401 if no valid session token is present
    """
    token = extract_session_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        return decode_session_token(token)
    except SessionTokenError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
