"""
Authentication API endpoints.

Signup validates and persists a new account; sign-in exchanges credentials
for a session token that route gating and the API dependencies read back.
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.api.dependencies import clear_session_cookie, get_current_session, set_session_cookie
from carbon_tracker.auth.security import create_session_token
from carbon_tracker.core.accounts import DuplicateEmailError, InvalidCredentialsError, authenticate_user, register_user
from carbon_tracker.models.dtos import SessionDTO, SessionTokenResponse, SigninRequest, SignupRequest, UserDTO
from carbon_tracker.utils.db_session import get_db_session

router = APIRouter()
logger = logging.getLogger(__name__)

SIGNUP_FIELD_MESSAGES = {
    "email": "Invalid email address",
    "password": "Password must be at least 8 characters long",
    "name": "Name is required",
}
REQUIRED_MESSAGE = "Required"
BODY_FIELD = "body"


def flatten_field_errors(error: ValidationError) -> Dict[str, List[str]]:
    """
    Collapse a pydantic ValidationError into `{field: [message, ...]}`.

    Errors that do not belong to a single field are reported under "body".
    """
    details: Dict[str, List[str]] = {}
    for item in error.errors():
        loc = item.get("loc") or ()
        field = str(loc[0]) if loc else BODY_FIELD
        if item.get("type") == "missing":
            message = REQUIRED_MESSAGE
        else:
            message = SIGNUP_FIELD_MESSAGES.get(field, item.get("msg", "Invalid value"))
        messages = details.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return details


def invalid_input(details: Dict[str, List[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid input", "details": details},
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(request: Request, session: AsyncSession = Depends(get_db_session)) -> JSONResponse:
    """
    Create an account.

    Returns 201 with the user (without its password), 400 with per-field
    details on invalid input, 409 if the email is taken, 500 otherwise.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            return invalid_input({BODY_FIELD: ["Invalid JSON body"]})

        try:
            signup_request = SignupRequest.model_validate(body)
        except ValidationError as e:
            return invalid_input(flatten_field_errors(e))

        user = await register_user(session, signup_request)

    except DuplicateEmailError:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": "User with this email already exists"},
        )
    except Exception:
        logger.exception("Signup error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={
            "message": "User created successfully",
            "user": UserDTO.model_validate(user).model_dump(mode="json", by_alias=True),
        },
    )


@router.post("/signin", response_model=SessionTokenResponse)
async def signin(
    payload: SigninRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
) -> SessionTokenResponse:
    """
    Exchange credentials for a session token.

    The token is returned in the body and set as an HTTP-only cookie.
    """
    try:
        user = await authenticate_user(session, payload.email, payload.password)
    except InvalidCredentialsError:
        logger.info("Rejected sign-in attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    token = create_session_token(user)
    set_session_cookie(response, token)
    return SessionTokenResponse(token=token, user=UserDTO.model_validate(user))


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
async def signout(response: Response) -> None:
    """Clear the session cookie."""
    clear_session_cookie(response)


@router.get("/session", response_model=SessionDTO)
async def get_session(session: SessionDTO = Depends(get_current_session)) -> SessionDTO:
    """Return the identity carried by the caller's session token."""
    return session
