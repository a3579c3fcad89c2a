"""
Onboarding API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.api.dependencies import get_current_session, set_session_cookie
from carbon_tracker.auth.security import create_session_token
from carbon_tracker.core.accounts import UserNotFoundError, complete_onboarding
from carbon_tracker.models.dtos import SessionDTO, SessionTokenResponse, UserDTO
from carbon_tracker.utils.db_session import get_db_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/complete", response_model=SessionTokenResponse)
async def complete(
    response: Response,
    current: SessionDTO = Depends(get_current_session),
    session: AsyncSession = Depends(get_db_session),
) -> SessionTokenResponse:
    """
    Mark onboarding as done and re-issue the session token.

    Route gating reads the onboarding flag from the token, so the caller
    must pick up the new token for the dashboard to become reachable.
    """
    try:
        user = await complete_onboarding(session, current.user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    token = create_session_token(user)
    set_session_cookie(response, token)
    return SessionTokenResponse(token=token, user=UserDTO.model_validate(user))
