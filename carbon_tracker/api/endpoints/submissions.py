"""
Submission API endpoints.

The dashboard's analytics view reads `GET /api/submissions?period=...`;
records are scoped to the caller and ordered newest first.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.api.dependencies import get_current_session
from carbon_tracker.core.periods import DEFAULT_PERIOD, Period
from carbon_tracker.core.submissions import create_submission, list_submissions
from carbon_tracker.models.dtos import (
    SessionDTO,
    SubmissionCreate,
    SubmissionCreatedResponse,
    SubmissionDTO,
    SubmissionListResponse,
)
from carbon_tracker.utils.db_session import get_db_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=SubmissionListResponse)
async def get_submissions(
    period: Period = Query(DEFAULT_PERIOD, description="Time window: week, month or all"),
    current: SessionDTO = Depends(get_current_session),
    session: AsyncSession = Depends(get_db_session),
) -> SubmissionListResponse:
    """
    Retrieve the caller's submissions for a period.

    Args:
        period: Time window to filter by
        current: Caller's session
        session: Database session

    Returns:
        SubmissionListResponse: `{"submissions": [...]}`, newest first

    Raises:
        HTTPException: If the query fails
    """
    try:
        submissions = await list_submissions(session, current.user_id, period)
    except Exception as e:
        logger.error(f"Error retrieving submissions: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve submissions")

    return SubmissionListResponse(
        submissions=[SubmissionDTO.model_validate(submission) for submission in submissions]
    )


@router.post("", response_model=SubmissionCreatedResponse, status_code=status.HTTP_201_CREATED)
async def post_submission(
    payload: SubmissionCreate,
    current: SessionDTO = Depends(get_current_session),
    session: AsyncSession = Depends(get_db_session),
) -> SubmissionCreatedResponse:
    """
    Store an already-scored submission for the caller.
    """
    try:
        submission = await create_submission(session, current.user_id, payload)
    except Exception as e:
        logger.error(f"Error storing submission: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to store submission")

    return SubmissionCreatedResponse(submission=SubmissionDTO.model_validate(submission))
