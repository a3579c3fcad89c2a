"""
Submission queries and ingestion.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_tracker.core.periods import Period, period_start
from carbon_tracker.models.dtos import SubmissionCreate
from carbon_tracker.models.submission_orm import SubmissionORM

logger = logging.getLogger(__name__)


async def list_submissions(
    session: AsyncSession,
    user_id: str,
    period: Period,
    now: Optional[datetime] = None,
) -> List[SubmissionORM]:
    """
    Return a user's submissions inside a period, newest first.

    Args:
        session: Database session
        user_id: Owner of the submissions
        period: Time window to apply
        now: Reference time for the window, defaults to the current UTC time

    Returns:
        List[SubmissionORM]: Matching submissions ordered by created_at DESC, id DESC
    """
    conditions = [SubmissionORM.user_id == user_id]

    start = period_start(period, now)
    if start is not None:
        conditions.append(SubmissionORM.created_at >= start)

    query = (
        select(SubmissionORM)
        .where(and_(*conditions))
        .order_by(desc(SubmissionORM.created_at), desc(SubmissionORM.id))
    )
    result = await session.execute(query)
    submissions = list(result.scalars().all())
    logger.info(f"Retrieved {len(submissions)} submissions for user {user_id} (period={period.value})")
    return submissions


async def create_submission(session: AsyncSession, user_id: str, payload: SubmissionCreate) -> SubmissionORM:
    """Persist an already-scored submission for a user."""
    submission = SubmissionORM(user_id=user_id, **payload.model_dump())
    session.add(submission)
    await session.commit()
    await session.refresh(submission)
    logger.info(f"Stored submission {submission.id} for user {user_id}")
    return submission
