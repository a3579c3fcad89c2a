"""
Account operations: registration, credential checks and onboarding.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from carbon_tracker.auth.security import hash_password, verify_password
from carbon_tracker.models.dtos import SignupRequest
from carbon_tracker.models.user_orm import UserORM

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when an account with the same (case-insensitive) email exists."""


class InvalidCredentialsError(Exception):
    """Raised when an email/password pair does not match an account."""


class UserNotFoundError(Exception):
    """Raised when a session refers to an account that no longer exists."""


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[UserORM]:
    result = await session.execute(select(UserORM).where(UserORM.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: str) -> UserORM:
    user = await session.get(UserORM, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


async def register_user(session: AsyncSession, request: SignupRequest) -> UserORM:
    """
    Create an account with a hashed password and onboarding not yet completed.

    Args:
        session: Database session
        request: Validated signup payload

    Returns:
        UserORM: The persisted user

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    email = normalize_email(request.email)

    if await get_user_by_email(session, email) is not None:
        raise DuplicateEmailError(email)

    # bcrypt runs in a worker thread
    password_hash = await run_in_threadpool(hash_password, request.password)

    user = UserORM(
        email=email,
        password=password_hash,
        name=request.name or None,
        onboarding_completed=False,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as e:
        # Lost a race against a concurrent signup for the same email
        await session.rollback()
        raise DuplicateEmailError(email) from e

    await session.refresh(user)
    logger.info(f"Created user {user.id}")
    return user


async def authenticate_user(session: AsyncSession, email: str, password: str) -> UserORM:
    """
    Look up an account and check its password.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
    """
    user = await get_user_by_email(session, email)
    if user is None or not await run_in_threadpool(verify_password, password, user.password):
        raise InvalidCredentialsError(normalize_email(email))
    return user


async def complete_onboarding(session: AsyncSession, user_id: str) -> UserORM:
    """Mark a user's onboarding as completed. Idempotent."""
    user = await get_user(session, user_id)
    if not user.onboarding_completed:
        user.onboarding_completed = True
        await session.commit()
        await session.refresh(user)
        logger.info(f"User {user.id} completed onboarding")
    return user
