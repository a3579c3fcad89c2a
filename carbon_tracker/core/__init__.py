"""
Core components for the Carbon Tracker service.
"""

from .accounts import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
    authenticate_user,
    complete_onboarding,
    register_user,
)
from .periods import DEFAULT_PERIOD, Period, period_start
from .submissions import create_submission, list_submissions

__all__ = [
    "DEFAULT_PERIOD",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "Period",
    "UserNotFoundError",
    "authenticate_user",
    "complete_onboarding",
    "create_submission",
    "list_submissions",
    "period_start",
    "register_user",
]
