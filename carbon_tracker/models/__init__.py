"""
Models package for the Carbon Tracker service.

This package contains SQLAlchemy ORM models and Pydantic DTOs.
"""

# Ensure all ORM models are registered with the Base metadata when this package is imported.
from .base import Base
from .submission_orm import SubmissionORM
from .user_orm import UserORM

from .dtos import (
    SessionDTO,
    SessionTokenResponse,
    SigninRequest,
    SignupRequest,
    SubmissionCreate,
    SubmissionCreatedResponse,
    SubmissionDTO,
    SubmissionListResponse,
    UserDTO,
)

__all__ = [
    # Base
    "Base",
    # ORMs
    "SubmissionORM",
    "UserORM",
    # DTOs
    "SessionDTO",
    "SessionTokenResponse",
    "SigninRequest",
    "SignupRequest",
    "SubmissionCreate",
    "SubmissionCreatedResponse",
    "SubmissionDTO",
    "SubmissionListResponse",
    "UserDTO",
]
