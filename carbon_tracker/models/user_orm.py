"""
SQLAlchemy ORM model for the 'users' table.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, String, Text, TIMESTAMP, false
from sqlalchemy.sql import func

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserORM(Base):
    """
    SQLAlchemy ORM model representing an account.

    Attributes:
        id (str): Opaque UUID4 identifier.
        email (str): Lower-cased, unique email address.
        password (str): bcrypt hash of the password. Never serialized.
        name (str, optional): Display name.
        onboarding_completed (bool): Whether the one-time onboarding flow is done.
        created_at (datetime): Account creation time.
        updated_at (datetime): Last modification time.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), comment="Opaque user identifier.")
    email = Column(String(320), nullable=False, unique=True, index=True, comment="Lower-cased email address.")
    password = Column(Text, nullable=False, comment="bcrypt password hash.")
    name = Column(Text, nullable=True, comment="Optional display name.")
    onboarding_completed = Column(Boolean, nullable=False, default=False, server_default=false(), comment="Onboarding flow completed.")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow, server_default=func.now())

    def __repr__(self) -> str:
        return f"<UserORM(id='{self.id}', email='{self.email}', onboarding_completed={self.onboarding_completed})>"
