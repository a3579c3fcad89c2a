"""
SQLAlchemy ORM model for the 'submissions' table.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Float, ForeignKey, Index, String, Text, TIMESTAMP
from sqlalchemy.sql import func

from .base import Base


class SubmissionORM(Base):
    """
    One scored lifestyle assessment.

    The ten core category scores are always present. Home, heating, digital,
    pets and garden were added later and are nullable so older rows stay valid.
    """
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    transportation_score = Column(Float, nullable=False)
    energy_score = Column(Float, nullable=False)
    water_score = Column(Float, nullable=False)
    diet_score = Column(Float, nullable=False)
    food_waste_score = Column(Float, nullable=False)
    shopping_score = Column(Float, nullable=False)
    waste_score = Column(Float, nullable=False)
    electronics_score = Column(Float, nullable=False)
    travel_score = Column(Float, nullable=False)
    appliance_score = Column(Float, nullable=False)
    home_score = Column(Float, nullable=True)
    heating_score = Column(Float, nullable=True)
    digital_score = Column(Float, nullable=True)
    pets_score = Column(Float, nullable=True)
    garden_score = Column(Float, nullable=True)

    total_emission_score = Column(Float, nullable=False, comment="Total produced by the upstream scorer.")
    impact_category = Column(Text, nullable=False, comment="Low, Medium or High.")
    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_submission_user_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<SubmissionORM(id='{self.id}', user_id='{self.user_id}', "
            f"total={self.total_emission_score}, created_at='{self.created_at}')>"
        )
