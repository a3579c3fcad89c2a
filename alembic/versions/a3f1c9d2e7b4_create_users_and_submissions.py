"""create users and submissions tables

Revision ID: a3f1c9d2e7b4
Revises:
Create Date: 2026-10-19 09:00:00.000000

The five later categories (home, heating, digital, pets, garden) are
nullable so submissions scored before they existed remain valid.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "a3f1c9d2e7b4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CORE_SCORES = [
    "transportation_score",
    "energy_score",
    "water_score",
    "diet_score",
    "food_waste_score",
    "shopping_score",
    "waste_score",
    "electronics_score",
    "travel_score",
    "appliance_score",
]
LATER_SCORES = [
    "home_score",
    "heating_score",
    "digital_score",
    "pets_score",
    "garden_score",
]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "submissions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        *[sa.Column(name, sa.Float(), nullable=False) for name in CORE_SCORES],
        *[sa.Column(name, sa.Float(), nullable=True) for name in LATER_SCORES],
        sa.Column("total_emission_score", sa.Float(), nullable=False),
        sa.Column("impact_category", sa.Text(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_submission_user_created_at", "submissions", ["user_id", "created_at"])


def downgrade() -> None:
    op.drop_index("idx_submission_user_created_at", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
