"""
Pydantic Data Transfer Objects (DTOs) for the Carbon Tracker service.

These models are used for API request/response validation and internal data transfer.
Wire names are camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SignupRequest(BaseModel):
    """
    Body of `POST /api/auth/signup`.
    """
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: Optional[str] = Field(None, min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def reject_null_name(cls, value):
        # Omitting the key is fine, an explicit null is not
        if value is None:
            raise ValueError("Name is required")
        return value


class SigninRequest(BaseModel):
    """
    Body of `POST /api/auth/signin`.
    """
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserDTO(CamelModel):
    """
    Public view of an account. Mirrors UserORM without the password hash.
    """
    id: str
    email: str
    name: Optional[str] = None
    onboarding_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SessionDTO(CamelModel):
    """
    Identity and flags carried by a session token.
    """
    user_id: str
    email: str
    name: Optional[str] = None
    onboarding_completed: bool = False
    expires_at: Optional[datetime] = None


class SessionTokenResponse(CamelModel):
    """
    Response of a successful sign-in or token refresh.
    """
    token: str
    user: UserDTO


class SubmissionScores(CamelModel):
    """
    The fifteen per-category scores (kg CO2e) plus total and impact label.
    """
    transportation_score: float = Field(..., ge=0)
    energy_score: float = Field(..., ge=0)
    water_score: float = Field(..., ge=0)
    diet_score: float = Field(..., ge=0)
    food_waste_score: float = Field(..., ge=0)
    shopping_score: float = Field(..., ge=0)
    waste_score: float = Field(..., ge=0)
    electronics_score: float = Field(..., ge=0)
    travel_score: float = Field(..., ge=0)
    appliance_score: float = Field(..., ge=0)
    home_score: Optional[float] = Field(None, ge=0)
    heating_score: Optional[float] = Field(None, ge=0)
    digital_score: Optional[float] = Field(None, ge=0)
    pets_score: Optional[float] = Field(None, ge=0)
    garden_score: Optional[float] = Field(None, ge=0)
    total_emission_score: float = Field(..., ge=0)
    impact_category: str = Field(..., min_length=1)


class SubmissionCreate(SubmissionScores):
    """
    Body of `POST /api/submissions`: an already-scored assessment.
    """
    pass


class SubmissionDTO(SubmissionScores):
    """
    A stored submission as returned by the API.
    """
    id: str
    created_at: Optional[datetime] = None


class SubmissionListResponse(CamelModel):
    """
    Response of `GET /api/submissions`.
    """
    submissions: List[SubmissionDTO]


class SubmissionCreatedResponse(CamelModel):
    """
    Response of `POST /api/submissions`.
    """
    submission: SubmissionDTO
