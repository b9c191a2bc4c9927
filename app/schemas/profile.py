"""UserProfile schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileAttributes(BaseModel):
    """Matchable attributes. Blank values count as "not declared"."""

    display_name: str | None = Field(None, max_length=255)
    fitness_goal: str | None = Field(None, max_length=255, description="e.g. lose-weight, build-muscle")
    workout_type: str | None = Field(None, max_length=255, description="e.g. cardio, strength, hiit")
    availability: str | None = Field(None, max_length=255, description="morning, midday, evening, night")
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=2000)


class ProfileCreate(ProfileAttributes):
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")


class ProfileUpdate(ProfileAttributes):
    pass


class ProfileRead(ProfileAttributes):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime


class CandidateRead(BaseModel):
    """A user the requester may propose to, with their compatibility score."""

    user: ProfileRead
    score: int = Field(..., ge=0, le=100)
