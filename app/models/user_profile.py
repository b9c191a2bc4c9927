"""UserProfile model: the fitness attributes partners are matched on."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserProfile(Base):
    """A user's declared fitness attributes.

    goal / workout type / availability hold one value or a comma-separated list
    (e.g. "cardio, hiit"). Compatibility scores are computed per pair and never
    stored here.
    """

    __tablename__ = "user_profiles"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    fitness_goal: Mapped[str | None] = mapped_column(String(255), nullable=True)  # lose-weight, build-muscle, ...
    workout_type: Mapped[str | None] = mapped_column(String(255), nullable=True)  # cardio, strength, hiit, yoga, mixed
    availability: Mapped[str | None] = mapped_column(String(255), nullable=True)  # morning, midday, evening, night
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
