"""Profile store access: the core reads profiles; the API writes them on signup / edit."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import Conflict, NotFound
from app.db.guard import store_operation
from app.models.user_profile import UserProfile

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("display_name", "fitness_goal", "workout_type", "availability", "location", "bio")


def _clean(data: dict[str, Any]) -> dict[str, Any]:
    """Trim text attributes; blank strings become None (not declared)."""
    out: dict[str, Any] = {}
    for key, value in data.items():
        if key in TEXT_FIELDS and isinstance(value, str):
            value = value.strip() or None
        elif key == "email" and isinstance(value, str):
            value = value.strip().lower()
        out[key] = value
    return out


@store_operation("get_profile")
async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> UserProfile:
    result = await db.execute(select(UserProfile).where(UserProfile.id == user_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise NotFound(f"User {user_id} not found.")
    return profile


@store_operation("create_profile")
async def create_profile(db: AsyncSession, data: dict[str, Any]) -> UserProfile:
    profile = UserProfile(**_clean(data))
    db.add(profile)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise Conflict("A profile with this email already exists.") from exc
    logger.info("Profile %s created", profile.id)
    return profile


@store_operation("update_profile")
async def update_profile(db: AsyncSession, user_id: uuid.UUID, changes: dict[str, Any]) -> UserProfile:
    """Apply a partial update; only keys present in ``changes`` are touched."""
    profile = await get_profile(db, user_id)
    for key, value in _clean(changes).items():
        setattr(profile, key, value)
    await db.flush()
    await db.refresh(profile)
    await db.commit()
    return profile
