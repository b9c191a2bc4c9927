"""Profile endpoints: create on signup, read, edit own attributes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_acting_user_id
from app.db.session import get_db
from app.schemas.profile import ProfileCreate, ProfileRead, ProfileUpdate
from app.services import profiles

router = APIRouter()


@router.post("", response_model=ProfileRead, status_code=201)
async def create_profile(
    payload: ProfileCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a profile (email must be unique)."""
    return await profiles.create_profile(db, payload.model_dump())


@router.get("/me", response_model=ProfileRead)
async def get_own_profile(
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await profiles.get_profile(db, user_id)


@router.patch("/me", response_model=ProfileRead)
async def update_own_profile(
    payload: ProfileUpdate,
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Update goal / workout type / availability / location / bio. Omitted fields are kept."""
    return await profiles.update_profile(db, user_id, payload.model_dump(exclude_unset=True))


@router.get("/{user_id}", response_model=ProfileRead)
async def get_profile(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await profiles.get_profile(db, user_id)
