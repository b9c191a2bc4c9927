"""Candidate listing - potential accountability partners for the acting user."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_acting_user_id
from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.profile import CandidateRead, ProfileRead
from app.services.candidates import find_candidates

router = APIRouter()
settings = get_settings()


@router.get("", response_model=list[CandidateRead])
async def list_candidates(
    limit: int = Query(settings.candidate_limit_default, ge=1, le=settings.candidate_limit_max),
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Best matches first. Users already pending or paired with you are left out."""
    candidates = await find_candidates(db, user_id, limit=limit)
    return [
        CandidateRead(user=ProfileRead.model_validate(c.user), score=c.score)
        for c in candidates
    ]
