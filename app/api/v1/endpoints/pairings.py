"""Pairing endpoints: propose, respond, list."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_acting_user_id
from app.core.enums import PairingStatus
from app.db.session import get_db
from app.schemas.pairing import (
    PairingCreate,
    PairingRead,
    PairingRespond,
    PairingWithCounterpart,
)
from app.schemas.profile import ProfileRead
from app.services import pairing as pairing_service

router = APIRouter()


@router.post("", response_model=PairingRead, status_code=201)
async def propose_pairing(
    payload: PairingCreate,
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Send a pairing request to another user (409 if one is already pending or accepted)."""
    return await pairing_service.propose(db, user_id, payload.recipient_id)


@router.get("", response_model=list[PairingWithCounterpart])
async def list_pairings(
    status: PairingStatus | None = Query(None, description="pending, accepted or declined"),
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Your pairings (sent and received), most recently updated first."""
    views = await pairing_service.list_for_user(db, user_id, status)
    return [
        PairingWithCounterpart(
            **PairingRead.model_validate(v.pairing).model_dump(),
            counterpart=ProfileRead.model_validate(v.counterpart),
        )
        for v in views
    ]


@router.post("/{pairing_id}/respond", response_model=PairingRead)
async def respond_to_pairing(
    pairing_id: uuid.UUID,
    payload: PairingRespond,
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Accept or decline a request sent to you."""
    return await pairing_service.respond(db, pairing_id, user_id, payload.decision)
