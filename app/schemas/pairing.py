"""Pairing schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.core.enums import PairingDecision, PairingStatus
from app.schemas.profile import ProfileRead


class PairingCreate(BaseModel):
    recipient_id: UUID


class PairingRespond(BaseModel):
    decision: PairingDecision


class PairingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    requester_id: UUID
    recipient_id: UUID
    status: PairingStatus
    compatibility_score: int
    created_at: datetime
    updated_at: datetime


class PairingWithCounterpart(PairingRead):
    """Pairing as seen by one participant, with the other participant's profile."""

    counterpart: ProfileRead
