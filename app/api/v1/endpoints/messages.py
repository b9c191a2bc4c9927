"""Messages between the two partners of an accepted pairing."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_acting_user_id
from app.core.constants import MESSAGE_PAGE_MAX
from app.db.session import get_db
from app.schemas.message import MessageCreate, MessageRead
from app.services import conversation

router = APIRouter()


@router.get("/{pairing_id}/messages", response_model=list[MessageRead])
async def list_messages(
    pairing_id: uuid.UUID,
    after: int | None = Query(None, ge=0, description="Only messages with seq greater than this"),
    limit: int | None = Query(None, ge=1, le=MESSAGE_PAGE_MAX),
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Conversation oldest first. Pass the last seen seq as `after` to poll for new messages."""
    return await conversation.list_messages(db, pairing_id, user_id, after=after, limit=limit)


@router.post("/{pairing_id}/messages", response_model=MessageRead, status_code=201)
async def post_message(
    pairing_id: uuid.UUID,
    payload: MessageCreate,
    user_id: uuid.UUID = Depends(get_acting_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await conversation.post_message(
        db, pairing_id, user_id, payload.content, client_token=payload.client_token
    )
