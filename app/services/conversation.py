"""Conversation log for accepted pairings.

Appends run under the same per-pairing lock as status transitions. Each message
gets seq = previous seq + 1, and a created_at no earlier than its predecessor's,
so (seq) and (created_at, seq) give the same order.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import MAX_MESSAGE_LENGTH
from app.core.enums import PairingStatus
from app.core.errors import Conflict, InvalidArgument, PermissionDenied, Unavailable
from app.core.locks import pairing_locks
from app.db.guard import store_operation
from app.models.message import Message
from app.services.pairing import get_pairing

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; treat them as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@store_operation("post_message")
async def post_message(
    db: AsyncSession,
    pairing_id: uuid.UUID,
    sender_id: uuid.UUID,
    content: str,
    client_token: str | None = None,
) -> Message:
    """Append a message to an accepted pairing.

    With ``client_token``, a resend by the same sender returns the message
    already stored under that token instead of appending a second one.
    """
    if content is None or not content.strip():
        raise InvalidArgument("Message content cannot be empty.")
    if len(content) > MAX_MESSAGE_LENGTH:
        raise InvalidArgument(f"Message content is limited to {MAX_MESSAGE_LENGTH} characters.")

    async with pairing_locks.hold(pairing_id):
        pairing = await get_pairing(db, pairing_id)
        if not pairing.is_participant(sender_id):
            raise PermissionDenied("Only the two partners in this pairing can send messages.")
        if pairing.status is not PairingStatus.ACCEPTED:
            raise Conflict(
                f"Messages can only be sent on an accepted pairing (this one is {pairing.status.value})."
            )

        if client_token is not None:
            result = await db.execute(
                select(Message).where(
                    Message.pairing_id == pairing_id,
                    Message.sender_id == sender_id,
                    Message.client_token == client_token,
                )
            )
            existing = result.scalar_one_or_none()
            if existing is not None:
                logger.info("Pairing %s: resend of token %s returned message %d", pairing_id, client_token, existing.seq)
                return existing

        result = await db.execute(
            select(Message.seq, Message.created_at)
            .where(Message.pairing_id == pairing_id)
            .order_by(Message.seq.desc())
            .limit(1)
        )
        last = result.first()
        seq = 1
        created_at = datetime.now(timezone.utc)
        if last is not None:
            seq = last.seq + 1
            created_at = max(created_at, _as_utc(last.created_at))

        message = Message(
            pairing_id=pairing_id,
            sender_id=sender_id,
            seq=seq,
            content=content,
            client_token=client_token,
            created_at=created_at,
        )
        db.add(message)
        try:
            await db.commit()
        except IntegrityError as exc:
            # seq or token taken by a writer in another process
            await db.rollback()
            raise Unavailable("Another message was appended at the same time; please retry.") from exc

    logger.info("Pairing %s: message %d from %s", pairing_id, seq, sender_id)
    return message


@store_operation("list_messages")
async def list_messages(
    db: AsyncSession,
    pairing_id: uuid.UUID,
    requester_id: uuid.UUID,
    after: int | None = None,
    limit: int | None = None,
) -> list[Message]:
    """Messages oldest first. ``after`` is a seq cursor: only later messages are returned."""
    pairing = await get_pairing(db, pairing_id)
    if not pairing.is_participant(requester_id):
        raise PermissionDenied("Only the two partners in this pairing can read its messages.")
    if limit is not None and limit < 1:
        raise InvalidArgument("limit must be at least 1.")

    stmt = select(Message).where(Message.pairing_id == pairing_id).order_by(Message.seq)
    if after is not None:
        stmt = stmt.where(Message.seq > after)
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())
