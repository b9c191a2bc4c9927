"""Pairing lifecycle: propose, respond, list.

State machine: pending -> accepted | declined. Both outcomes are terminal and
pairings are never deleted, so a declined pairing stays as history while the
same two users may open a fresh one.

Serialization:
- propose holds the lock for the normalised user pair across check-then-create;
  the partial unique index on (user_low_id, user_high_id) backs it up across
  processes.
- respond holds the per-pairing lock and applies a compare-and-set UPDATE
  (``WHERE status = 'pending'``) so exactly one concurrent answer wins.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import NamedTuple

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.core.enums import ACTIVE_PAIRING_STATUSES, PairingDecision, PairingStatus
from app.core.errors import Conflict, InvalidArgument, NotFound, PermissionDenied
from app.core.locks import pair_locks, pairing_locks
from app.db.guard import store_operation
from app.models.pairing import Pairing, pair_key
from app.models.user_profile import UserProfile
from app.services import compatibility
from app.services.profiles import get_profile

logger = logging.getLogger(__name__)

_DECISION_STATUS = {
    PairingDecision.ACCEPT: PairingStatus.ACCEPTED,
    PairingDecision.DECLINE: PairingStatus.DECLINED,
}


class PairingView(NamedTuple):
    """A pairing from one participant's side."""

    pairing: Pairing
    counterpart: UserProfile


async def get_pairing(db: AsyncSession, pairing_id: uuid.UUID) -> Pairing:
    """Fresh read of a pairing (bypasses stale identity-map state)."""
    result = await db.execute(
        select(Pairing)
        .where(Pairing.id == pairing_id)
        .execution_options(populate_existing=True)
    )
    pairing = result.scalar_one_or_none()
    if pairing is None:
        raise NotFound(f"Pairing {pairing_id} not found.")
    return pairing


@store_operation("propose")
async def propose(
    db: AsyncSession,
    requester_id: uuid.UUID,
    recipient_id: uuid.UUID,
    weights: compatibility.ScoreWeights | None = None,
) -> Pairing:
    """Open a pending pairing from requester to recipient with a frozen compatibility score."""
    if requester_id == recipient_id:
        raise InvalidArgument("You cannot send a pairing request to yourself.")
    requester = await get_profile(db, requester_id)
    recipient = await get_profile(db, recipient_id)
    if weights is None:
        weights = compatibility.weights_from_settings(get_settings())

    low, high = pair_key(requester_id, recipient_id)
    async with pair_locks.hold((low, high)):
        result = await db.execute(
            select(Pairing.status)
            .where(
                Pairing.user_low_id == low,
                Pairing.user_high_id == high,
                Pairing.status.in_(ACTIVE_PAIRING_STATUSES),
            )
            .limit(1)
        )
        open_status = result.scalar_one_or_none()
        if open_status is not None:
            logger.info("Rejected duplicate proposal %s -> %s (%s)", requester_id, recipient_id, open_status.value)
            raise Conflict(
                "You are already partners with this user."
                if open_status is PairingStatus.ACCEPTED
                else "A pairing request with this user is already pending."
            )

        pairing = Pairing(
            requester_id=requester_id,
            recipient_id=recipient_id,
            user_low_id=low,
            user_high_id=high,
            status=PairingStatus.PENDING,
            compatibility_score=compatibility.score(requester, recipient, weights),
        )
        db.add(pairing)
        try:
            await db.commit()
        except IntegrityError as exc:
            # Another process won the race on the partial unique index
            await db.rollback()
            raise Conflict("A pairing request with this user is already pending.") from exc

    logger.info(
        "Pairing %s proposed %s -> %s (score %d)",
        pairing.id,
        requester_id,
        recipient_id,
        pairing.compatibility_score,
    )
    return pairing


@store_operation("respond")
async def respond(
    db: AsyncSession,
    pairing_id: uuid.UUID,
    acting_user_id: uuid.UUID,
    decision: PairingDecision | str,
) -> Pairing:
    """Accept or decline a pending pairing. Only the recipient may answer, and only once."""
    try:
        decision = PairingDecision(decision)
    except ValueError as exc:
        raise InvalidArgument(f"Unknown decision {decision!r}; expected 'accept' or 'decline'.") from exc
    new_status = _DECISION_STATUS[decision]

    async with pairing_locks.hold(pairing_id):
        pairing = await get_pairing(db, pairing_id)
        if acting_user_id != pairing.recipient_id:
            raise PermissionDenied("Only the recipient can respond to this pairing request.")
        if pairing.status is not PairingStatus.PENDING:
            raise Conflict(f"This pairing request was already {pairing.status.value}.")

        result = await db.execute(
            update(Pairing)
            .where(Pairing.id == pairing_id, Pairing.status == PairingStatus.PENDING)
            .values(status=new_status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await db.rollback()
            raise Conflict("This pairing request was already answered.")
        # Reload inside the transaction; nothing touches the store after commit
        await db.refresh(pairing)
        await db.commit()

    logger.info("Pairing %s %s by %s", pairing_id, new_status.value, acting_user_id)
    return pairing


@store_operation("list_pairings")
async def list_for_user(
    db: AsyncSession,
    user_id: uuid.UUID,
    status: PairingStatus | None = None,
) -> list[PairingView]:
    """Pairings involving ``user_id``, most recently updated first, with the other participant's profile."""
    await get_profile(db, user_id)
    stmt = (
        select(Pairing)
        .where(or_(Pairing.requester_id == user_id, Pairing.recipient_id == user_id))
        .options(selectinload(Pairing.requester), selectinload(Pairing.recipient))
        .order_by(Pairing.updated_at.desc(), Pairing.created_at.desc(), Pairing.id)
    )
    if status is not None:
        stmt = stmt.where(Pairing.status == PairingStatus(status))
    result = await db.execute(stmt)
    return [
        PairingView(p, p.recipient if p.requester_id == user_id else p.requester)
        for p in result.scalars().all()
    ]
