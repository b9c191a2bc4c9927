"""Candidate finder: who can the requester propose to, best match first."""

from __future__ import annotations

import uuid
from typing import NamedTuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.enums import ACTIVE_PAIRING_STATUSES
from app.core.errors import InvalidArgument
from app.db.guard import store_operation
from app.models.pairing import Pairing
from app.models.user_profile import UserProfile
from app.services import compatibility
from app.services.profiles import get_profile


class Candidate(NamedTuple):
    user: UserProfile
    score: int


@store_operation("find_candidates")
async def find_candidates(
    db: AsyncSession,
    requester_id: uuid.UUID,
    weights: compatibility.ScoreWeights | None = None,
    limit: int | None = None,
) -> list[Candidate]:
    """
    Every other user without a pending or accepted pairing with the requester
    (either direction), scored and sorted by score desc then user id.
    Declined pairings do not exclude. Returns [] when nobody is eligible.
    """
    if limit is not None and limit < 1:
        raise InvalidArgument("limit must be at least 1.")
    requester = await get_profile(db, requester_id)
    if weights is None:
        weights = compatibility.weights_from_settings(get_settings())

    engaged = await db.execute(
        select(Pairing.requester_id, Pairing.recipient_id).where(
            or_(Pairing.requester_id == requester_id, Pairing.recipient_id == requester_id),
            Pairing.status.in_(ACTIVE_PAIRING_STATUSES),
        )
    )
    excluded: set[uuid.UUID] = {requester_id}
    for requester_side, recipient_side in engaged.all():
        excluded.add(requester_side)
        excluded.add(recipient_side)

    # Scores every eligible profile in Python, so this is a full scan of user_profiles;
    # limit only trims the sorted result
    result = await db.execute(select(UserProfile).where(UserProfile.id.not_in(excluded)))
    candidates = [
        Candidate(user=profile, score=compatibility.score(requester, profile, weights))
        for profile in result.scalars().all()
    ]
    candidates.sort(key=lambda c: (-c.score, c.user.id))
    if limit is not None:
        candidates = candidates[:limit]
    return candidates
