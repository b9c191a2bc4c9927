"""Pairing model: an accountability-partner request between two users."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import PairingStatus
from app.db.base import Base

# Partial-index predicate: at most one open pairing per unordered user pair
ACTIVE_STATUS_PREDICATE = text("status IN ('pending', 'accepted')")


def pair_key(a: uuid.UUID, b: uuid.UUID) -> tuple[uuid.UUID, uuid.UUID]:
    """Normalised (low, high) key for the unordered pair {a, b}."""
    return (a, b) if a <= b else (b, a)


class Pairing(Base):
    """Requester proposes, recipient accepts or declines. Rows are never deleted.

    user_low_id / user_high_id duplicate the participants in sorted order so the
    database can enforce uniqueness of open pairings regardless of direction.
    """

    __tablename__ = "pairings"
    __table_args__ = (
        CheckConstraint("requester_id <> recipient_id", name="ck_pairings_distinct_users"),
        CheckConstraint(
            "compatibility_score >= 0 AND compatibility_score <= 100",
            name="ck_pairings_score_range",
        ),
        Index(
            "uq_pairings_active_pair",
            "user_low_id",
            "user_high_id",
            unique=True,
            postgresql_where=ACTIVE_STATUS_PREDICATE,
            sqlite_where=ACTIVE_STATUS_PREDICATE,
        ),
        Index("ix_pairings_requester_updated", "requester_id", "updated_at"),
        Index("ix_pairings_recipient_updated", "recipient_id", "updated_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    requester_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False
    )
    recipient_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False
    )
    user_low_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    user_high_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    status: Mapped[PairingStatus] = mapped_column(
        Enum(
            PairingStatus,
            name="pairing_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=PairingStatus.PENDING,
    )
    compatibility_score: Mapped[int] = mapped_column(Integer, nullable=False)  # frozen at proposal
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    requester: Mapped["UserProfile"] = relationship("UserProfile", foreign_keys=[requester_id])
    recipient: Mapped["UserProfile"] = relationship("UserProfile", foreign_keys=[recipient_id])
    messages: Mapped[list["Message"]] = relationship(
        "Message", back_populates="pairing", order_by="Message.seq"
    )

    def is_participant(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.requester_id, self.recipient_id)

    def counterpart_id(self, user_id: uuid.UUID) -> uuid.UUID:
        return self.recipient_id if user_id == self.requester_id else self.requester_id
