"""Message model: one immutable entry in an accepted pairing's conversation."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Message(Base):
    """seq is the per-pairing order key: 1, 2, 3, ... with no gaps.
    created_at never decreases along seq within a pairing."""

    __tablename__ = "messages"
    __table_args__ = (
        UniqueConstraint("pairing_id", "seq", name="uq_messages_pairing_seq"),
        UniqueConstraint("pairing_id", "sender_id", "client_token", name="uq_messages_client_token"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    pairing_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("pairings.id", ondelete="CASCADE"), nullable=False
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False
    )
    seq: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    client_token: Mapped[str | None] = mapped_column(String(64), nullable=True)  # sender-chosen dedupe key
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    pairing: Mapped["Pairing"] = relationship("Pairing", back_populates="messages")
