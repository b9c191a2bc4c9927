"""Message schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import MAX_CLIENT_TOKEN_LENGTH


class MessageCreate(BaseModel):
    content: str
    client_token: str | None = Field(
        None,
        min_length=1,
        max_length=MAX_CLIENT_TOKEN_LENGTH,
        description="Optional sender-chosen key; resending with the same key returns the stored message.",
    )


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    pairing_id: UUID
    sender_id: UUID
    seq: int
    content: str
    created_at: datetime
