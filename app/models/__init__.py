"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.message import Message
from app.models.pairing import Pairing
from app.models.user_profile import UserProfile

__all__ = [
    "Message",
    "Pairing",
    "UserProfile",
]
