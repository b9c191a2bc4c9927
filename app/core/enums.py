"""Shared enums for models and API."""

from enum import Enum


class PairingStatus(str, Enum):
    """Lifecycle state of a pairing. accepted and declined are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class PairingDecision(str, Enum):
    """Recipient's answer to a pending pairing."""

    ACCEPT = "accept"
    DECLINE = "decline"


# Statuses that block a new proposal between the same two users
ACTIVE_PAIRING_STATUSES = (PairingStatus.PENDING, PairingStatus.ACCEPTED)
