"""Shared API dependencies."""

import uuid

from fastapi import Header


async def get_acting_user_id(
    x_user_id: uuid.UUID = Header(..., description="Id of the user on whose behalf the call is made"),
) -> uuid.UUID:
    """Acting user, supplied by the authenticating layer in front of this API."""
    return x_user_id
