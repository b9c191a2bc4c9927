"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    candidates,
    health,
    messages,
    pairings,
    profiles,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(candidates.router, prefix="/candidates", tags=["candidates"])
api_router.include_router(pairings.router, prefix="/pairings", tags=["pairings"])
api_router.include_router(messages.router, prefix="/pairings", tags=["messages"])
