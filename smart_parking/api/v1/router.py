"""API v1 router."""

from fastapi import APIRouter

from smart_parking.api.v1.endpoints import parking_lots, slots

api_router = APIRouter()

api_router.include_router(parking_lots.router, prefix="/lots", tags=["lots"])
api_router.include_router(slots.router, prefix="/slots", tags=["slots"])


@api_router.get("/health", tags=["health"])
async def api_health():
    """Health check endpoint under the API prefix."""
    return {"status": "healthy"}
