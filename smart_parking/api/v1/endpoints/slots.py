"""Parking slot endpoints."""

import random
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from smart_parking.api.deps import get_current_user, get_db_session, get_rng, require_admin
from smart_parking.schemas.common import ApiResponse
from smart_parking.schemas.parking_spot import (
    LotSpots,
    ParkingSpotCreate,
    ParkingSpotResponse,
    ParkingSpotStatusUpdate,
    ParkingSpotWithLot,
)
from smart_parking.security import CurrentUser
from smart_parking.services import spots as spot_service

router = APIRouter()


@router.get(
    "/lot/{lot_id}",
    response_model=ApiResponse[LotSpots],
    response_model_exclude_none=True,
)
async def list_slots_for_lot(
    lot_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    """List the slots of a parking lot with a status summary."""
    lot_spots = await spot_service.list_spots_for_lot(db, lot_id)
    return ApiResponse(data=lot_spots)


@router.get(
    "/{slot_id}",
    response_model=ApiResponse[ParkingSpotWithLot],
    response_model_exclude_none=True,
)
async def get_slot(
    slot_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    """Get a specific slot with its lot's name and location."""
    spot = await spot_service.get_spot(db, slot_id)
    return ApiResponse(data=ParkingSpotWithLot.model_validate(spot))


@router.post(
    "/",
    response_model=ApiResponse[ParkingSpotResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_slot(
    slot_data: ParkingSpotCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    """Create a slot in an existing lot."""
    spot = await spot_service.create_spot(db, slot_data)
    return ApiResponse(
        data=ParkingSpotResponse.model_validate(spot),
        message="Parking slot created successfully",
    )


@router.put(
    "/{slot_id}/status",
    response_model=ApiResponse[ParkingSpotResponse],
    response_model_exclude_none=True,
)
async def update_slot_status(
    slot_id: UUID,
    status_data: ParkingSpotStatusUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    """Set the status of a slot."""
    spot = await spot_service.set_spot_status(db, slot_id, status_data.status)
    return ApiResponse(
        data=ParkingSpotResponse.model_validate(spot),
        message="Slot status updated successfully",
    )


@router.delete(
    "/{slot_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
)
async def delete_slot(
    slot_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    """Delete a slot."""
    await spot_service.delete_spot(db, slot_id)
    return ApiResponse(message="Parking slot deleted successfully")


@router.post(
    "/simulate/{lot_id}",
    response_model=ApiResponse[List[ParkingSpotResponse]],
    response_model_exclude_none=True,
)
async def simulate_slot_update(
    lot_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
    rng: random.Random = Depends(get_rng),
):
    """Randomly change slot statuses in a lot, as a sensor feed would."""
    updates = await spot_service.simulate(db, lot_id, rng)
    return ApiResponse(
        data=[ParkingSpotResponse.model_validate(spot) for spot in updates],
        message=f"Simulated update for {len(updates)} slots",
        count=len(updates),
    )
