"""ParkingLot endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from smart_parking.api.deps import get_current_user, get_db_session, require_admin
from smart_parking.schemas.common import ApiResponse
from smart_parking.schemas.parking_lot import (
    ParkingLotCreate,
    ParkingLotResponse,
    ParkingLotUpdate,
    ParkingLotWithAvailability,
)
from smart_parking.security import CurrentUser
from smart_parking.services import lots as lot_service

router = APIRouter()


@router.get(
    "/",
    response_model=ApiResponse[List[ParkingLotWithAvailability]],
    response_model_exclude_none=True,
)
async def list_parking_lots(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    """List all parking lots with available and occupied counts."""
    lots = await lot_service.list_lots(db)
    return ApiResponse(data=lots, count=len(lots))


@router.get(
    "/{lot_id}",
    response_model=ApiResponse[ParkingLotWithAvailability],
    response_model_exclude_none=True,
)
async def get_parking_lot(
    lot_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
):
    """Get a specific parking lot by ID."""
    lot = await lot_service.get_lot(db, lot_id)
    return ApiResponse(data=lot)


@router.post(
    "/",
    response_model=ApiResponse[ParkingLotResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_parking_lot(
    lot_data: ParkingLotCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    """Create a parking lot and generate its spots."""
    lot = await lot_service.create_lot(db, lot_data)
    return ApiResponse(
        data=ParkingLotResponse.model_validate(lot),
        message="Parking lot created successfully with auto-generated slots",
    )


@router.put(
    "/{lot_id}",
    response_model=ApiResponse[ParkingLotResponse],
    response_model_exclude_none=True,
)
async def update_parking_lot(
    lot_id: UUID,
    lot_data: ParkingLotUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    """Update a parking lot. Fields left out of the body are unchanged."""
    lot = await lot_service.update_lot(db, lot_id, lot_data)
    return ApiResponse(
        data=ParkingLotResponse.model_validate(lot),
        message="Parking lot updated successfully",
    )


@router.delete(
    "/{lot_id}",
    response_model=ApiResponse,
    response_model_exclude_none=True,
)
async def delete_parking_lot(
    lot_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
):
    """Delete a parking lot together with its spots."""
    await lot_service.delete_lot(db, lot_id)
    return ApiResponse(message="Parking lot and associated spots deleted successfully")
