"""Schemas package."""

from smart_parking.schemas.common import ApiResponse
from smart_parking.schemas.parking_lot import (
    ParkingLotCreate,
    ParkingLotResponse,
    ParkingLotUpdate,
    ParkingLotWithAvailability,
)
from smart_parking.schemas.parking_spot import (
    LotSpots,
    ParkingSpotCreate,
    ParkingSpotResponse,
    ParkingSpotStatusUpdate,
    ParkingSpotWithLot,
    SpotSummary,
)

__all__ = [
    "ApiResponse",
    "ParkingLotCreate",
    "ParkingLotResponse",
    "ParkingLotUpdate",
    "ParkingLotWithAvailability",
    "LotSpots",
    "ParkingSpotCreate",
    "ParkingSpotResponse",
    "ParkingSpotStatusUpdate",
    "ParkingSpotWithLot",
    "SpotSummary",
]
