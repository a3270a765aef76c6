"""Database models package."""

from smart_parking.db.base import Base
from smart_parking.db.models.parking_lot import ParkingLot
from smart_parking.db.models.parking_spot import ParkingSpot, SpotStatus

__all__ = [
    "Base",
    "ParkingLot",
    "ParkingSpot",
    "SpotStatus",
]
