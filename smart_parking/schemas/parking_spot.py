"""ParkingSpot schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from smart_parking.db.models.parking_spot import SpotStatus
from smart_parking.schemas.common import CamelModel


class ParkingSpotCreate(CamelModel):
    """Schema for creating a parking spot.

    ``parkingLot`` and ``spotNumber`` are accepted for older clients.
    """

    lot_id: UUID = Field(..., validation_alias=AliasChoices("lotId", "parkingLot", "lot_id"))
    label: str = Field(
        ...,
        min_length=1,
        max_length=64,
        validation_alias=AliasChoices("label", "spotNumber"),
    )
    status: SpotStatus = SpotStatus.AVAILABLE
    floor: Optional[str] = Field(None, max_length=255)
    section: Optional[str] = Field(None, max_length=64)


class ParkingSpotStatusUpdate(CamelModel):
    """Schema for setting a spot status."""

    status: SpotStatus


class ParkingSpotResponse(CamelModel):
    """Schema for parking spot response."""

    id: UUID
    lot_id: UUID
    label: str
    status: SpotStatus
    floor: Optional[str] = None
    section: Optional[str] = None
    last_updated: datetime
    created_at: datetime


class LotReference(CamelModel):
    """Owning lot attached to a single spot."""

    id: UUID
    name: str
    location: str


class ParkingSpotWithLot(ParkingSpotResponse):
    """Parking spot with its lot's name and location."""

    lot: LotReference


class LotHeader(LotReference):
    total_capacity: int


class SpotSummary(CamelModel):
    """Spot counts per status for one lot."""

    total: int = 0
    available: int = 0
    occupied: int = 0
    reserved: int = 0


class LotSpots(CamelModel):
    """All spots of a lot with a status tally."""

    parking_lot: LotHeader
    summary: SpotSummary
    slots: List[ParkingSpotResponse]
