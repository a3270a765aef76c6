"""ParkingLot schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from smart_parking.schemas.common import CamelModel


class ParkingLotBase(CamelModel):
    """Base parking lot schema."""

    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    total_capacity: int = Field(..., ge=1)
    description: Optional[str] = None


class ParkingLotCreate(ParkingLotBase):
    """Schema for creating a parking lot.

    ``section`` sets the letter used for generated spot labels. When omitted
    it is derived from the lot name.
    """

    section: Optional[str] = Field(None, min_length=1, max_length=64)


class ParkingLotUpdate(CamelModel):
    """Schema for updating a parking lot. Only fields sent are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    total_capacity: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None


class ParkingLotResponse(CamelModel):
    """Schema for parking lot response."""

    id: UUID
    name: str
    location: str
    total_capacity: int
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ParkingLotWithAvailability(ParkingLotResponse):
    """Parking lot with spot counts computed at read time."""

    available_slots: int
    occupied_slots: int

    @classmethod
    def from_lot(cls, lot, available: int) -> "ParkingLotWithAvailability":
        base = ParkingLotResponse.model_validate(lot)
        return cls(
            **base.model_dump(),
            available_slots=available,
            occupied_slots=lot.total_capacity - available,
        )
