"""Parking lot operations.

Lots own their spots: creating a lot provisions ``total_capacity`` spots in
the same transaction, and deleting a lot removes its spots first. Availability
figures are always counted from the live spot rows.
"""

import logging
import math
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smart_parking.config import settings
from smart_parking.db.models import ParkingLot, ParkingSpot, SpotStatus
from smart_parking.db.models.utils import utcnow
from smart_parking.exceptions import NotFoundError, ValidationError
from smart_parking.schemas.parking_lot import (
    ParkingLotCreate,
    ParkingLotUpdate,
    ParkingLotWithAvailability,
)

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "A"
DEFAULT_FLOOR = "Ground Floor"
LABEL_MAX_LENGTH = ParkingSpot.__table__.c.label.type.length

# Columns that cannot be cleared by sending null in an update
_REQUIRED_FIELDS = {"name", "location", "total_capacity"}


def derive_section(name: str, section: Optional[str] = None) -> str:
    """Pick the section letter used for generated spot labels.

    An explicit section wins. Otherwise the character five positions after
    "Mall" in the name is used, so "Mall A - Floor 1" yields "A".
    """
    if section:
        return section
    index = name.find("Mall")
    if index != -1:
        candidate = name[index + 5:index + 6].strip()
        if candidate:
            return candidate
    return DEFAULT_SECTION


def derive_floor(location: str) -> str:
    """Floor label for generated spots, taken from the location text."""
    if "Floor" in location:
        return location.split(",")[0].strip()
    return DEFAULT_FLOOR


def initial_available_count(total_capacity: int, ratio: Optional[float] = None) -> int:
    if ratio is None:
        ratio = settings.PROVISION_AVAILABLE_RATIO
    return math.floor(total_capacity * ratio)


def build_spots(lot: ParkingLot, section: str) -> List[ParkingSpot]:
    """Generate the initial spots for a new lot, in label order."""
    available = initial_available_count(lot.total_capacity)
    floor = derive_floor(lot.location)
    return [
        ParkingSpot(
            lot_id=lot.id,
            label=f"{section}{index}",
            status=(SpotStatus.AVAILABLE if index <= available else SpotStatus.OCCUPIED).value,
            floor=floor,
            section=section,
        )
        for index in range(1, lot.total_capacity + 1)
    ]


async def count_available(db: AsyncSession, lot_id: UUID) -> int:
    count = await db.scalar(
        select(func.count(ParkingSpot.id)).where(
            ParkingSpot.lot_id == lot_id,
            ParkingSpot.status == SpotStatus.AVAILABLE.value,
        )
    )
    return count or 0


async def fetch_lot(db: AsyncSession, lot_id: UUID) -> ParkingLot:
    """Load a lot or raise NotFoundError."""
    result = await db.execute(select(ParkingLot).where(ParkingLot.id == lot_id))
    lot = result.scalar_one_or_none()

    if not lot:
        raise NotFoundError("Parking lot not found")

    return lot


async def list_lots(db: AsyncSession) -> List[ParkingLotWithAvailability]:
    """List all parking lots with live availability."""
    result = await db.execute(select(ParkingLot).order_by(ParkingLot.created_at.desc()))
    lots = result.scalars().all()

    lots_with_availability = []
    for lot in lots:
        available = await count_available(db, lot.id)
        lots_with_availability.append(ParkingLotWithAvailability.from_lot(lot, available))

    return lots_with_availability


async def get_lot(db: AsyncSession, lot_id: UUID) -> ParkingLotWithAvailability:
    lot = await fetch_lot(db, lot_id)
    available = await count_available(db, lot.id)
    return ParkingLotWithAvailability.from_lot(lot, available)


async def create_lot(db: AsyncSession, lot_data: ParkingLotCreate) -> ParkingLot:
    """Create a lot together with its generated spots.

    Both are written in one transaction, so a failure while inserting the
    spots leaves no lot behind.
    """
    section = derive_section(lot_data.name, lot_data.section)
    longest_label = f"{section}{lot_data.total_capacity}"
    if len(longest_label) > LABEL_MAX_LENGTH:
        raise ValidationError(
            f"section: spot labels such as '{longest_label}' exceed "
            f"{LABEL_MAX_LENGTH} characters"
        )

    lot = ParkingLot(**lot_data.model_dump(exclude={"section"}))
    db.add(lot)

    try:
        # Assigns the primary key before the spots reference it
        await db.flush()
        spots = build_spots(lot, section)
        db.add_all(spots)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(lot)
    logger.info(f"Created parking lot {lot.id} ({lot.name}) with {len(spots)} spots")
    return lot


async def update_lot(db: AsyncSession, lot_id: UUID, lot_data: ParkingLotUpdate) -> ParkingLot:
    """Apply the fields present in ``lot_data``; everything else is kept."""
    lot = await fetch_lot(db, lot_id)

    update_data = lot_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(lot, field, value)
    # onupdate only fires when a column changes, so set it explicitly
    lot.updated_at = utcnow()

    await db.commit()
    await db.refresh(lot)
    logger.info(f"Updated parking lot {lot.id}: {sorted(update_data)}")
    return lot


async def delete_lot(db: AsyncSession, lot_id: UUID) -> None:
    """Delete a lot and every spot that belongs to it."""
    lot = await fetch_lot(db, lot_id)

    try:
        result = await db.execute(delete(ParkingSpot).where(ParkingSpot.lot_id == lot.id))
        await db.delete(lot)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Deleted parking lot {lot_id} and {result.rowcount} spots")
