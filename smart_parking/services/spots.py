"""Parking spot operations, scoped by lot."""

import logging
import random
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from smart_parking.config import settings
from smart_parking.db.models import ParkingSpot, SpotStatus
from smart_parking.db.models.utils import utcnow
from smart_parking.exceptions import ConflictError, NotFoundError
from smart_parking.schemas.parking_spot import (
    LotHeader,
    LotSpots,
    ParkingSpotCreate,
    ParkingSpotResponse,
    SpotSummary,
)
from smart_parking.services.lots import fetch_lot

logger = logging.getLogger(__name__)

# Statuses a simulated sensor reading can produce
SIMULATED_STATUSES = [SpotStatus.AVAILABLE, SpotStatus.OCCUPIED]


async def fetch_spot(db: AsyncSession, spot_id: UUID, with_lot: bool = False) -> ParkingSpot:
    """Load a spot or raise NotFoundError."""
    query = select(ParkingSpot).where(ParkingSpot.id == spot_id)
    if with_lot:
        query = query.options(selectinload(ParkingSpot.lot))

    result = await db.execute(query)
    spot = result.scalar_one_or_none()

    if not spot:
        raise NotFoundError("Parking slot not found")

    return spot


def sort_by_label(spots: List[ParkingSpot]) -> List[ParkingSpot]:
    # Code point order; database collations may fold case or follow locale
    return sorted(spots, key=lambda spot: spot.label)


def summarize(spots: List[ParkingSpot]) -> SpotSummary:
    summary = SpotSummary(total=len(spots))
    for spot in spots:
        if spot.status == SpotStatus.AVAILABLE.value:
            summary.available += 1
        elif spot.status == SpotStatus.OCCUPIED.value:
            summary.occupied += 1
        elif spot.status == SpotStatus.RESERVED.value:
            summary.reserved += 1
    return summary


async def list_spots_for_lot(db: AsyncSession, lot_id: UUID) -> LotSpots:
    """All spots of a lot ordered by label, with a per-status tally."""
    lot = await fetch_lot(db, lot_id)

    result = await db.execute(select(ParkingSpot).where(ParkingSpot.lot_id == lot.id))
    spots = sort_by_label(result.scalars().all())

    return LotSpots(
        parking_lot=LotHeader.model_validate(lot),
        summary=summarize(spots),
        slots=[ParkingSpotResponse.model_validate(spot) for spot in spots],
    )


async def get_spot(db: AsyncSession, spot_id: UUID) -> ParkingSpot:
    return await fetch_spot(db, spot_id, with_lot=True)


async def create_spot(db: AsyncSession, spot_data: ParkingSpotCreate) -> ParkingSpot:
    """Add a single spot to an existing lot."""
    lot = await fetch_lot(db, spot_data.lot_id)

    existing = await db.scalar(
        select(ParkingSpot.id).where(
            ParkingSpot.lot_id == lot.id,
            ParkingSpot.label == spot_data.label,
        )
    )
    if existing:
        raise ConflictError("Spot number already exists in this parking lot")

    spot = ParkingSpot(
        lot_id=lot.id,
        label=spot_data.label,
        status=spot_data.status.value,
        floor=spot_data.floor,
        section=spot_data.section,
    )
    db.add(spot)

    try:
        await db.commit()
    except IntegrityError:
        # Another request inserted the same label between the check and the commit
        await db.rollback()
        raise ConflictError("Spot number already exists in this parking lot")

    await db.refresh(spot)
    logger.info(f"Created spot {spot.label} in parking lot {lot.id}")
    return spot


async def set_spot_status(db: AsyncSession, spot_id: UUID, new_status: SpotStatus) -> ParkingSpot:
    """Overwrite a spot's status and refresh its last-updated time."""
    spot = await fetch_spot(db, spot_id)

    previous = spot.status
    spot.status = SpotStatus(new_status).value
    # onupdate only fires when a column changes, so set it explicitly
    spot.last_updated = utcnow()
    await db.commit()
    await db.refresh(spot)
    logger.info(f"Spot {spot.id} status {previous} -> {spot.status}")
    return spot


async def delete_spot(db: AsyncSession, spot_id: UUID) -> None:
    spot = await fetch_spot(db, spot_id)
    await db.delete(spot)
    await db.commit()
    logger.info(f"Deleted spot {spot_id}")


async def simulate(db: AsyncSession, lot_id: UUID, rng: random.Random) -> List[ParkingSpot]:
    """Randomly flip spot statuses, standing in for a sensor feed.

    Each spot is reassigned with probability SIMULATION_CHANGE_PROBABILITY
    and committed on its own. RESERVED is never produced.
    """
    result = await db.execute(select(ParkingSpot).where(ParkingSpot.lot_id == lot_id))
    spots = sort_by_label(result.scalars().all())

    if not spots:
        raise NotFoundError("No slots found for this parking lot")

    updates = []
    for spot in spots:
        if rng.random() < settings.SIMULATION_CHANGE_PROBABILITY:
            spot.status = rng.choice(SIMULATED_STATUSES).value
            spot.last_updated = utcnow()
            await db.commit()
            updates.append(spot)

    logger.info(f"Simulated update for {len(updates)} of {len(spots)} spots in lot {lot_id}")
    return updates
