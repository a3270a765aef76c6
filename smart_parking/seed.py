#!/usr/bin/env python
"""Reset the database to the demo data set.

Usage: python -m smart_parking.seed [--create-tables]
"""
import asyncio
import sys

from sqlalchemy import delete

from smart_parking.db.base import Base
from smart_parking.db.models import ParkingLot, ParkingSpot
from smart_parking.db.session import AsyncSessionLocal, engine
from smart_parking.schemas.parking_lot import ParkingLotCreate
from smart_parking.security import Role, create_access_token
from smart_parking.services import lots as lot_service

DEMO_LOTS = [
    ParkingLotCreate(
        name="Mall A - Floor 1",
        location="Ground Floor, Mall A",
        total_capacity=15,
        description="Main parking area on ground floor",
    ),
    ParkingLotCreate(
        name="Mall B - Floor 2",
        location="Second Floor, Mall B",
        total_capacity=15,
        description="Upper level parking with easy access to restaurants",
    ),
]


async def seed(create_tables: bool = False):
    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        print("Clearing existing data...")
        await session.execute(delete(ParkingSpot))
        await session.execute(delete(ParkingLot))
        await session.commit()

        print("Creating parking lots...")
        for lot_data in DEMO_LOTS:
            lot = await lot_service.create_lot(session, lot_data)
            print(f"  - {lot.name}: {lot.total_capacity} spots")

    await engine.dispose()

    print()
    print("Demo tokens:")
    print(f"  admin: {create_access_token('admin@smartpark.com', Role.ADMIN)}")
    print(f"  user:  {create_access_token('john@example.com', Role.USER)}")


if __name__ == "__main__":
    asyncio.run(seed(create_tables="--create-tables" in sys.argv[1:]))
