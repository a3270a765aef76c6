"""Tests for parking lot endpoints."""

from datetime import datetime
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from smart_parking.db.models import ParkingLot, ParkingSpot, SpotStatus
from smart_parking.services.lots import LABEL_MAX_LENGTH

MISSING_ID = "00000000-0000-0000-0000-000000000000"


def naive(timestamp: str) -> datetime:
    # SQLite hands back naive UTC timestamps once a row is reloaded
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).replace(tzinfo=None)


async def count_lots(db_session: AsyncSession) -> int:
    return await db_session.scalar(select(func.count(ParkingLot.id)))


async def spots_of(db_session: AsyncSession, lot_id: str):
    result = await db_session.execute(
        select(ParkingSpot).where(ParkingSpot.lot_id == UUID(lot_id)).order_by(ParkingSpot.created_at)
    )
    return result.scalars().all()


@pytest.mark.asyncio
async def test_create_parking_lot(async_client: AsyncClient, admin_headers: dict):
    """Test creating a parking lot and its generated spots."""
    response = await async_client.post(
        "/api/v1/lots/",
        json={
            "name": "Mall A - Floor 1",
            "location": "Ground Floor, Mall A",
            "totalCapacity": 15,
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Parking lot created successfully with auto-generated slots"
    data = body["data"]
    assert data["name"] == "Mall A - Floor 1"
    assert data["totalCapacity"] == 15
    assert "id" in data
    assert "createdAt" in data

    response = await async_client.get(f"/api/v1/slots/lot/{data['id']}", headers=admin_headers)
    assert response.status_code == 200
    summary = response.json()["data"]["summary"]
    assert summary == {"total": 15, "available": 10, "occupied": 5, "reserved": 0}


@pytest.mark.asyncio
async def test_create_parking_lot_spot_layout(create_lot, db_session: AsyncSession):
    """Test that generated spots follow the label, status and floor rules."""
    lot = await create_lot(name="Mall B - Floor 2", location="Second Floor, Mall B", totalCapacity=7)

    spots = sorted(await spots_of(db_session, lot["id"]), key=lambda spot: int(spot.label[1:]))
    assert [spot.label for spot in spots] == [f"B{i}" for i in range(1, 8)]
    # floor(7 * 0.67) == 4
    assert [spot.status for spot in spots] == ["AVAILABLE"] * 4 + ["OCCUPIED"] * 3
    assert {spot.floor for spot in spots} == {"Second Floor"}
    assert {spot.section for spot in spots} == {"B"}


@pytest.mark.asyncio
async def test_create_parking_lot_explicit_section(create_lot, db_session: AsyncSession):
    """Test that an explicit section overrides the name-derived one."""
    lot = await create_lot(name="Riverside", location="Downtown", totalCapacity=3, section="R")

    spots = await spots_of(db_session, lot["id"])
    assert sorted(spot.label for spot in spots) == ["R1", "R2", "R3"]
    assert {spot.floor for spot in spots} == {"Ground Floor"}


@pytest.mark.asyncio
async def test_create_parking_lot_name_without_mall(create_lot, db_session: AsyncSession):
    """Test the default section for names that do not mention a mall."""
    lot = await create_lot(name="Airport Long Stay", location="Terminal 2", totalCapacity=2)

    spots = await spots_of(db_session, lot["id"])
    assert sorted(spot.label for spot in spots) == ["A1", "A2"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"location": "Ground Floor, Mall A", "totalCapacity": 10},
        {"name": "Mall A", "totalCapacity": 10},
        {"name": "Mall A", "location": "Ground Floor, Mall A"},
        {"name": "Mall A", "location": "Ground Floor, Mall A", "totalCapacity": 0},
        {"name": "   ", "location": "Ground Floor, Mall A", "totalCapacity": 10},
    ],
)
async def test_create_parking_lot_invalid(
    async_client: AsyncClient,
    admin_headers: dict,
    db_session: AsyncSession,
    body: dict,
):
    """Test that incomplete lot data is rejected."""
    response = await async_client.post("/api/v1/lots/", json=body, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["message"]
    assert await count_lots(db_session) == 0


@pytest.mark.asyncio
async def test_create_parking_lot_requires_admin(
    async_client: AsyncClient,
    user_headers: dict,
    db_session: AsyncSession,
):
    """Test that a regular user cannot create a lot."""
    response = await async_client.post(
        "/api/v1/lots/",
        json={"name": "Mall C", "location": "Ground Floor, Mall C", "totalCapacity": 5},
        headers=user_headers,
    )
    assert response.status_code == 403
    assert response.json()["success"] is False
    assert await count_lots(db_session) == 0


@pytest.mark.asyncio
async def test_list_parking_lots(async_client: AsyncClient, create_lot, user_headers: dict):
    """Test listing parking lots with derived availability."""
    await create_lot(name="Mall A - Floor 1", totalCapacity=15)
    await create_lot(name="Mall B - Floor 2", location="Second Floor, Mall B", totalCapacity=4)

    response = await async_client.get("/api/v1/lots/", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert len(body["data"]) == 2
    for lot in body["data"]:
        assert lot["availableSlots"] + lot["occupiedSlots"] == lot["totalCapacity"]


@pytest.mark.asyncio
async def test_list_parking_lots_requires_token(async_client: AsyncClient):
    """Test that reads need an identity."""
    response = await async_client.get("/api/v1/lots/")
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Not authorized, no token"}


@pytest.mark.asyncio
async def test_get_parking_lot(
    async_client: AsyncClient,
    create_lot,
    user_headers: dict,
    db_session: AsyncSession,
):
    """Test that availability is counted from the live spots."""
    lot = await create_lot(totalCapacity=15)

    response = await async_client.get(f"/api/v1/lots/{lot['id']}", headers=user_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == lot["id"]
    assert data["availableSlots"] == 10
    assert data["occupiedSlots"] == 5

    spots = await spots_of(db_session, lot["id"])
    for spot in spots:
        spot.status = SpotStatus.RESERVED.value
    await db_session.commit()

    response = await async_client.get(f"/api/v1/lots/{lot['id']}", headers=user_headers)
    data = response.json()["data"]
    assert data["availableSlots"] == 0
    assert data["occupiedSlots"] == 15


@pytest.mark.asyncio
async def test_get_parking_lot_not_found(async_client: AsyncClient, user_headers: dict):
    response = await async_client.get(
        "/api/v1/lots/00000000-0000-0000-0000-000000000000",
        headers=user_headers,
    )
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Parking lot not found"}


@pytest.mark.asyncio
async def test_update_parking_lot(async_client: AsyncClient, create_lot, admin_headers: dict):
    """Test that only the fields sent are changed."""
    lot = await create_lot(description="Old description")

    response = await async_client.put(
        f"/api/v1/lots/{lot['id']}",
        json={"name": "Mall A - Renovated"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Mall A - Renovated"
    assert data["location"] == lot["location"]
    assert data["totalCapacity"] == lot["totalCapacity"]
    assert data["description"] == "Old description"


@pytest.mark.asyncio
async def test_update_parking_lot_clears_description(
    async_client: AsyncClient,
    create_lot,
    admin_headers: dict,
):
    lot = await create_lot(description="Temporary")

    response = await async_client.put(
        f"/api/v1/lots/{lot['id']}",
        json={"description": None, "name": None},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert "description" not in data
    assert data["name"] == lot["name"]


@pytest.mark.asyncio
async def test_update_parking_lot_rejects_zero_capacity(
    async_client: AsyncClient,
    create_lot,
    admin_headers: dict,
):
    lot = await create_lot(totalCapacity=15)

    response = await async_client.put(
        f"/api/v1/lots/{lot['id']}",
        json={"totalCapacity": 0},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = await async_client.get(f"/api/v1/lots/{lot['id']}", headers=admin_headers)
    assert response.json()["data"]["totalCapacity"] == 15


@pytest.mark.asyncio
async def test_update_parking_lot_not_found(async_client: AsyncClient, admin_headers: dict):
    response = await async_client.put(
        "/api/v1/lots/00000000-0000-0000-0000-000000000000",
        json={"name": "Nowhere"},
        headers=admin_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_parking_lot(
    async_client: AsyncClient,
    create_lot,
    admin_headers: dict,
    db_session: AsyncSession,
):
    """Test deleting a parking lot removes its spots too."""
    lot = await create_lot(totalCapacity=6)
    assert len(await spots_of(db_session, lot["id"])) == 6

    response = await async_client.delete(f"/api/v1/lots/{lot['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Parking lot and associated spots deleted successfully",
    }

    # Verify parking lot is deleted
    response = await async_client.get(f"/api/v1/lots/{lot['id']}", headers=admin_headers)
    assert response.status_code == 404
    assert await spots_of(db_session, lot["id"]) == []


@pytest.mark.asyncio
async def test_delete_parking_lot_requires_admin(
    async_client: AsyncClient,
    create_lot,
    user_headers: dict,
    db_session: AsyncSession,
):
    lot = await create_lot(totalCapacity=3)

    response = await async_client.delete(f"/api/v1/lots/{lot['id']}", headers=user_headers)
    assert response.status_code == 403
    assert await count_lots(db_session) == 1


@pytest.mark.asyncio
async def test_create_parking_lot_section_too_long(
    async_client: AsyncClient,
    admin_headers: dict,
    db_session: AsyncSession,
):
    """Test that a section producing over-long spot labels is rejected up front."""
    response = await async_client.post(
        "/api/v1/lots/",
        json={
            "name": "Mall S",
            "location": "Ground Floor, Mall S",
            "totalCapacity": 10,
            "section": "S" * LABEL_MAX_LENGTH,
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "section" in response.json()["message"]
    assert await count_lots(db_session) == 0


@pytest.mark.asyncio
async def test_create_parking_lot_longest_section_that_fits(create_lot, db_session: AsyncSession):
    lot = await create_lot(totalCapacity=10, section="S" * (LABEL_MAX_LENGTH - 2))

    spots = await spots_of(db_session, lot["id"])
    assert len(spots) == 10
    assert max(len(spot.label) for spot in spots) == LABEL_MAX_LENGTH


@pytest.mark.asyncio
async def test_update_parking_lot_refreshes_updated_at(
    async_client: AsyncClient,
    create_lot,
    admin_headers: dict,
):
    """Test that an update touches updatedAt even when no value changes."""
    lot = await create_lot()

    response = await async_client.put(
        f"/api/v1/lots/{lot['id']}",
        json={"name": lot["name"]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == lot["name"]
    assert naive(data["updatedAt"]) > naive(lot["updatedAt"])


@pytest.mark.asyncio
async def test_delete_parking_lot_not_found(async_client: AsyncClient, admin_headers: dict):
    response = await async_client.delete(f"/api/v1/lots/{MISSING_ID}", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Parking lot not found"}


@pytest.mark.asyncio
async def test_update_parking_lot_requires_admin(
    async_client: AsyncClient,
    create_lot,
    user_headers: dict,
    admin_headers: dict,
):
    lot = await create_lot()

    response = await async_client.put(
        f"/api/v1/lots/{lot['id']}",
        json={"name": "Taken Over"},
        headers=user_headers,
    )
    assert response.status_code == 403
    assert response.json()["success"] is False

    response = await async_client.get(f"/api/v1/lots/{lot['id']}", headers=admin_headers)
    assert response.json()["data"]["name"] == lot["name"]
