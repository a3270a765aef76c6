"""ParkingSpot model."""

import enum
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from smart_parking.db.base import Base
from smart_parking.db.models.utils import utcnow


class SpotStatus(str, enum.Enum):
    """Occupancy status of a single spot."""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"


class ParkingSpot(Base):
    """Individual parking spot within a lot."""

    __tablename__ = "parking_spots"
    __table_args__ = (UniqueConstraint("lot_id", "label", name="uq_parking_spots_lot_label"),)

    id = Column(Uuid, primary_key=True, default=uuid4)
    lot_id = Column(
        Uuid,
        ForeignKey("parking_lots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label = Column(String(64), nullable=False)
    status = Column(String(16), nullable=False, default=SpotStatus.AVAILABLE.value, index=True)
    floor = Column(String(255), nullable=True)
    section = Column(String(64), nullable=True)
    last_updated = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    lot = relationship("ParkingLot", back_populates="spots")

    def __repr__(self):
        return f"<ParkingSpot(id={self.id}, label={self.label}, status={self.status})>"
