"""ParkingLot model."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from smart_parking.db.base import Base
from smart_parking.db.models.utils import utcnow


class ParkingLot(Base):
    """Parking lot - a facility with a fixed number of spots."""

    __tablename__ = "parking_lots"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    total_capacity = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    # Relationships
    # Spots are removed explicitly by the lot service before the lot itself,
    # so the collection is never loaded on delete.
    spots = relationship(
        "ParkingSpot",
        back_populates="lot",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<ParkingLot(id={self.id}, name={self.name})>"
