"""Trip models and the trip status machine."""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship

from models.database import Base
from models.load import LoadStatus


class TripStatus(str, Enum):
    """Trip progress, strictly forward in declaration order."""
    PENDING = "Pending Assignment"
    ASSIGNED = "Assigned"
    LOADING = "Truck Loaded"
    IN_TRANSIT = "In-Transit"
    UNLOADED = "Unloaded"
    COMPLETED = "Completed"


TRIP_STATUS_SEQUENCE = list(TripStatus)

_LOAD_STATUS_BY_TRIP_STATUS = {
    TripStatus.PENDING: LoadStatus.OPEN,
    TripStatus.ASSIGNED: LoadStatus.ASSIGNED,
    TripStatus.LOADING: LoadStatus.ASSIGNED,
    TripStatus.IN_TRANSIT: LoadStatus.IN_TRANSIT,
    TripStatus.UNLOADED: LoadStatus.IN_TRANSIT,
    TripStatus.COMPLETED: LoadStatus.COMPLETED,
}


def load_status_for(trip_status: TripStatus) -> LoadStatus:
    """Map a trip status onto the status its load should show."""
    return _LOAD_STATUS_BY_TRIP_STATUS[TripStatus(trip_status)]


def next_status(current: TripStatus) -> Optional[TripStatus]:
    """Return the status after ``current``, or None once Completed."""
    position = TRIP_STATUS_SEQUENCE.index(TripStatus(current))
    if position + 1 >= len(TRIP_STATUS_SEQUENCE):
        return None
    return TRIP_STATUS_SEQUENCE[position + 1]


def is_valid_transition(current: TripStatus, requested: TripStatus) -> bool:
    """Only a single step forward is allowed."""
    return next_status(current) == TripStatus(requested)


class Trip(Base):
    """Assignment of one truck to one load, with its own payout terms."""

    __tablename__ = "trips"

    id = Column(String(64), primary_key=True, index=True)

    # Soft references (no cascade from loads or trucks)
    load_id = Column(String(64), nullable=False, index=True)
    truck_id = Column(String(64), nullable=False, index=True)

    # Payouts
    truck_freight = Column(Float, default=0.0)  # Owed to the truck owner
    driver_commission = Column(Float, default=0.0)  # Owed to the driver

    # Status
    status = Column(SQLEnum(TripStatus), default=TripStatus.ASSIGNED, index=True)

    # Relationships
    events = relationship(
        "TripEvent",
        back_populates="trip",
        order_by="TripEvent.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Trip(id='{self.id}', load='{self.load_id}', status='{self.status}')>"


class TripEvent(Base):
    """One entry of a trip's append-only status timeline."""

    __tablename__ = "trip_events"

    id = Column(Integer, primary_key=True, autoincrement=True)

    trip_id = Column(String(64), ForeignKey("trips.id"), nullable=False, index=True)

    status = Column(SQLEnum(TripStatus), nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)
    notes = Column(Text)

    trip = relationship("Trip", back_populates="events")

    def __repr__(self):
        return f"<TripEvent(status='{self.status}', timestamp='{self.timestamp}')>"
