"""Repository for trip operations."""
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from constants import ID_PREFIX_TRIP
from exceptions import InvalidStatusTransitionError, StoreError
from logging_config import get_logger
from models import Trip, TripEvent, TripStatus
from models.trip import is_valid_transition
from repositories.base import BaseRepository
from utils.identifiers import IdGenerator

logger = get_logger(__name__)


class TripRepository(BaseRepository[Trip]):
    """
    Repository for trip-specific store operations.

    Keeps the timeline invariant: a trip always has at least one event and
    its last event carries the trip's current status. Every status change
    goes through the forward-only state machine and is reported to
    ``on_status_change`` so the store can keep the load in step.
    """

    id_prefix = ID_PREFIX_TRIP

    def __init__(
        self,
        db: Session,
        ids: IdGenerator,
        on_status_change: Optional[Callable[[Trip], None]] = None,
        **kwargs
    ):
        """
        Initialize trip repository.

        Args:
            db: Store session
            ids: Identifier generator
            on_status_change: Called with the trip after each status move
        """
        super().__init__(Trip, db, ids, **kwargs)
        self.on_status_change = on_status_change

    def add(
        self,
        status: TripStatus = TripStatus.ASSIGNED,
        timestamp: Optional[datetime] = None,
        notes: Optional[str] = None,
        **kwargs
    ) -> Trip:
        """
        Create a trip whose timeline starts with its initial status.

        Args:
            status: Initial trip status
            timestamp: Creation time of the first event (default: clock)
            notes: Optional note on the first event
            **kwargs: Trip columns (load_id, truck_id, truck_freight, ...)

        Returns:
            Created trip
        """
        status = TripStatus(status)
        kwargs.pop("events", None)
        first_event = TripEvent(
            status=status,
            timestamp=timestamp or self.clock(),
            notes=notes,
        )
        return super().add(status=status, events=[first_event], **kwargs)

    def update(self, id: str, **kwargs) -> Optional[Trip]:
        """
        Replace trip columns, recording a status change on the timeline.

        Args:
            id: Trip ID
            **kwargs: Column values

        Returns:
            Updated trip or None if not found

        Raises:
            InvalidStatusTransitionError: If ``status`` is not the next step
        """
        trip = self.get_by_id(id)
        moved = False

        if trip is not None and kwargs.get("status") is not None:
            new_status = TripStatus(kwargs["status"])
            kwargs["status"] = new_status
            if new_status != trip.status:
                if not is_valid_transition(trip.status, new_status):
                    raise InvalidStatusTransitionError(trip.status, new_status)
                trip.events.append(TripEvent(status=new_status, timestamp=self.clock()))
                moved = True

        updated = super().update(id, **kwargs)
        if moved and self.on_status_change is not None:
            self.on_status_change(updated)
        return updated

    def append_event(
        self,
        trip: Trip,
        status: TripStatus,
        timestamp: Optional[datetime] = None,
        notes: Optional[str] = None
    ) -> TripEvent:
        """
        Move a trip to ``status`` and append the matching event.

        Transition rules are the caller's concern.

        Args:
            trip: Trip to move
            status: New status
            timestamp: Event time (default: clock)
            notes: Optional note

        Returns:
            The appended event
        """
        event = TripEvent(
            status=TripStatus(status),
            timestamp=timestamp or self.clock(),
            notes=notes,
        )

        try:
            trip.events.append(event)
            trip.status = event.status
            self.db.commit()

            logger.info(f"Trip {trip.id} moved to '{event.status.value}'")

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error appending event to trip {trip.id}: {e}")
            raise StoreError("Failed to record trip event") from e

        if self.on_status_change is not None:
            self.on_status_change(trip)
        return event

    def get_by_load(self, load_id: str) -> Optional[Trip]:
        """
        Get the trip carrying a load.

        Args:
            load_id: Load ID

        Returns:
            Trip or None
        """
        return self.db.query(Trip).filter(
            Trip.load_id == load_id
        ).first()

    def get_by_truck(self, truck_id: str) -> List[Trip]:
        """
        Get trips run by a truck.

        Args:
            truck_id: Truck ID

        Returns:
            List of trips
        """
        return self.db.query(Trip).filter(
            Trip.truck_id == truck_id
        ).all()
