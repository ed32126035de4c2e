"""In-memory logistics store: the one mutation surface for every collection."""
from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from exceptions import InvalidStatusTransitionError
from logging_config import get_logger
from models import (
    build_engine,
    init_db,
    Document,
    Load,
    LoadTemplate,
    Trip,
    TripStatus,
    load_status_for,
    next_status,
)
from models.load_template import TEMPLATE_FIELDS
from models.trip import is_valid_transition
from repositories import (
    ClientRepository,
    LoadRepository,
    TruckRepository,
    TripRepository,
    TransactionRepository,
    LoadTemplateRepository,
    DocumentRepository,
)
from services.ledger import LedgerSnapshot
from utils.date_helpers import utcnow
from utils.identifiers import IdGenerator

logger = get_logger(__name__)


@dataclass
class OrphanReport:
    """Records whose soft references point at something that was deleted."""

    trips_missing_load: List[str] = field(default_factory=list)
    trips_missing_truck: List[str] = field(default_factory=list)
    loads_missing_client: List[str] = field(default_factory=list)
    transactions_missing_trip: List[str] = field(default_factory=list)
    documents_missing_trip: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not any(asdict(self).values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


class LogisticsStore:
    """
    Holds clients, loads, trucks, trips, transactions, load templates and
    documents for one process.

    Each instance owns a private in-memory SQLite database, so tests and the
    API can build as many isolated stores as they need. Deleting a record
    never touches the records that reference it; see ``orphaned_records``.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        clock: Callable[[], datetime] = utcnow,
        ids: Optional[IdGenerator] = None
    ):
        """
        Initialize store.

        Args:
            database_url: SQLite URL (default: settings, in-memory)
            clock: Source of creation and event timestamps
            ids: Identifier generator (default: a fresh one)
        """
        self.engine = build_engine(database_url)
        self.db = init_db(self.engine)()
        self.clock = clock
        self.ids = ids or IdGenerator()

        self.clients = ClientRepository(self.db, self.ids, clock=clock)
        self.loads = LoadRepository(self.db, self.ids, clock=clock)
        self.trucks = TruckRepository(self.db, self.ids, clock=clock)
        self.trips = TripRepository(
            self.db, self.ids, on_status_change=self._sync_load_status, clock=clock
        )
        self.transactions = TransactionRepository(self.db, self.ids, clock=clock)
        self.load_templates = LoadTemplateRepository(self.db, self.ids, clock=clock)
        self.documents = DocumentRepository(self.db, self.ids, clock=clock)

    def close(self) -> None:
        """Release the session and drop the in-memory database."""
        self.db.close()
        self.engine.dispose()

    def __enter__(self) -> "LogisticsStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    def add_trip(
        self,
        load_id: str,
        truck_id: str,
        truck_freight: float = 0.0,
        driver_commission: float = 0.0,
        status: TripStatus = TripStatus.ASSIGNED,
        now: Optional[datetime] = None
    ) -> Trip:
        """
        Assign a truck to a load.

        The trip starts with a single event for its initial status, and the
        load (if it still exists) takes the matching load status.

        Args:
            load_id: Load being carried
            truck_id: Truck carrying it
            truck_freight: Amount owed to the truck owner
            driver_commission: Amount owed to the driver
            status: Initial trip status
            now: Creation time (default: store clock)

        Returns:
            Created trip
        """
        status = TripStatus(status)
        trip = self.trips.add(
            load_id=load_id,
            truck_id=truck_id,
            truck_freight=truck_freight,
            driver_commission=driver_commission,
            status=status,
            timestamp=now or self.clock(),
        )

        self._sync_load_status(trip)

        logger.info(
            "Trip assigned",
            trip_id=trip.id,
            load_id=load_id,
            truck_id=truck_id,
            status=status.value,
        )
        return trip

    def advance_trip_status(
        self,
        trip_id: str,
        new_status: Optional[TripStatus] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> Optional[Trip]:
        """
        Move a trip one step forward on its timeline.

        Args:
            trip_id: Trip ID
            new_status: Target status (default: the next one)
            notes: Optional note for the event
            now: Event time (default: store clock)

        Returns:
            Updated trip, or None if the trip does not exist

        Raises:
            InvalidStatusTransitionError: On a backward move, a skip, or a
                move past Completed
        """
        trip = self.trips.get_by_id(trip_id)
        if trip is None:
            logger.debug(f"Ignoring status change of unknown trip {trip_id}")
            return None

        target = TripStatus(new_status) if new_status is not None else next_status(trip.status)
        if target is None or not is_valid_transition(trip.status, target):
            raise InvalidStatusTransitionError(trip.status, target)

        self.trips.append_event(trip, target, timestamp=now or self.clock(), notes=notes)
        return trip

    def _sync_load_status(self, trip: Trip) -> None:
        load = self.loads.get_by_id(trip.load_id)
        if load is None:
            logger.warning(f"Trip {trip.id} points at missing load {trip.load_id}")
            return

        load_status = load_status_for(trip.status)
        if load.status != load_status:
            self.loads.update(load.id, status=load_status)

    # ------------------------------------------------------------------
    # Templates and documents
    # ------------------------------------------------------------------

    def save_load_as_template(self, load_id: str, template_name: str) -> Optional[LoadTemplate]:
        """
        Snapshot a load's fields under a name.

        Args:
            load_id: Load to copy
            template_name: Display name of the template

        Returns:
            Created template, or None if the load does not exist
        """
        load = self.loads.get_by_id(load_id)
        if load is None:
            logger.debug(f"Ignoring template from unknown load {load_id}")
            return None

        fields = {name: getattr(load, name) for name in TEMPLATE_FIELDS}
        return self.load_templates.add(template_name=template_name, **fields)

    def create_load_from_template(self, template_id: str, **overrides) -> Optional[Load]:
        """
        Create an open load pre-filled from a template.

        Args:
            template_id: Template to copy
            **overrides: Load fields that replace the template's values

        Returns:
            Created load, or None if the template does not exist
        """
        template = self.load_templates.get_by_id(template_id)
        if template is None:
            logger.debug(f"Ignoring load from unknown template {template_id}")
            return None

        fields = template.load_fields()
        fields.update(overrides)
        return self.loads.add(**fields)

    def add_document(
        self,
        trip_id: str,
        file_name: str,
        file_type: Optional[str],
        file_url: str
    ) -> Document:
        """
        Attach a file payload to a trip.

        Args:
            trip_id: Trip the document belongs to
            file_name: Original file name
            file_type: MIME type
            file_url: Opaque payload (data URL)

        Returns:
            Created document
        """
        return self.documents.add(
            trip_id=trip_id,
            file_name=file_name,
            file_type=file_type,
            file_url=file_url,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self) -> LedgerSnapshot:
        """
        Current contents of every collection.

        Reflects every mutation made so far; each call re-reads the store.
        """
        return LedgerSnapshot(
            clients=tuple(self.clients.get_all()),
            loads=tuple(self.loads.get_all()),
            trucks=tuple(self.trucks.get_all()),
            trips=tuple(self.trips.get_all()),
            transactions=tuple(self.transactions.get_all()),
            load_templates=tuple(self.load_templates.get_all()),
            documents=tuple(self.documents.get_all()),
        )

    def orphaned_records(self) -> OrphanReport:
        """
        Find records left dangling by deletes.

        Nothing is repaired; the ledger already counts these as zero.
        """
        snap = self.snapshot()
        client_ids = {client.id for client in snap.clients}
        load_ids = {load.id for load in snap.loads}
        truck_ids = {truck.id for truck in snap.trucks}
        trip_ids = {trip.id for trip in snap.trips}

        report = OrphanReport(
            trips_missing_load=[t.id for t in snap.trips if t.load_id not in load_ids],
            trips_missing_truck=[t.id for t in snap.trips if t.truck_id not in truck_ids],
            loads_missing_client=[load.id for load in snap.loads if load.client_id not in client_ids],
            transactions_missing_trip=[t.id for t in snap.transactions if t.trip_id not in trip_ids],
            documents_missing_trip=[d.id for d in snap.documents if d.trip_id not in trip_ids],
        )

        if not report.is_clean:
            logger.warning("Dangling references found", **report.to_dict())

        return report
