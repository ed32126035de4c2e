"""Dashboard and report figures derived from the logistics store."""
from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from config import get_settings
from exceptions import TripNotFoundError
from logging_config import get_logger
from models import Client, Document, Load, Transaction, Trip, TripEvent, Truck
from services import ledger
from services.ledger import (
    ClientDue,
    ClientSummary,
    LedgerSnapshot,
    LedgerTotals,
    PayableDue,
    TripLedger,
    TripProfit,
)
from services.listings import active_trips, transactions_newest_first
from services.store import LogisticsStore
from utils.date_helpers import format_date_display

logger = get_logger(__name__)


@dataclass
class ActiveTripRow:
    """One line of the dashboard's active trips panel."""

    trip_id: str
    load_id: str
    truck_number: Optional[str]
    driver_name: Optional[str]
    route: Optional[str]
    status: str
    last_updated: Optional[datetime]
    last_updated_display: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class DashboardMetrics:
    """Container for dashboard stat cards and the recent trips panel."""

    active_trips_count: int
    totals: LedgerTotals
    recent_active_trips: List[ActiveTripRow]
    window_days: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ReportBundle:
    """Container for everything the reports page shows."""

    totals: LedgerTotals
    client_wise_summary: List[ClientSummary]
    trip_profitability: List[TripProfit]
    pending_receivables: List[Transaction] = field(default_factory=list)
    pending_payables: List[Transaction] = field(default_factory=list)
    window_days: Optional[int] = None


@dataclass
class TripDetail:
    """A trip with everything joined to it."""

    trip: Trip
    load: Optional[Load]
    truck: Optional[Truck]
    client: Optional[Client]
    ledger: TripLedger
    events: List[TripEvent]
    transactions: List[Transaction]
    documents: List[Document]


class MetricsCollector:
    """Collect dashboard, report and trip-detail figures from a store."""

    def __init__(self, store: LogisticsStore):
        """
        Initialize metrics collector.

        Args:
            store: Logistics store to read
        """
        self.store = store
        self.settings = get_settings()

    def _snapshot(self, days: Optional[int], now: Optional[datetime]) -> LedgerSnapshot:
        snapshot = self.store.snapshot()
        if days is None:
            return snapshot
        return snapshot.windowed(days, now)

    def _active_trip_rows(self, snapshot: LedgerSnapshot, limit: int) -> List[ActiveTripRow]:
        loads_by_id = {load.id: load for load in snapshot.loads}
        trucks_by_id = {truck.id: truck for truck in snapshot.trucks}

        rows = []
        for trip in active_trips(snapshot.trips)[:limit]:
            load = loads_by_id.get(trip.load_id)
            truck = trucks_by_id.get(trip.truck_id)
            last_updated = ledger.trip_last_updated_at(trip)
            rows.append(ActiveTripRow(
                trip_id=trip.id,
                load_id=trip.load_id,
                truck_number=truck.truck_number if truck else None,
                driver_name=truck.driver_name if truck else None,
                route=f"{load.loading_location} -> {load.unloading_location}" if load else None,
                status=trip.status.value,
                last_updated=last_updated,
                last_updated_display=format_date_display(
                    last_updated,
                    include_time=True,
                    timezone_str=self.settings.display_timezone,
                ),
            ))

        return rows

    def get_dashboard_metrics(
        self,
        days: Optional[int] = None,
        now: Optional[datetime] = None,
        recent_limit: Optional[int] = None
    ) -> DashboardMetrics:
        """
        Get dashboard stat cards.

        Args:
            days: Restrict to trips/loads started in the last N days
            now: Window end (default: current UTC time)
            recent_limit: Rows in the recent trips panel (default: settings)

        Returns:
            DashboardMetrics
        """
        snapshot = self._snapshot(days, now)
        limit = recent_limit or self.settings.dashboard_recent_trips

        metrics = DashboardMetrics(
            active_trips_count=len(active_trips(snapshot.trips)),
            totals=ledger.ledger_totals(snapshot),
            recent_active_trips=self._active_trip_rows(snapshot, limit),
            window_days=days,
        )

        logger.info(
            f"Dashboard: {metrics.active_trips_count} active trips, "
            f"cash in hand {metrics.totals.cash_in_hand:.2f}"
        )
        return metrics

    def get_client_dues(self, days: Optional[int] = None, now: Optional[datetime] = None) -> List[ClientDue]:
        """Outstanding client receivables."""
        snapshot = self._snapshot(days, now)
        return ledger.client_dues(snapshot.loads, snapshot.trips, snapshot.transactions, snapshot.clients)

    def get_truck_dues(self, days: Optional[int] = None, now: Optional[datetime] = None) -> List[PayableDue]:
        """Outstanding truck freight and driver commission."""
        snapshot = self._snapshot(days, now)
        return ledger.truck_dues(snapshot.trips, snapshot.trucks, snapshot.transactions)

    def get_report(self, days: Optional[int] = None, now: Optional[datetime] = None) -> ReportBundle:
        """
        Get the reports page.

        Args:
            days: Restrict to trips/loads started in the last N days
            now: Window end (default: current UTC time)

        Returns:
            ReportBundle
        """
        snapshot = self._snapshot(days, now)
        logger.info(f"Building report over {len(snapshot.trips)} trips (window: {days or 'all'})")

        return ReportBundle(
            totals=ledger.ledger_totals(snapshot),
            client_wise_summary=ledger.client_wise_summary(snapshot.clients, snapshot.loads),
            trip_profitability=ledger.trip_profitability(snapshot.trips, snapshot.loads),
            pending_receivables=transactions_newest_first(ledger.pending_receivables(snapshot.transactions)),
            pending_payables=transactions_newest_first(ledger.pending_payables(snapshot.transactions)),
            window_days=days,
        )

    def get_trip_detail(self, trip_id: str) -> TripDetail:
        """
        Get a trip with its load, truck, client, ledger, payments and files.

        Args:
            trip_id: Trip ID

        Returns:
            TripDetail

        Raises:
            TripNotFoundError: If the trip does not exist
        """
        trip = self.store.trips.get_by_id(trip_id)
        if trip is None:
            raise TripNotFoundError(f"Trip {trip_id} not found")

        load = self.store.loads.get_by_id(trip.load_id)
        truck = self.store.trucks.get_by_id(trip.truck_id)
        client = self.store.clients.get_by_id(load.client_id) if load else None
        transactions = self.store.transactions.get_by_trip(trip.id)

        return TripDetail(
            trip=trip,
            load=load,
            truck=truck,
            client=client,
            ledger=ledger.trip_ledger(trip, load, transactions),
            events=list(trip.events),
            transactions=transactions,
            documents=self.store.documents.get_by_trip(trip.id),
        )
