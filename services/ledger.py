"""Ledger engine: balances, cash flow and profitability over a store snapshot.

Every function here is read-only and works on plain collections. A reference
to a record that no longer exists (a trip whose load was deleted, a payment
whose trip is gone) contributes nothing instead of raising.
"""
from dataclasses import dataclass, asdict, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from models import (
    Client,
    Load,
    LoadStatus,
    Truck,
    Trip,
    TripStatus,
    Transaction,
    TransactionType,
    TransactionPurpose,
    PaymentStatus,
    LoadTemplate,
    Document,
)
from utils.date_helpers import is_within_last_days


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of every store collection."""

    clients: Tuple[Client, ...] = ()
    loads: Tuple[Load, ...] = ()
    trucks: Tuple[Truck, ...] = ()
    trips: Tuple[Trip, ...] = ()
    transactions: Tuple[Transaction, ...] = ()
    load_templates: Tuple[LoadTemplate, ...] = ()
    documents: Tuple[Document, ...] = ()

    def windowed(self, days: int, now: Optional[datetime] = None) -> "LedgerSnapshot":
        """
        Restrict trips, loads and their transactions to the last ``days`` days.

        Args:
            days: Window length
            now: Window end (default: current UTC time)

        Returns:
            New snapshot; clients, trucks, templates and documents are kept
        """
        trips = tuple(trips_in_window(self.trips, days, now))
        loads = tuple(loads_in_window(self.loads, self.trips, days, now))
        trip_ids = {trip.id for trip in trips}
        transactions = tuple(t for t in self.transactions if t.trip_id in trip_ids)
        return replace(self, trips=trips, loads=loads, transactions=transactions)


@dataclass
class ClientDue:
    """Unpaid client freight on one load."""

    client_name: Optional[str]
    load_id: str
    trip_id: str
    total: float
    paid: float
    due: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class PayableDue:
    """Unpaid truck freight or driver commission on one trip."""

    trip_id: str
    payee: Optional[str]
    purpose: TransactionPurpose
    total: float
    paid: float
    due: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class TripProfit:
    """Profitability line for one trip."""

    trip_id: str
    load_id: str
    client_freight: float
    truck_freight: float
    driver_commission: float
    profit: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class TripLedger:
    """Settled and outstanding amounts shown on a trip's detail page."""

    trip_id: str
    client_freight: float
    client_paid: float
    client_due: float
    truck_freight: float
    truck_paid: float
    truck_due: float
    driver_commission: float
    commission_paid: float
    commission_due: float
    realized_profit: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ClientSummary:
    """Business done with one client."""

    client_id: str
    client_name: str
    total_loads: int
    completed_trips: int
    total_business: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class LedgerTotals:
    """Headline money figures shared by the dashboard and reports."""

    total_client_revenue: float
    total_costs: float
    total_received: float
    total_paid_out: float
    total_client_dues: float
    total_payables: float
    cash_in_hand: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def _index_by_id(items: Iterable[Any]) -> Dict[str, Any]:
    return {item.id: item for item in items}


def _trip_by_load(trips: Iterable[Trip]) -> Dict[str, Trip]:
    # First trip wins when a load was (wrongly) assigned twice
    index: Dict[str, Trip] = {}
    for trip in trips:
        index.setdefault(trip.load_id, trip)
    return index


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

def total_client_revenue(loads: Iterable[Load]) -> float:
    """Sum of client freight over all loads."""
    return sum(load.client_freight or 0.0 for load in loads)


def total_costs(trips: Iterable[Trip]) -> float:
    """Sum of truck freight plus driver commission over all trips."""
    return sum((trip.truck_freight or 0.0) + (trip.driver_commission or 0.0) for trip in trips)


def _completed_sum(transactions: Iterable[Transaction], transaction_type: TransactionType) -> float:
    return sum(
        t.amount or 0.0
        for t in transactions
        if t.type == transaction_type and t.status == PaymentStatus.COMPLETED
    )


def total_received(transactions: Iterable[Transaction]) -> float:
    """Completed credits."""
    return _completed_sum(transactions, TransactionType.CREDIT)


def total_paid_out(transactions: Iterable[Transaction]) -> float:
    """Completed debits."""
    return _completed_sum(transactions, TransactionType.DEBIT)


def cash_in_hand(transactions: Sequence[Transaction]) -> float:
    """Money received minus money paid out."""
    return total_received(transactions) - total_paid_out(transactions)


def total_client_dues(loads: Sequence[Load], transactions: Sequence[Transaction]) -> float:
    """Revenue not yet received."""
    return total_client_revenue(loads) - total_received(transactions)


def total_payables(trips: Sequence[Trip], transactions: Sequence[Transaction]) -> float:
    """Costs not yet paid out."""
    return total_costs(trips) - total_paid_out(transactions)


def ledger_totals(snapshot: LedgerSnapshot) -> LedgerTotals:
    """
    Compute every headline figure for a snapshot.

    Args:
        snapshot: Store snapshot (possibly windowed)

    Returns:
        LedgerTotals
    """
    loads, trips, transactions = snapshot.loads, snapshot.trips, snapshot.transactions
    return LedgerTotals(
        total_client_revenue=total_client_revenue(loads),
        total_costs=total_costs(trips),
        total_received=total_received(transactions),
        total_paid_out=total_paid_out(transactions),
        total_client_dues=total_client_dues(loads, transactions),
        total_payables=total_payables(trips, transactions),
        cash_in_hand=cash_in_hand(transactions),
    )


# ---------------------------------------------------------------------------
# Dues
# ---------------------------------------------------------------------------

def paid_toward(
    trip_id: str,
    purpose: TransactionPurpose,
    transactions: Iterable[Transaction],
    completed_only: bool = False
) -> float:
    """
    Amount recorded against a trip for one purpose.

    Args:
        trip_id: Trip ID
        purpose: Transaction purpose
        transactions: Transactions to scan
        completed_only: Count only completed payments

    Returns:
        Sum of matching amounts
    """
    return sum(
        t.amount or 0.0
        for t in transactions
        if t.trip_id == trip_id
        and t.purpose == purpose
        and (not completed_only or t.status == PaymentStatus.COMPLETED)
    )


def outstanding_client_due(
    load: Load,
    trip: Optional[Trip],
    transactions: Iterable[Transaction]
) -> float:
    """
    Client freight still owed on a load.

    Every client-freight transaction on the load's trip counts, whatever its
    status. A load without a trip has nothing paid against it.

    Returns:
        Freight minus payments; zero or negative means settled
    """
    paid = paid_toward(trip.id, TransactionPurpose.CLIENT_FREIGHT, transactions) if trip else 0.0
    return (load.client_freight or 0.0) - paid


def outstanding_truck_freight_due(trip: Trip, transactions: Iterable[Transaction]) -> float:
    """Truck freight still owed to the truck owner."""
    return (trip.truck_freight or 0.0) - paid_toward(
        trip.id, TransactionPurpose.TRUCK_FREIGHT, transactions
    )


def outstanding_commission_due(trip: Trip, transactions: Iterable[Transaction]) -> float:
    """Commission still owed to the driver."""
    return (trip.driver_commission or 0.0) - paid_toward(
        trip.id, TransactionPurpose.DRIVER_COMMISSION, transactions
    )


def client_dues(
    loads: Sequence[Load],
    trips: Sequence[Trip],
    transactions: Sequence[Transaction],
    clients: Sequence[Client] = ()
) -> List[ClientDue]:
    """
    Outstanding client receivables, one row per assigned load with a positive due.

    Args:
        loads: Loads
        trips: Trips (joined on load_id)
        transactions: Transactions
        clients: Clients, for display names

    Returns:
        List of ClientDue
    """
    trips_by_load = _trip_by_load(trips)
    clients_by_id = _index_by_id(clients)

    dues = []
    for load in loads:
        trip = trips_by_load.get(load.id)
        if trip is None:
            continue

        due = outstanding_client_due(load, trip, transactions)
        if due <= 0:
            continue

        client = clients_by_id.get(load.client_id)
        dues.append(ClientDue(
            client_name=client.name if client else None,
            load_id=load.id,
            trip_id=trip.id,
            total=load.client_freight or 0.0,
            paid=(load.client_freight or 0.0) - due,
            due=due,
        ))

    return dues


def truck_dues(
    trips: Sequence[Trip],
    trucks: Sequence[Truck],
    transactions: Sequence[Transaction]
) -> List[PayableDue]:
    """
    Outstanding truck freight and driver commission, only positive dues.

    The owner is the payee for freight and the driver for commission.

    Returns:
        List of PayableDue
    """
    trucks_by_id = _index_by_id(trucks)

    dues = []
    for trip in trips:
        truck = trucks_by_id.get(trip.truck_id)

        freight_due = outstanding_truck_freight_due(trip, transactions)
        if freight_due > 0:
            dues.append(PayableDue(
                trip_id=trip.id,
                payee=truck.owner_name if truck else None,
                purpose=TransactionPurpose.TRUCK_FREIGHT,
                total=trip.truck_freight or 0.0,
                paid=(trip.truck_freight or 0.0) - freight_due,
                due=freight_due,
            ))

        commission_due = outstanding_commission_due(trip, transactions)
        if commission_due > 0:
            dues.append(PayableDue(
                trip_id=trip.id,
                payee=truck.driver_name if truck else None,
                purpose=TransactionPurpose.DRIVER_COMMISSION,
                total=trip.driver_commission or 0.0,
                paid=(trip.driver_commission or 0.0) - commission_due,
                due=commission_due,
            ))

    return dues


# ---------------------------------------------------------------------------
# Profitability
# ---------------------------------------------------------------------------

def trip_profit(trip: Trip, load: Load) -> float:
    """Client freight minus truck freight minus driver commission."""
    return (
        (load.client_freight or 0.0)
        - (trip.truck_freight or 0.0)
        - (trip.driver_commission or 0.0)
    )


def trip_profitability(
    trips: Sequence[Trip],
    loads: Sequence[Load],
    completed_only: bool = True
) -> List[TripProfit]:
    """
    Profit per trip. Trips whose load is gone are skipped.

    Args:
        trips: Trips
        loads: Loads
        completed_only: Only report completed trips

    Returns:
        List of TripProfit
    """
    loads_by_id = _index_by_id(loads)

    rows = []
    for trip in trips:
        if completed_only and trip.status != TripStatus.COMPLETED:
            continue

        load = loads_by_id.get(trip.load_id)
        if load is None:
            continue

        rows.append(TripProfit(
            trip_id=trip.id,
            load_id=load.id,
            client_freight=load.client_freight or 0.0,
            truck_freight=trip.truck_freight or 0.0,
            driver_commission=trip.driver_commission or 0.0,
            profit=trip_profit(trip, load),
        ))

    return rows


def trip_ledger(
    trip: Trip,
    load: Optional[Load],
    transactions: Iterable[Transaction]
) -> TripLedger:
    """
    Settlement view of a single trip.

    Only completed payments count here; realized profit is what has actually
    come in minus what has actually gone out.

    Args:
        trip: Trip
        load: The trip's load, or None if it was deleted
        transactions: Transactions (any trip; filtered here)

    Returns:
        TripLedger
    """
    transactions = [t for t in transactions if t.trip_id == trip.id]

    client_freight = (load.client_freight or 0.0) if load else 0.0
    truck_freight = trip.truck_freight or 0.0
    driver_commission = trip.driver_commission or 0.0

    client_paid = paid_toward(trip.id, TransactionPurpose.CLIENT_FREIGHT, transactions, completed_only=True)
    truck_paid = paid_toward(trip.id, TransactionPurpose.TRUCK_FREIGHT, transactions, completed_only=True)
    commission_paid = paid_toward(trip.id, TransactionPurpose.DRIVER_COMMISSION, transactions, completed_only=True)

    return TripLedger(
        trip_id=trip.id,
        client_freight=client_freight,
        client_paid=client_paid,
        client_due=client_freight - client_paid,
        truck_freight=truck_freight,
        truck_paid=truck_paid,
        truck_due=truck_freight - truck_paid,
        driver_commission=driver_commission,
        commission_paid=commission_paid,
        commission_due=driver_commission - commission_paid,
        realized_profit=client_paid - truck_paid - commission_paid,
    )


def client_wise_summary(clients: Sequence[Client], loads: Sequence[Load]) -> List[ClientSummary]:
    """
    Per client: number of loads, completed loads and total freight booked.

    Returns:
        One ClientSummary per client, in client order
    """
    summaries = []
    for client in clients:
        client_loads = [load for load in loads if load.client_id == client.id]
        summaries.append(ClientSummary(
            client_id=client.id,
            client_name=client.name,
            total_loads=len(client_loads),
            completed_trips=sum(1 for load in client_loads if load.status == LoadStatus.COMPLETED),
            total_business=total_client_revenue(client_loads),
        ))

    return summaries


def pending_receivables(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Credits logged but not yet received."""
    return [
        t for t in transactions
        if t.type == TransactionType.CREDIT and t.status == PaymentStatus.PENDING
    ]


def pending_payables(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Debits logged but not yet paid."""
    return [
        t for t in transactions
        if t.type == TransactionType.DEBIT and t.status == PaymentStatus.PENDING
    ]


# ---------------------------------------------------------------------------
# Date windows
# ---------------------------------------------------------------------------

def trip_started_at(trip: Trip) -> Optional[datetime]:
    """Timestamp of the trip's earliest event."""
    timestamps = [event.timestamp for event in trip.events if event.timestamp is not None]
    return min(timestamps) if timestamps else None


def trip_last_updated_at(trip: Trip) -> Optional[datetime]:
    """Timestamp of the trip's most recent event."""
    if not trip.events:
        return None
    return trip.events[-1].timestamp


def trips_in_window(
    trips: Iterable[Trip],
    days: int,
    now: Optional[datetime] = None
) -> List[Trip]:
    """Trips whose first event falls within the last ``days`` days."""
    return [trip for trip in trips if is_within_last_days(trip_started_at(trip), days, now)]


def loads_in_window(
    loads: Iterable[Load],
    trips: Sequence[Trip],
    days: int,
    now: Optional[datetime] = None
) -> List[Load]:
    """
    Loads started within the last ``days`` days.

    A load starts when its trip's first event happens; an unassigned load
    falls back to its creation time.
    """
    trips_by_load = _trip_by_load(trips)

    selected = []
    for load in loads:
        trip = trips_by_load.get(load.id)
        started = trip_started_at(trip) if trip else load.created_at
        if is_within_last_days(started, days, now):
            selected.append(load)

    return selected
