"""Sorted and filtered listings behind the dashboard pages."""
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from constants import TAB_ACTIVE, TAB_COMPLETED, TYPE_FILTER_ALL
from models import (
    Client,
    Load,
    LoadStatus,
    LoadPriority,
    Truck,
    Trip,
    TripStatus,
    Transaction,
    TransactionType,
)
from services.ledger import trip_last_updated_at

_EPOCH = datetime.min


def _matches(term: str, *values: Optional[str]) -> bool:
    return any(value and term in value.lower() for value in values)


def _by_last_update(trips: Iterable[Trip]) -> List[Trip]:
    # Trips without events sort last
    return sorted(trips, key=lambda trip: trip_last_updated_at(trip) or _EPOCH, reverse=True)


def active_trips(trips: Iterable[Trip]) -> List[Trip]:
    """Trips not yet completed, most recently updated first."""
    return _by_last_update(trip for trip in trips if trip.status != TripStatus.COMPLETED)


def completed_trips(trips: Iterable[Trip]) -> List[Trip]:
    """Completed trips, most recently updated first."""
    return _by_last_update(trip for trip in trips if trip.status == TripStatus.COMPLETED)


def loads_newest_first(loads: Iterable[Load]) -> List[Load]:
    """Loads by creation time, descending."""
    return sorted(loads, key=lambda load: load.created_at or _EPOCH, reverse=True)


def loads_awaiting_assignment(loads: Iterable[Load]) -> List[Load]:
    """Open loads, newest first."""
    return loads_newest_first(load for load in loads if load.status == LoadStatus.OPEN)


def transactions_newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Transactions by payment date, descending."""
    return sorted(transactions, key=lambda t: t.date or _EPOCH, reverse=True)


def search_trips(
    trips: Sequence[Trip],
    loads: Sequence[Load],
    trucks: Sequence[Truck],
    clients: Sequence[Client],
    tab: str = TAB_ACTIVE,
    search: str = ""
) -> List[Trip]:
    """
    Trips for one tab of the trips page, filtered by a search term.

    The term matches trip id, load id, truck number, driver name, client
    name and either location, case-insensitively.

    Args:
        trips, loads, trucks, clients: Store collections
        tab: "active" or "completed"
        search: Free text

    Returns:
        Matching trips, most recently updated first
    """
    selected = completed_trips(trips) if tab == TAB_COMPLETED else active_trips(trips)

    term = search.strip().lower()
    if not term:
        return selected

    loads_by_id = {load.id: load for load in loads}
    trucks_by_id = {truck.id: truck for truck in trucks}
    clients_by_id = {client.id: client for client in clients}

    def matches(trip: Trip) -> bool:
        load = loads_by_id.get(trip.load_id)
        truck = trucks_by_id.get(trip.truck_id)
        client = clients_by_id.get(load.client_id) if load else None
        return _matches(
            term,
            trip.id,
            load.id if load else None,
            truck.truck_number if truck else None,
            truck.driver_name if truck else None,
            client.name if client else None,
            load.loading_location if load else None,
            load.unloading_location if load else None,
        )

    return [trip for trip in selected if matches(trip)]


def search_loads(
    loads: Sequence[Load],
    clients: Sequence[Client],
    search: str = "",
    status: Optional[LoadStatus] = None,
    priority: Optional[LoadPriority] = None
) -> List[Load]:
    """
    Loads page listing: newest first, filtered by text, status and priority.

    Returns:
        Matching loads
    """
    clients_by_id = {client.id: client for client in clients}
    term = search.strip().lower()

    results = []
    for load in loads_newest_first(loads):
        if status is not None and load.status != status:
            continue
        if priority is not None and load.priority != priority:
            continue
        if term:
            client = clients_by_id.get(load.client_id)
            if not _matches(
                term,
                load.id,
                client.name if client else None,
                load.loading_location,
                load.unloading_location,
                load.material_description,
            ):
                continue
        results.append(load)

    return results


def search_transactions(
    transactions: Sequence[Transaction],
    search: str = "",
    type_filter: str | TransactionType = TYPE_FILTER_ALL
) -> List[Transaction]:
    """
    Transactions page listing: newest first, filtered by trip id / notes and type.

    Returns:
        Matching transactions
    """
    term = search.strip().lower()
    wanted_type = None if type_filter == TYPE_FILTER_ALL else TransactionType(type_filter)

    return [
        t for t in transactions_newest_first(transactions)
        if (wanted_type is None or t.type == wanted_type)
        and (not term or _matches(term, t.trip_id, t.notes))
    ]


def search_trucks(trucks: Iterable[Truck], search: str = "") -> List[Truck]:
    """Trucks whose number, owner or driver matches."""
    term = search.strip().lower()
    return [
        truck for truck in trucks
        if not term or _matches(term, truck.truck_number, truck.owner_name, truck.driver_name)
    ]


def search_clients(clients: Iterable[Client], search: str = "") -> List[Client]:
    """Clients whose name matches."""
    term = search.strip().lower()
    return [client for client in clients if not term or _matches(term, client.name)]
