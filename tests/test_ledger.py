"""Tests for the ledger engine."""
from datetime import datetime

import pytest

from models import (
    Load,
    LoadStatus,
    PaymentStatus,
    Transaction,
    TransactionPurpose,
    TransactionType,
    Trip,
    TripStatus,
)
from services import ledger

AS_OF = datetime(2024, 7, 25, 12, 0)


def record_payment(store, trip, amount, purpose, status=PaymentStatus.COMPLETED):
    """Record a payment against a trip."""
    kind = TransactionType.CREDIT if purpose == TransactionPurpose.CLIENT_FREIGHT else TransactionType.DEBIT
    return store.transactions.add(
        trip_id=trip.id,
        amount=amount,
        date=AS_OF,
        type=kind,
        purpose=purpose,
        status=status,
    )


def find_trip(store, load_freight):
    """Seeded trip whose load carries the given freight."""
    loads = {load.id: load for load in store.loads.get_all()}
    return next(t for t in store.trips.get_all() if loads[t.load_id].client_freight == load_freight)


def test_empty_transactions_give_zero_totals():
    """Test received, paid out and cash in hand are zero with no payments."""
    assert ledger.total_received([]) == 0
    assert ledger.total_paid_out([]) == 0
    assert ledger.cash_in_hand([]) == 0


def test_cash_in_hand_is_received_minus_paid_out():
    """Test only completed payments move cash."""
    transactions = [
        Transaction(amount=45000, type=TransactionType.CREDIT, status=PaymentStatus.COMPLETED),
        Transaction(amount=30000, type=TransactionType.CREDIT, status=PaymentStatus.PENDING),
        Transaction(amount=40000, type=TransactionType.DEBIT, status=PaymentStatus.COMPLETED),
    ]

    assert ledger.total_received(transactions) == 45000
    assert ledger.total_paid_out(transactions) == 40000
    assert ledger.cash_in_hand(transactions) == 5000


def test_partial_client_payment_leaves_due(store, sample_load, sample_trip, sample_client):
    """Test 50000 freight with 20000 paid leaves 30000 due."""
    record_payment(store, sample_trip, 20000, TransactionPurpose.CLIENT_FREIGHT)
    snap = store.snapshot()

    assert ledger.outstanding_client_due(sample_load, sample_trip, snap.transactions) == 30000

    dues = ledger.client_dues(snap.loads, snap.trips, snap.transactions, snap.clients)
    assert len(dues) == 1
    assert dues[0].client_name == sample_client.name
    assert (dues[0].total, dues[0].paid, dues[0].due) == (50000, 20000, 30000)


def test_pending_client_payment_counts_toward_due(store, sample_load, sample_trip):
    """Test every status counts when computing what is still owed."""
    record_payment(store, sample_trip, 20000, TransactionPurpose.CLIENT_FREIGHT, PaymentStatus.PENDING)

    assert ledger.outstanding_client_due(sample_load, sample_trip, store.transactions.get_all()) == 30000


def test_settled_load_not_in_client_dues(store, sample_trip):
    """Test a fully paid load has no due row."""
    record_payment(store, sample_trip, 50000, TransactionPurpose.CLIENT_FREIGHT)
    snap = store.snapshot()

    assert ledger.client_dues(snap.loads, snap.trips, snap.transactions) == []


def test_unassigned_load_not_in_client_dues(store, sample_load):
    """Test only loads with a trip show up as receivables."""
    snap = store.snapshot()

    assert ledger.outstanding_client_due(sample_load, None, snap.transactions) == 50000
    assert ledger.client_dues(snap.loads, snap.trips, snap.transactions) == []


def test_fully_paid_trip_not_in_truck_dues(store, sample_trip):
    """Test freight 30000 and commission 2000 fully paid clear both dues."""
    record_payment(store, sample_trip, 30000, TransactionPurpose.TRUCK_FREIGHT)
    record_payment(store, sample_trip, 2000, TransactionPurpose.DRIVER_COMMISSION)
    snap = store.snapshot()

    assert ledger.outstanding_truck_freight_due(sample_trip, snap.transactions) == 0
    assert ledger.outstanding_commission_due(sample_trip, snap.transactions) == 0
    assert ledger.truck_dues(snap.trips, snap.trucks, snap.transactions) == []


def test_truck_dues_name_owner_and_driver(store, sample_trip, sample_truck):
    """Test freight is owed to the owner and commission to the driver."""
    snap = store.snapshot()

    dues = ledger.truck_dues(snap.trips, snap.trucks, snap.transactions)

    assert [(d.purpose, d.payee, d.due) for d in dues] == [
        (TransactionPurpose.TRUCK_FREIGHT, "Rajesh Kumar", 30000),
        (TransactionPurpose.DRIVER_COMMISSION, "Amit Sharma", 2000),
    ]


def test_client_wise_summary(store, sample_client):
    """Test a client with loads of 50000 and 35000, one completed."""
    store.loads.add(client_id=sample_client.id, client_freight=50000, status=LoadStatus.COMPLETED)
    store.loads.add(client_id=sample_client.id, client_freight=35000, status=LoadStatus.ASSIGNED)
    snap = store.snapshot()

    [summary] = ledger.client_wise_summary(snap.clients, snap.loads)

    assert summary.total_loads == 2
    assert summary.completed_trips == 1
    assert summary.total_business == 85000


def test_client_without_loads_in_summary(store, sample_client):
    """Test every client gets a row."""
    [summary] = ledger.client_wise_summary([sample_client], [])

    assert (summary.total_loads, summary.completed_trips, summary.total_business) == (0, 0, 0)


def test_trip_profit():
    """Test profit is freight less truck freight less commission."""
    load = Load(client_freight=45000)
    trip = Trip(truck_freight=40000, driver_commission=2500)

    assert ledger.trip_profit(trip, load) == 2500


def test_trip_profitability_lists_completed_trips(seeded_store):
    """Test only the delivered demo trip is profitable so far."""
    snap = seeded_store.snapshot()

    [row] = ledger.trip_profitability(snap.trips, snap.loads)

    assert row.client_freight == 45000
    assert row.profit == 2500
    assert len(ledger.trip_profitability(snap.trips, snap.loads, completed_only=False)) == 3


def test_trip_profitability_skips_trips_without_load(store, sample_trip, sample_load):
    """Test a trip whose load was deleted contributes nothing."""
    store.loads.delete(sample_load.id)
    snap = store.snapshot()

    assert ledger.trip_profitability(snap.trips, snap.loads, completed_only=False) == []


def test_trip_ledger_counts_completed_payments_only(seeded_store):
    """Test the in-transit demo trip has nothing settled yet."""
    trip = find_trip(seeded_store, 60000)

    entry = ledger.trip_ledger(trip, seeded_store.loads.get_by_id(trip.load_id), seeded_store.transactions.get_all())

    assert entry.client_paid == 0
    assert entry.client_due == 60000
    assert entry.truck_paid == 0
    assert entry.truck_due == 50000
    assert entry.realized_profit == 0


def test_trip_ledger_realized_profit(seeded_store):
    """Test the delivered demo trip's settled amounts."""
    trip = find_trip(seeded_store, 45000)

    entry = ledger.trip_ledger(trip, seeded_store.loads.get_by_id(trip.load_id), seeded_store.transactions.get_all())

    assert entry.client_paid == 45000
    assert entry.client_due == 0
    assert entry.truck_paid == 40000
    assert entry.commission_due == 2500
    assert entry.realized_profit == 5000


def test_trip_ledger_without_load(store, sample_trip):
    """Test a missing load means no client freight."""
    entry = ledger.trip_ledger(sample_trip, None, [])

    assert entry.client_freight == 0
    assert entry.truck_due == 30000


def test_seeded_totals(seeded_store):
    """Test the headline figures of the demo dataset."""
    totals = ledger.ledger_totals(seeded_store.snapshot())

    assert totals.total_client_revenue == 242000
    assert totals.total_costs == 127500
    assert totals.total_received == 45000
    assert totals.total_paid_out == 40000
    assert totals.cash_in_hand == 5000
    assert totals.total_client_dues == 197000
    assert totals.total_payables == 87500


def test_seeded_dues(seeded_store):
    """Test receivable and payable rows of the demo dataset."""
    snap = seeded_store.snapshot()

    client_rows = ledger.client_dues(snap.loads, snap.trips, snap.transactions, snap.clients)
    truck_rows = ledger.truck_dues(snap.trips, snap.trucks, snap.transactions)

    assert sorted(row.due for row in client_rows) == [30000, 35000]
    assert sorted(row.due for row in truck_rows) == [2000, 2500, 3000, 30000]


def test_pending_lists(seeded_store):
    """Test pending credits and debits are split by direction."""
    transactions = seeded_store.transactions.get_all()

    assert [t.amount for t in ledger.pending_receivables(transactions)] == [30000]
    assert [t.amount for t in ledger.pending_payables(transactions)] == [50000]


def test_trip_window_uses_first_event(seeded_store):
    """Test a trip belongs to the window its first event falls in."""
    trips = seeded_store.trips.get_all()

    recent = ledger.trips_in_window(trips, 4, now=AS_OF)

    assert sorted(trip.status for trip in recent) == sorted([TripStatus.ASSIGNED, TripStatus.IN_TRANSIT])


def test_load_window_falls_back_to_created_at(seeded_store):
    """Test unassigned loads are windowed by creation time."""
    snap = seeded_store.snapshot()

    recent = ledger.loads_in_window(snap.loads, snap.trips, 4, now=AS_OF)

    assert sorted(load.client_freight for load in recent) == [35000, 52000, 60000]


def test_windowed_snapshot_drops_transactions_of_older_trips(seeded_store):
    """Test windowed totals only see payments of trips in the window."""
    windowed = seeded_store.snapshot().windowed(4, now=AS_OF)

    totals = ledger.ledger_totals(windowed)

    assert len(windowed.trips) == 2
    assert len(windowed.transactions) == 2
    assert totals.total_client_revenue == 147000
    assert totals.total_received == 0
    assert totals.cash_in_hand == 0


@pytest.mark.parametrize("days,expected_trips", [(1, 0), (4, 2), (7, 3)])
def test_window_sizes(seeded_store, days, expected_trips):
    """Test wider windows take in older trips."""
    windowed = seeded_store.snapshot().windowed(days, now=AS_OF)

    assert len(windowed.trips) == expected_trips
