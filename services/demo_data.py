"""Demo dataset for a fresh store."""
from datetime import datetime
from typing import Dict

from logging_config import get_logger
from models import (
    LoadStatus,
    PaymentMode,
    PaymentStatus,
    TransactionPurpose,
    TransactionType,
    WeightUnit,
)
from services.store import LogisticsStore

logger = get_logger(__name__)


def seed_demo_data(store: LogisticsStore) -> Dict[str, int]:
    """
    Fill an empty store with three clients, five loads, three trucks,
    three trips at different stages and four payments.

    Args:
        store: Store to fill

    Returns:
        Number of records created per collection
    """
    concrete = store.clients.add(name="Global Concrete Inc.", phone_number="555-0101")
    steel = store.clients.add(name="Steel Beams Co.", phone_number="555-0102")
    agro = store.clients.add(name="Agro Produce Ltd.", phone_number="555-0103")

    def load(client, loading, unloading, material, weight, unit, freight, created_at):
        record = store.loads.add(
            client_id=client.id,
            loading_location=loading,
            unloading_location=unloading,
            material_description=material,
            material_weight=weight,
            weight_unit=unit,
            client_freight=freight,
            status=LoadStatus.OPEN,
        )
        return store.loads.update(record.id, created_at=created_at)

    cement = load(concrete, "Mumbai Port", "Pune Warehouse", "Cement Bags",
                  20, WeightUnit.TONS, 50000, datetime(2024, 7, 20, 10, 0))
    rods = load(steel, "Factory A, Delhi", "Site B, Gurgaon", "Steel Rods",
                15, WeightUnit.TONS, 35000, datetime(2024, 7, 21, 11, 0))
    wheat = load(agro, "Farmville, Punjab", "Market, Delhi", "Wheat Grain",
                 25000, WeightUnit.KG, 60000, datetime(2024, 7, 22, 9, 30))
    readymix = load(concrete, "Chennai Plant", "Bangalore Site", "Ready-Mix Concrete",
                    18, WeightUnit.TONS, 45000, datetime(2024, 7, 18, 14, 0))
    load(steel, "Jaipur Depot", "Agra Factory", "Iron Plates",
         22, WeightUnit.TONS, 52000, datetime(2024, 7, 23, 8, 0))

    ten_wheeler = store.trucks.add(
        truck_number="MH-12-AB-1234", truck_type="10-wheeler",
        owner_name="Rajesh Kumar", owner_contact="555-0201",
        driver_name="Amit Sharma", driver_phone_number="555-0301",
        pan_card="ABCDE1234F", bank_account_number="1234567890", bank_ifsc_code="HDFC0001234",
    )
    container = store.trucks.add(
        truck_number="DL-01-CD-5678", truck_type="Container",
        owner_name="Suresh Singh", owner_contact="555-0202",
        driver_name="Vikram Patel", driver_phone_number="555-0302",
    )
    twelve_wheeler = store.trucks.add(
        truck_number="KA-05-EF-9012", truck_type="12-wheeler",
        owner_name="Anil Desai", owner_contact="555-0203",
        driver_name="Manoj Reddy", driver_phone_number="555-0303",
    )

    store.add_trip(rods.id, ten_wheeler.id, 30000, 2000, now=datetime(2024, 7, 21, 12, 5))

    in_transit = store.add_trip(wheat.id, container.id, 50000, 3000, now=datetime(2024, 7, 22, 10, 5))
    store.advance_trip_status(in_transit.id, now=datetime(2024, 7, 22, 11, 30))
    store.advance_trip_status(in_transit.id, now=datetime(2024, 7, 22, 12, 0))

    delivered = store.add_trip(readymix.id, twelve_wheeler.id, 40000, 2500, now=datetime(2024, 7, 18, 15, 5))
    for moment in (
        datetime(2024, 7, 18, 16, 0),
        datetime(2024, 7, 18, 16, 30),
        datetime(2024, 7, 19, 8, 0),
        datetime(2024, 7, 19, 8, 30),
    ):
        store.advance_trip_status(delivered.id, now=moment)

    payments = [
        (delivered, 45000, datetime(2024, 7, 20), TransactionType.CREDIT, TransactionPurpose.CLIENT_FREIGHT,
         PaymentMode.BANK_TRANSFER, PaymentStatus.COMPLETED, "Full payment from Global Concrete"),
        (delivered, 40000, datetime(2024, 7, 21), TransactionType.DEBIT, TransactionPurpose.TRUCK_FREIGHT,
         PaymentMode.UPI, PaymentStatus.COMPLETED, "Payment to truck owner Anil Desai"),
        (in_transit, 30000, datetime(2024, 7, 23), TransactionType.CREDIT, TransactionPurpose.CLIENT_FREIGHT,
         PaymentMode.CASH, PaymentStatus.PENDING, "Advance from Agro Produce"),
        (in_transit, 50000, datetime(2024, 7, 25), TransactionType.DEBIT, TransactionPurpose.TRUCK_FREIGHT,
         PaymentMode.BANK_TRANSFER, PaymentStatus.PENDING, "Payment to truck owner Suresh Singh"),
    ]
    for trip, amount, paid_on, kind, purpose, mode, status, notes in payments:
        store.transactions.add(
            trip_id=trip.id, amount=amount, date=paid_on, type=kind,
            purpose=purpose, payment_mode=mode, status=status, notes=notes,
        )

    counts = {
        "clients": store.clients.count(),
        "loads": store.loads.count(),
        "trucks": store.trucks.count(),
        "trips": store.trips.count(),
        "transactions": store.transactions.count(),
    }
    logger.info("Seeded demo data", **counts)
    return counts
