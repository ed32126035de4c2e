"""Shared fixtures: a fresh in-memory store per test."""
import os
from datetime import datetime

import pytest

os.environ.setdefault("APP_ENV", "testing")

from models import LoadStatus, WeightUnit
from services import LogisticsStore, seed_demo_data

FIXED_NOW = datetime(2024, 7, 25, 12, 0)


@pytest.fixture
def store():
    """Empty store whose clock is pinned to FIXED_NOW."""
    with LogisticsStore(clock=lambda: FIXED_NOW) as fresh:
        yield fresh


@pytest.fixture
def seeded_store(store):
    """Store holding the demo dataset."""
    seed_demo_data(store)
    return store


@pytest.fixture
def sample_client(store):
    """Create sample client."""
    return store.clients.add(name="Global Concrete Inc.", phone_number="555-0101")


@pytest.fixture
def sample_truck(store):
    """Create sample truck."""
    return store.trucks.add(
        truck_number="MH-12-AB-1234",
        truck_type="10-wheeler",
        owner_name="Rajesh Kumar",
        driver_name="Amit Sharma",
    )


@pytest.fixture
def sample_load(store, sample_client):
    """Create an open load worth 50000."""
    return store.loads.add(
        client_id=sample_client.id,
        loading_location="Mumbai Port",
        unloading_location="Pune Warehouse",
        material_description="Cement Bags",
        material_weight=20,
        weight_unit=WeightUnit.TONS,
        client_freight=50000,
        status=LoadStatus.OPEN,
    )


@pytest.fixture
def sample_trip(store, sample_load, sample_truck):
    """Assign the sample truck to the sample load."""
    return store.add_trip(
        sample_load.id,
        sample_truck.id,
        truck_freight=30000,
        driver_commission=2000,
        now=datetime(2024, 7, 21, 12, 0),
    )
