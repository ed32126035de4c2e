"""Tests for the HTTP API."""
import base64
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from api.main import app
from services import seed_demo_data


@pytest.fixture
def client():
    """Test client with a fresh store per test."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(client):
    """Test client whose store holds the demo dataset."""
    seed_demo_data(client.app.state.store)
    return client


@pytest.fixture
def booked_load(client):
    """Create a client, a truck and an open load over the API."""
    customer = client.post("/api/clients", json={"name": "Global Concrete Inc.", "phone_number": "555-0101"}).json()
    truck = client.post("/api/trucks", json={
        "truck_number": "mh 12 ab 1234",
        "owner_name": "Rajesh Kumar",
        "driver_name": "Amit Sharma",
    }).json()
    load = client.post("/api/loads", json={
        "client_id": customer["id"],
        "loading_location": "Mumbai Port",
        "unloading_location": "Pune Warehouse",
        "material_description": "Cement Bags",
        "material_weight": 20,
        "client_freight": 50000,
    }).json()
    return {"client": customer, "truck": truck, "load": load}


@pytest.fixture
def trip(client, booked_load):
    """Assign the truck to the load."""
    response = client.post("/api/trips", json={
        "load_id": booked_load["load"]["id"],
        "truck_id": booked_load["truck"]["id"],
        "truck_freight": 30000,
        "driver_commission": 2000,
    })
    assert response.status_code == 201
    return response.json()


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health_reports_counts(seeded_client):
    """Test health check includes collection sizes."""
    response = seeded_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["counts"]["trips"] == 3
    assert "X-Request-ID" in response.headers


def test_create_client_normalizes_phone(client):
    """Test client creation."""
    response = client.post("/api/clients", json={"name": "  Steel Beams Co. ", "phone_number": "555-0102"})

    assert response.status_code == 201
    assert response.json()["name"] == "Steel Beams Co."
    assert response.json()["phone_number"] == "5550102"
    assert response.json()["id"].startswith("cli")


@pytest.mark.parametrize("payload", [
    {"name": "", "phone_number": "555-0102"},
    {"name": "Steel Beams Co.", "phone_number": "123"},
])
def test_create_client_rejects_bad_input(client, payload):
    """Test sanitization failures return 422."""
    assert client.post("/api/clients", json=payload).status_code == 422


def test_truck_number_normalized(booked_load):
    """Test truck numbers are stored in canonical form."""
    assert booked_load["truck"]["truck_number"] == "MH-12-AB-1234"


def test_create_truck_rejects_bad_number(client):
    """Test malformed registration numbers are refused."""
    response = client.post("/api/trucks", json={"truck_number": "not a truck"})

    assert response.status_code == 422


def test_new_load_is_open(booked_load):
    """Test loads start open."""
    assert booked_load["load"]["status"] == "Open"


def test_update_and_delete_unknown_ids(client):
    """Test unknown ids are 404 over HTTP."""
    assert client.put("/api/clients/cli-missing", json={"name": "Ghost"}).status_code == 404
    assert client.delete("/api/clients/cli-missing").status_code == 404
    assert client.get("/api/loads/load-missing").status_code == 404


def test_assign_trip_marks_load_assigned(client, booked_load, trip):
    """Test assigning a truck."""
    load = client.get(f"/api/loads/{booked_load['load']['id']}").json()

    assert trip["status"] == "Assigned"
    assert [event["status"] for event in trip["events"]] == ["Assigned"]
    assert load["status"] == "Assigned"


def test_assign_trip_twice_conflicts(client, booked_load, trip):
    """Test an assigned load cannot get a second trip."""
    response = client.post("/api/trips", json={
        "load_id": booked_load["load"]["id"],
        "truck_id": booked_load["truck"]["id"],
    })

    assert response.status_code == 409


def test_assign_trip_unknown_load(client, booked_load):
    """Test assigning to a missing load."""
    response = client.post("/api/trips", json={"load_id": "load-missing", "truck_id": booked_load["truck"]["id"]})

    assert response.status_code == 404


def test_advance_trip(client, trip):
    """Test stepping a trip forward."""
    response = client.post(f"/api/trips/{trip['id']}/advance", json={"notes": "Loaded"})

    assert response.status_code == 200
    assert response.json()["status"] == "Truck Loaded"
    assert response.json()["events"][-1]["notes"] == "Loaded"


def test_advance_trip_invalid_transition(client, trip):
    """Test skipping ahead is a conflict."""
    response = client.post(f"/api/trips/{trip['id']}/advance", json={"status": "Completed"})

    assert response.status_code == 409


def test_advance_unknown_trip(client):
    """Test advancing a missing trip."""
    assert client.post("/api/trips/trip-missing/advance").status_code == 404


def test_trip_tabs(seeded_client):
    """Test active and completed tabs."""
    assert len(seeded_client.get("/api/trips").json()) == 2
    assert len(seeded_client.get("/api/trips", params={"tab": "completed"}).json()) == 1
    assert len(seeded_client.get("/api/trips", params={"search": "vikram"}).json()) == 1
    assert seeded_client.get("/api/trips", params={"tab": "archived"}).status_code == 422


def test_record_payment_derives_type(client, trip):
    """Test a purpose alone is enough to record a payment."""
    response = client.post(f"/api/trips/{trip['id']}/transactions", json={
        "amount": 20000,
        "purpose": "Client Freight",
        "payment_mode": "UPI",
    })

    assert response.status_code == 201
    assert response.json()["type"] == "Credit"
    assert response.json()["status"] == "Completed"


def test_record_payment_derives_purpose(client, trip):
    """Test a debit defaults to truck freight."""
    response = client.post("/api/transactions", json={"trip_id": trip["id"], "amount": 5000, "type": "Debit"})

    assert response.status_code == 201
    assert response.json()["purpose"] == "Truck Freight"


@pytest.mark.parametrize("payload", [
    {"amount": 0, "purpose": "Client Freight"},
    {"amount": 100},
])
def test_record_payment_rejects_bad_input(client, trip, payload):
    """Test non-positive amounts and missing type/purpose."""
    assert client.post(f"/api/trips/{trip['id']}/transactions", json=payload).status_code == 422


def test_record_payment_unknown_trip(client):
    """Test payments need an existing trip."""
    response = client.post("/api/transactions", json={"trip_id": "trip-missing", "amount": 100, "type": "Credit"})

    assert response.status_code == 404


def test_transaction_listing_filters(seeded_client):
    """Test type filter on the transactions page."""
    assert len(seeded_client.get("/api/transactions").json()) == 4
    assert len(seeded_client.get("/api/transactions", params={"type": "Debit"}).json()) == 2
    assert seeded_client.get("/api/transactions", params={"type": "Refund"}).status_code == 422


def test_update_transaction_status(seeded_client):
    """Test marking a pending payment as completed."""
    pending = next(t for t in seeded_client.get("/api/transactions").json() if t["status"] == "Pending")

    response = seeded_client.put(f"/api/transactions/{pending['id']}", json={"status": "Completed"})

    assert response.status_code == 200
    assert response.json()["status"] == "Completed"
    assert response.json()["amount"] == pending["amount"]


def test_upload_document(client, trip):
    """Test documents are stored as data URLs."""
    content = base64.b64encode(b"%PDF-1.4 proof of delivery").decode()

    response = client.post(f"/api/trips/{trip['id']}/documents", json={
        "file_name": "pod.pdf",
        "file_type": "application/pdf",
        "content": content,
    })

    assert response.status_code == 201
    assert response.json()["file_url"] == f"data:application/pdf;base64,{content}"
    assert len(client.get(f"/api/trips/{trip['id']}/documents").json()) == 1


def test_upload_document_bad_base64(client, trip):
    """Test undecodable content is refused."""
    response = client.post(f"/api/trips/{trip['id']}/documents", json={
        "file_name": "pod.pdf",
        "content": "not base64!",
    })

    assert response.status_code == 422


def test_trip_detail(client, booked_load, trip):
    """Test trip detail joins load, truck, client and ledger."""
    client.post(f"/api/trips/{trip['id']}/transactions", json={"amount": 20000, "purpose": "Client Freight"})

    response = client.get(f"/api/trips/{trip['id']}")

    assert response.status_code == 200
    detail = response.json()
    assert detail["client"]["name"] == "Global Concrete Inc."
    assert detail["truck"]["truck_number"] == "MH-12-AB-1234"
    assert detail["ledger"]["client_due"] == 30000
    assert detail["ledger"]["truck_due"] == 30000
    assert len(detail["transactions"]) == 1


def test_trip_detail_unknown_trip(client):
    """Test missing trip detail is 404."""
    assert client.get("/api/trips/trip-missing").status_code == 404


def test_delete_trip_keeps_payments(client, trip):
    """Test deleting a trip leaves its payments as orphans."""
    client.post(f"/api/trips/{trip['id']}/transactions", json={"amount": 20000, "purpose": "Client Freight"})

    assert client.delete(f"/api/trips/{trip['id']}").status_code == 204

    orphans = client.get("/api/integrity/orphans").json()
    assert orphans["clean"] is False
    assert len(orphans["transactions_missing_trip"]) == 1


def test_load_templates(client, booked_load):
    """Test saving a load as a template and booking from it."""
    load_id = booked_load["load"]["id"]

    template = client.post(f"/api/loads/{load_id}/template", json={"template_name": "Cement run"})
    assert template.status_code == 201

    created = client.post(f"/api/load-templates/{template.json()['id']}/loads", json={"client_freight": 52000})
    assert created.status_code == 201
    assert created.json()["id"] != load_id
    assert created.json()["loading_location"] == "Mumbai Port"
    assert created.json()["client_freight"] == 52000
    assert created.json()["status"] == "Open"

    assert len(client.get("/api/load-templates").json()) == 1


def test_load_templates_unknown_ids(client):
    """Test templates from missing loads and loads from missing templates."""
    assert client.post("/api/loads/load-missing/template", json={"template_name": "x"}).status_code == 404
    assert client.post("/api/load-templates/template-missing/loads").status_code == 404


def test_dashboard(seeded_client):
    """Test dashboard figures."""
    data = seeded_client.get("/api/dashboard").json()

    assert data["active_trips_count"] == 2
    assert data["totals"]["cash_in_hand"] == 5000
    assert data["currency"] == "INR"
    assert len(data["recent_active_trips"]) == 2


def test_dues(seeded_client):
    """Test receivable and payable lists."""
    client_dues = seeded_client.get("/api/dashboard/client-dues").json()
    truck_dues = seeded_client.get("/api/dashboard/truck-dues").json()

    assert sorted(row["due"] for row in client_dues) == [30000, 35000]
    assert len(truck_dues) == 4


def test_reports(seeded_client):
    """Test the reports page over a window covering the demo data."""
    data = seeded_client.get("/api/reports", params={"days": 100000}).json()

    assert data["window_days"] == 100000
    assert [row["profit"] for row in data["trip_profitability"]] == [2500]
    assert [row["amount"] for row in data["pending_receivables"]] == [30000]
    assert len(data["client_wise_summary"]) == 3


def test_reports_cover_all_trips_by_default(client, booked_load):
    """Test an old trip counts in the default report and drops out of a window."""
    store = client.app.state.store
    store.add_trip(
        booked_load["load"]["id"],
        booked_load["truck"]["id"],
        truck_freight=30000,
        driver_commission=2000,
        now=store.clock() - timedelta(days=60),
    )

    data = client.get("/api/reports").json()
    dashboard = client.get("/api/dashboard").json()

    assert data["window_days"] is None
    assert data["totals"]["total_client_revenue"] == 50000
    assert data["totals"]["total_client_revenue"] == dashboard["totals"]["total_client_revenue"]

    windowed = client.get("/api/reports", params={"days": 30}).json()
    assert windowed["totals"]["total_client_revenue"] == 0


def test_reports_rejects_zero_days(client):
    """Test the window must be positive."""
    assert client.get("/api/reports", params={"days": 0}).status_code == 422


def test_orphans_clean_store(seeded_client):
    """Test the demo data has no dangling references."""
    assert seeded_client.get("/api/integrity/orphans").json()["clean"] is True


def test_duplicate_truck_number_conflicts(client, booked_load):
    """Test a registration number can only be registered once."""
    response = client.post("/api/trucks", json={"truck_number": "MH12AB1234"})

    assert response.status_code == 409


def test_client_loads_and_truck_trips(client, booked_load, trip):
    """Test per-client and per-truck listings."""
    loads = client.get(f"/api/clients/{booked_load['client']['id']}/loads").json()
    trips = client.get(f"/api/trucks/{booked_load['truck']['id']}/trips").json()

    assert [load["id"] for load in loads] == [booked_load["load"]["id"]]
    assert trips == [{"id": trip["id"], "load_id": booked_load["load"]["id"], "status": "Assigned"}]
    assert client.get("/api/trucks/truck-missing/trips").status_code == 404
