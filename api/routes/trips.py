"""Trip endpoints: assignment, timeline, payments and documents."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, field_validator

from api.dependencies import get_metrics, get_store
from api.routes.clients import ClientResponse
from api.routes.loads import LoadResponse
from api.routes.transactions import TransactionPayload, TransactionResponse, record_transaction
from api.routes.trucks import TruckResponse
from api.validators import sanitize
from constants import MAX_NAME_LENGTH, TAB_ACTIVE, TRIP_TABS
from exceptions import LoadNotFoundError
from metrics import MetricsCollector
from models import TripStatus
from services.listings import search_trips
from services.store import LogisticsStore
from utils.data_url import data_url_from_base64
from utils.validation import validate_amount, validate_required_string

router = APIRouter()


class TripPayload(BaseModel):
    load_id: str
    truck_id: str
    truck_freight: float = 0.0
    driver_commission: float = 0.0

    @field_validator("truck_freight")
    @classmethod
    def _truck_freight(cls, value: float) -> float:
        return sanitize(validate_amount, value, "Truck freight")

    @field_validator("driver_commission")
    @classmethod
    def _commission(cls, value: float) -> float:
        return sanitize(validate_amount, value, "Driver commission")


class AdvancePayload(BaseModel):
    status: Optional[TripStatus] = None
    notes: Optional[str] = None


class DocumentPayload(BaseModel):
    file_name: str
    file_type: Optional[str] = None
    content: str

    @field_validator("file_name")
    @classmethod
    def _file_name(cls, value: str) -> str:
        return sanitize(validate_required_string, value, "File name", MAX_NAME_LENGTH)


class TripEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: TripStatus
    timestamp: datetime
    notes: Optional[str]


class TripResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    load_id: str
    truck_id: str
    truck_freight: float
    driver_commission: float
    status: TripStatus
    events: List[TripEventResponse]


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    trip_id: str
    file_name: str
    file_type: Optional[str]
    uploaded_at: datetime
    file_url: str


class TripLedgerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class TripDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    trip: TripResponse
    load: Optional[LoadResponse]
    truck: Optional[TruckResponse]
    client: Optional[ClientResponse]
    ledger: TripLedgerResponse
    transactions: List[TransactionResponse]
    documents: List[DocumentResponse]


@router.get("/trips", response_model=List[TripResponse])
async def list_trips(tab: str = TAB_ACTIVE, search: str = "", store: LogisticsStore = Depends(get_store)):
    """List active or completed trips, most recently updated first."""
    if tab not in TRIP_TABS:
        raise HTTPException(status_code=422, detail=f"tab must be one of {TRIP_TABS}")

    snapshot = store.snapshot()
    return search_trips(snapshot.trips, snapshot.loads, snapshot.trucks, snapshot.clients, tab, search)


@router.post("/trips", response_model=TripResponse, status_code=201)
async def assign_trip(payload: TripPayload, store: LogisticsStore = Depends(get_store)):
    """Assign a truck to an open load."""
    load = store.loads.get_by_id(payload.load_id)
    if not load:
        raise LoadNotFoundError(f"Load {payload.load_id} not found")
    if not store.trucks.exists(payload.truck_id):
        raise HTTPException(status_code=404, detail="Truck not found")
    if store.trips.get_by_load(load.id):
        raise HTTPException(status_code=409, detail=f"Load is already {load.status.value}")

    return store.add_trip(**payload.model_dump())


@router.get("/trips/{trip_id}", response_model=TripDetailResponse)
async def get_trip(trip_id: str, metrics: MetricsCollector = Depends(get_metrics)):
    """Trip with its load, truck, client, ledger, payments and documents."""
    return TripDetailResponse.model_validate(metrics.get_trip_detail(trip_id))


@router.post("/trips/{trip_id}/advance", response_model=TripResponse)
async def advance_trip(
    trip_id: str,
    payload: Optional[AdvancePayload] = None,
    store: LogisticsStore = Depends(get_store)
):
    """Move a trip to its next status, or to the given one if it is the next."""
    payload = payload or AdvancePayload()
    trip = store.advance_trip_status(trip_id, payload.status, notes=payload.notes)
    if trip is None:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


@router.delete("/trips/{trip_id}", status_code=204)
async def delete_trip(trip_id: str, store: LogisticsStore = Depends(get_store)):
    """Delete a trip. Its payments and documents are kept."""
    if not store.trips.delete(trip_id):
        raise HTTPException(status_code=404, detail="Trip not found")
    return Response(status_code=204)


@router.post("/trips/{trip_id}/transactions", response_model=TransactionResponse, status_code=201)
async def add_trip_transaction(
    trip_id: str,
    payload: TransactionPayload,
    store: LogisticsStore = Depends(get_store)
):
    """Record a payment against this trip."""
    return record_transaction(store, trip_id, payload)


@router.get("/trips/{trip_id}/documents", response_model=List[DocumentResponse])
async def list_trip_documents(trip_id: str, store: LogisticsStore = Depends(get_store)):
    """Documents attached to a trip."""
    if not store.trips.exists(trip_id):
        raise HTTPException(status_code=404, detail="Trip not found")
    return store.documents.get_by_trip(trip_id)


@router.post("/trips/{trip_id}/documents", response_model=DocumentResponse, status_code=201)
async def upload_trip_document(
    trip_id: str,
    payload: DocumentPayload,
    store: LogisticsStore = Depends(get_store)
):
    """
    Attach a file to a trip.

    The content is base64 text (or an existing data URL) and is stored
    inline as a data URL.
    """
    if not store.trips.exists(trip_id):
        raise HTTPException(status_code=404, detail="Trip not found")

    file_url = data_url_from_base64(payload.content, payload.file_type)
    return store.add_document(trip_id, payload.file_name, payload.file_type, file_url)
