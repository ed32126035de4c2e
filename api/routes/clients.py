"""Client endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, field_validator

from api.dependencies import get_store
from api.routes.loads import LoadResponse
from api.validators import sanitize, sanitize_optional
from constants import MAX_NAME_LENGTH
from services.listings import search_clients
from services.store import LogisticsStore
from utils.validation import validate_phone_number, validate_required_string

router = APIRouter()


class ClientPayload(BaseModel):
    name: str
    phone_number: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return sanitize(validate_required_string, value, "Client name", MAX_NAME_LENGTH)

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, value: Optional[str]) -> Optional[str]:
        return sanitize_optional(validate_phone_number, value)


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    phone_number: Optional[str]


@router.get("/clients", response_model=List[ClientResponse])
async def list_clients(search: str = "", store: LogisticsStore = Depends(get_store)):
    """List clients, optionally filtered by name."""
    return search_clients(store.clients.get_all(), search)


@router.post("/clients", response_model=ClientResponse, status_code=201)
async def create_client(payload: ClientPayload, store: LogisticsStore = Depends(get_store)):
    """Create a client."""
    return store.clients.add(**payload.model_dump())


@router.get("/clients/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, store: LogisticsStore = Depends(get_store)):
    """Get client by ID."""
    client = store.clients.get_by_id(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.put("/clients/{client_id}", response_model=ClientResponse)
async def update_client(client_id: str, payload: ClientPayload, store: LogisticsStore = Depends(get_store)):
    """Replace a client's details."""
    client = store.clients.update(client_id, **payload.model_dump())
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.delete("/clients/{client_id}", status_code=204)
async def delete_client(client_id: str, store: LogisticsStore = Depends(get_store)):
    """Delete a client. Its loads are kept."""
    if not store.clients.delete(client_id):
        raise HTTPException(status_code=404, detail="Client not found")
    return Response(status_code=204)


@router.get("/clients/{client_id}/loads", response_model=List[LoadResponse])
async def list_client_loads(client_id: str, store: LogisticsStore = Depends(get_store)):
    """Loads booked by a client, newest first."""
    if not store.clients.exists(client_id):
        raise HTTPException(status_code=404, detail="Client not found")
    return store.loads.get_by_client(client_id)
