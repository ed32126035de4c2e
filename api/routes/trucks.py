"""Truck endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, field_validator

from api.dependencies import get_store
from api.validators import sanitize, sanitize_optional
from services.listings import search_trucks
from services.store import LogisticsStore
from utils.validation import (
    validate_ifsc_code,
    validate_pan_card,
    validate_phone_number,
    validate_truck_number,
)

router = APIRouter()


class TruckPayload(BaseModel):
    truck_number: str
    truck_type: str = ""
    owner_name: str = ""
    owner_contact: Optional[str] = None
    driver_name: str = ""
    driver_phone_number: Optional[str] = None
    truck_image_url: Optional[str] = None
    driver_image_url: Optional[str] = None
    driving_licence_url: Optional[str] = None
    rc_url: Optional[str] = None
    insurance_url: Optional[str] = None
    pan_card: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_ifsc_code: Optional[str] = None

    @field_validator("truck_number")
    @classmethod
    def _truck_number(cls, value: str) -> str:
        return sanitize(validate_truck_number, value)

    @field_validator("owner_contact", "driver_phone_number")
    @classmethod
    def _phone(cls, value: Optional[str]) -> Optional[str]:
        return sanitize_optional(validate_phone_number, value)

    @field_validator("pan_card")
    @classmethod
    def _pan(cls, value: Optional[str]) -> Optional[str]:
        return sanitize_optional(validate_pan_card, value)

    @field_validator("bank_ifsc_code")
    @classmethod
    def _ifsc(cls, value: Optional[str]) -> Optional[str]:
        return sanitize_optional(validate_ifsc_code, value)


class TruckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    truck_number: str
    truck_type: Optional[str]
    owner_name: Optional[str]
    owner_contact: Optional[str]
    driver_name: Optional[str]
    driver_phone_number: Optional[str]
    truck_image_url: Optional[str] = None
    driver_image_url: Optional[str] = None
    driving_licence_url: Optional[str] = None
    rc_url: Optional[str] = None
    insurance_url: Optional[str] = None
    pan_card: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_ifsc_code: Optional[str] = None


@router.get("/trucks", response_model=List[TruckResponse])
async def list_trucks(search: str = "", store: LogisticsStore = Depends(get_store)):
    """List trucks, optionally filtered by number, owner or driver."""
    return search_trucks(store.trucks.get_all(), search)


@router.post("/trucks", response_model=TruckResponse, status_code=201)
async def create_truck(payload: TruckPayload, store: LogisticsStore = Depends(get_store)):
    """Register a truck. Registration numbers are unique."""
    if store.trucks.get_by_truck_number(payload.truck_number):
        raise HTTPException(status_code=409, detail=f"Truck {payload.truck_number} already registered")
    return store.trucks.add(**payload.model_dump())


@router.get("/trucks/{truck_id}", response_model=TruckResponse)
async def get_truck(truck_id: str, store: LogisticsStore = Depends(get_store)):
    """Get truck by ID."""
    truck = store.trucks.get_by_id(truck_id)
    if not truck:
        raise HTTPException(status_code=404, detail="Truck not found")
    return truck


@router.put("/trucks/{truck_id}", response_model=TruckResponse)
async def update_truck(truck_id: str, payload: TruckPayload, store: LogisticsStore = Depends(get_store)):
    """Replace a truck's details."""
    truck = store.trucks.update(truck_id, **payload.model_dump())
    if not truck:
        raise HTTPException(status_code=404, detail="Truck not found")
    return truck


@router.delete("/trucks/{truck_id}", status_code=204)
async def delete_truck(truck_id: str, store: LogisticsStore = Depends(get_store)):
    """Delete a truck. Its trips are kept."""
    if not store.trucks.delete(truck_id):
        raise HTTPException(status_code=404, detail="Truck not found")
    return Response(status_code=204)


@router.get("/trucks/{truck_id}/trips")
async def list_truck_trips(truck_id: str, store: LogisticsStore = Depends(get_store)):
    """Trips a truck has run, with their current status."""
    if not store.trucks.exists(truck_id):
        raise HTTPException(status_code=404, detail="Truck not found")
    return [
        {"id": trip.id, "load_id": trip.load_id, "status": trip.status.value}
        for trip in store.trips.get_by_truck(truck_id)
    ]
