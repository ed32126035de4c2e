"""Load and load template endpoints."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, field_validator

from api.dependencies import get_store
from api.validators import sanitize, sanitize_optional
from constants import MAX_DESCRIPTION_LENGTH, MAX_LOCATION_LENGTH, MAX_TEMPLATE_NAME_LENGTH
from exceptions import LoadNotFoundError, TemplateNotFoundError
from models import LoadPriority, LoadStatus, WeightUnit
from services.listings import loads_awaiting_assignment, search_loads
from services.store import LogisticsStore
from utils.validation import validate_amount, validate_required_string

router = APIRouter()


class LoadPayload(BaseModel):
    client_id: str
    loading_location: str
    unloading_location: str
    material_description: str = ""
    material_weight: float = 0.0
    weight_unit: WeightUnit = WeightUnit.TONS
    client_freight: float = 0.0
    priority: LoadPriority = LoadPriority.MEDIUM

    @field_validator("loading_location", "unloading_location")
    @classmethod
    def _location(cls, value: str) -> str:
        return sanitize(validate_required_string, value, "Location", MAX_LOCATION_LENGTH)

    @field_validator("material_description")
    @classmethod
    def _description(cls, value: str) -> str:
        return sanitize_optional(validate_required_string, value, "Material description", MAX_DESCRIPTION_LENGTH) or ""

    @field_validator("material_weight")
    @classmethod
    def _weight(cls, value: float) -> float:
        return sanitize(validate_amount, value, "Material weight")

    @field_validator("client_freight")
    @classmethod
    def _freight(cls, value: float) -> float:
        return sanitize(validate_amount, value, "Client freight")


class LoadUpdate(BaseModel):
    """Partial load update; omitted fields are left alone."""

    client_id: Optional[str] = None
    loading_location: Optional[str] = None
    unloading_location: Optional[str] = None
    material_description: Optional[str] = None
    material_weight: Optional[float] = None
    weight_unit: Optional[WeightUnit] = None
    client_freight: Optional[float] = None
    status: Optional[LoadStatus] = None
    priority: Optional[LoadPriority] = None

    @field_validator("material_weight", "client_freight")
    @classmethod
    def _amount(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return sanitize(validate_amount, value)


class LoadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    loading_location: Optional[str]
    unloading_location: Optional[str]
    material_description: Optional[str]
    material_weight: Optional[float]
    weight_unit: Optional[WeightUnit]
    client_freight: float
    status: LoadStatus
    priority: Optional[LoadPriority]
    created_at: Optional[datetime]


class TemplatePayload(BaseModel):
    template_name: str

    @field_validator("template_name")
    @classmethod
    def _name(cls, value: str) -> str:
        return sanitize(validate_required_string, value, "Template name", MAX_TEMPLATE_NAME_LENGTH)


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    template_name: str
    client_id: str
    loading_location: Optional[str]
    unloading_location: Optional[str]
    material_description: Optional[str]
    material_weight: Optional[float]
    weight_unit: Optional[WeightUnit]
    client_freight: Optional[float]
    priority: Optional[LoadPriority]


@router.get("/loads", response_model=List[LoadResponse])
async def list_loads(
    search: str = "",
    status: Optional[LoadStatus] = None,
    priority: Optional[LoadPriority] = None,
    store: LogisticsStore = Depends(get_store)
):
    """List loads newest first, filtered by text, status and priority."""
    return search_loads(store.loads.get_all(), store.clients.get_all(), search, status, priority)


@router.get("/loads/open", response_model=List[LoadResponse])
async def list_open_loads(store: LogisticsStore = Depends(get_store)):
    """Loads still waiting for a truck."""
    return loads_awaiting_assignment(store.loads.get_all())


@router.post("/loads", response_model=LoadResponse, status_code=201)
async def create_load(payload: LoadPayload, store: LogisticsStore = Depends(get_store)):
    """Create an open load."""
    return store.loads.add(status=LoadStatus.OPEN, **payload.model_dump())


@router.get("/loads/{load_id}", response_model=LoadResponse)
async def get_load(load_id: str, store: LogisticsStore = Depends(get_store)):
    """Get load by ID."""
    load = store.loads.get_by_id(load_id)
    if not load:
        raise HTTPException(status_code=404, detail="Load not found")
    return load


@router.put("/loads/{load_id}", response_model=LoadResponse)
async def update_load(load_id: str, payload: LoadUpdate, store: LogisticsStore = Depends(get_store)):
    """Update the given fields of a load."""
    load = store.loads.update(load_id, **payload.model_dump(exclude_unset=True))
    if not load:
        raise HTTPException(status_code=404, detail="Load not found")
    return load


@router.delete("/loads/{load_id}", status_code=204)
async def delete_load(load_id: str, store: LogisticsStore = Depends(get_store)):
    """Delete a load. Trips carrying it are kept."""
    if not store.loads.delete(load_id):
        raise HTTPException(status_code=404, detail="Load not found")
    return Response(status_code=204)


@router.post("/loads/{load_id}/template", response_model=TemplateResponse, status_code=201)
async def save_load_as_template(
    load_id: str,
    payload: TemplatePayload,
    store: LogisticsStore = Depends(get_store)
):
    """Save a load's fields as a reusable template."""
    template = store.save_load_as_template(load_id, payload.template_name)
    if template is None:
        raise LoadNotFoundError(f"Load {load_id} not found")
    return template


@router.get("/load-templates", response_model=List[TemplateResponse])
async def list_templates(store: LogisticsStore = Depends(get_store)):
    """List saved load templates."""
    return store.load_templates.get_all(order_by="template_name", order_direction="asc")


@router.post("/load-templates/{template_id}/loads", response_model=LoadResponse, status_code=201)
async def create_load_from_template(
    template_id: str,
    payload: Optional[LoadUpdate] = None,
    store: LogisticsStore = Depends(get_store)
):
    """Create an open load from a template, with optional field overrides."""
    overrides = payload.model_dump(exclude_unset=True) if payload else {}
    overrides.setdefault("status", LoadStatus.OPEN)
    load = store.create_load_from_template(template_id, **overrides)
    if load is None:
        raise TemplateNotFoundError(f"Template {template_id} not found")
    return load


@router.delete("/load-templates/{template_id}", status_code=204)
async def delete_template(template_id: str, store: LogisticsStore = Depends(get_store)):
    """Delete a load template."""
    if not store.load_templates.delete(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return Response(status_code=204)
