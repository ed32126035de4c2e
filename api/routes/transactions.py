"""Payment transaction endpoints."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from api.dependencies import get_store
from api.validators import sanitize
from constants import TYPE_FILTER_ALL
from models import (
    PaymentMode,
    PaymentStatus,
    TransactionPurpose,
    TransactionType,
    default_purpose_for,
    type_for_purpose,
)
from services.listings import search_transactions
from services.store import LogisticsStore
from utils.date_helpers import to_naive_utc
from utils.validation import validate_amount

router = APIRouter()


class TransactionPayload(BaseModel):
    """
    A payment against a trip.

    Either type or purpose may be left out; the missing one is derived from
    the other.
    """

    amount: float
    type: Optional[TransactionType] = None
    purpose: Optional[TransactionPurpose] = None
    payment_mode: PaymentMode = PaymentMode.CASH
    status: PaymentStatus = PaymentStatus.COMPLETED
    date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def _amount(cls, value: float) -> float:
        return sanitize(validate_amount, value, "Amount", allow_zero=False)

    @field_validator("date")
    @classmethod
    def _date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value else None

    @model_validator(mode="after")
    def _type_and_purpose(self):
        if self.type is None and self.purpose is None:
            raise ValueError("Either type or purpose is required")
        if self.type is None:
            self.type = type_for_purpose(self.purpose)
        elif self.purpose is None:
            self.purpose = default_purpose_for(self.type)
        return self


class NewTransaction(TransactionPayload):
    trip_id: str


class TransactionUpdate(BaseModel):
    """Partial transaction update; omitted fields are left alone."""

    amount: Optional[float] = None
    payment_mode: Optional[PaymentMode] = None
    status: Optional[PaymentStatus] = None
    notes: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def _amount(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return sanitize(validate_amount, value, "Amount", allow_zero=False)


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    trip_id: str
    amount: float
    date: datetime
    type: TransactionType
    purpose: TransactionPurpose
    payment_mode: Optional[PaymentMode]
    status: PaymentStatus
    notes: Optional[str]


def record_transaction(store: LogisticsStore, trip_id: str, payload: TransactionPayload):
    """Record a payment against an existing trip."""
    if not store.trips.exists(trip_id):
        raise HTTPException(status_code=404, detail="Trip not found")

    fields = payload.model_dump(exclude={"trip_id"})
    fields["date"] = fields["date"] or store.clock()
    return store.transactions.add(trip_id=trip_id, **fields)


@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    search: str = "",
    type: str = TYPE_FILTER_ALL,
    store: LogisticsStore = Depends(get_store)
):
    """List transactions newest first, filtered by trip id / notes and type."""
    if type != TYPE_FILTER_ALL and type not in {t.value for t in TransactionType}:
        raise HTTPException(status_code=422, detail=f"Unknown transaction type: {type}")
    return search_transactions(store.transactions.get_all(), search, type)


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
async def create_transaction(payload: NewTransaction, store: LogisticsStore = Depends(get_store)):
    """Record a payment."""
    return record_transaction(store, payload.trip_id, payload)


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(transaction_id: str, store: LogisticsStore = Depends(get_store)):
    """Get transaction by ID."""
    transaction = store.transactions.get_by_id(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    store: LogisticsStore = Depends(get_store)
):
    """Update amount, mode, status or notes of a payment."""
    transaction = store.transactions.update(transaction_id, **payload.model_dump(exclude_unset=True))
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.delete("/transactions/{transaction_id}", status_code=204)
async def delete_transaction(transaction_id: str, store: LogisticsStore = Depends(get_store)):
    """Delete a payment."""
    if not store.transactions.delete(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    return Response(status_code=204)
