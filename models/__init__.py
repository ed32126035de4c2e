"""Database models."""
from models.database import Base, build_engine, init_db
from models.client import Client
from models.load import Load, LoadStatus, LoadPriority, WeightUnit
from models.truck import Truck
from models.trip import Trip, TripEvent, TripStatus, load_status_for, next_status
from models.transaction import (
    Transaction,
    TransactionType,
    TransactionPurpose,
    PaymentMode,
    PaymentStatus,
    default_purpose_for,
    type_for_purpose,
)
from models.load_template import LoadTemplate
from models.document import Document

__all__ = [
    "Base",
    "build_engine",
    "init_db",
    "Client",
    "Load",
    "LoadStatus",
    "LoadPriority",
    "WeightUnit",
    "Truck",
    "Trip",
    "TripEvent",
    "TripStatus",
    "load_status_for",
    "next_status",
    "Transaction",
    "TransactionType",
    "TransactionPurpose",
    "PaymentMode",
    "PaymentStatus",
    "default_purpose_for",
    "type_for_purpose",
    "LoadTemplate",
    "Document",
]
