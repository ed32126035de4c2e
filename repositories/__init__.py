"""Repository pattern for store access."""
from repositories.base import BaseRepository
from repositories.client_repository import ClientRepository
from repositories.load_repository import LoadRepository
from repositories.truck_repository import TruckRepository
from repositories.trip_repository import TripRepository
from repositories.transaction_repository import TransactionRepository
from repositories.load_template_repository import LoadTemplateRepository
from repositories.document_repository import DocumentRepository

__all__ = [
    "BaseRepository",
    "ClientRepository",
    "LoadRepository",
    "TruckRepository",
    "TripRepository",
    "TransactionRepository",
    "LoadTemplateRepository",
    "DocumentRepository",
]
