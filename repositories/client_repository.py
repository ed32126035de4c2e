"""Repository for client operations."""
from sqlalchemy.orm import Session

from constants import ID_PREFIX_CLIENT
from models import Client
from repositories.base import BaseRepository
from utils.identifiers import IdGenerator


class ClientRepository(BaseRepository[Client]):
    """Repository for client-specific store operations."""

    id_prefix = ID_PREFIX_CLIENT

    def __init__(self, db: Session, ids: IdGenerator, **kwargs):
        """
        Initialize client repository.

        Args:
            db: Store session
            ids: Identifier generator
        """
        super().__init__(Client, db, ids, **kwargs)
