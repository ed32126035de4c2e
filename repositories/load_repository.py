"""Repository for load operations."""
from typing import List

from sqlalchemy.orm import Session

from constants import ID_PREFIX_LOAD
from models import Load
from repositories.base import BaseRepository
from utils.identifiers import IdGenerator


class LoadRepository(BaseRepository[Load]):
    """Repository for load-specific store operations."""

    id_prefix = ID_PREFIX_LOAD
    timestamp_field = "created_at"

    def __init__(self, db: Session, ids: IdGenerator, **kwargs):
        """
        Initialize load repository.

        Args:
            db: Store session
            ids: Identifier generator
        """
        super().__init__(Load, db, ids, **kwargs)

    def get_by_client(self, client_id: str) -> List[Load]:
        """
        Get loads for a client, newest first.

        Args:
            client_id: Client ID

        Returns:
            List of loads
        """
        return self.db.query(Load).filter(
            Load.client_id == client_id
        ).order_by(Load.created_at.desc()).all()
