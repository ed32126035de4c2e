"""Repository for trip document operations."""
from typing import List

from sqlalchemy.orm import Session

from constants import ID_PREFIX_DOCUMENT
from models import Document
from repositories.base import BaseRepository
from utils.identifiers import IdGenerator


class DocumentRepository(BaseRepository[Document]):
    """Repository for documents attached to trips."""

    id_prefix = ID_PREFIX_DOCUMENT
    timestamp_field = "uploaded_at"

    def __init__(self, db: Session, ids: IdGenerator, **kwargs):
        super().__init__(Document, db, ids, **kwargs)

    def get_by_trip(self, trip_id: str) -> List[Document]:
        """
        Get documents attached to a trip, in upload order.

        Args:
            trip_id: Trip ID

        Returns:
            List of documents
        """
        return self.db.query(Document).filter(
            Document.trip_id == trip_id
        ).order_by(Document.uploaded_at.asc()).all()
