"""Repository for payment transaction operations."""
from typing import List

from sqlalchemy.orm import Session

from constants import ID_PREFIX_TRANSACTION
from models import Transaction
from repositories.base import BaseRepository
from utils.identifiers import IdGenerator


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for transaction-specific store operations."""

    id_prefix = ID_PREFIX_TRANSACTION

    def __init__(self, db: Session, ids: IdGenerator, **kwargs):
        super().__init__(Transaction, db, ids, **kwargs)

    def get_by_trip(self, trip_id: str) -> List[Transaction]:
        """
        Get transactions recorded against a trip, newest first.

        Args:
            trip_id: Trip ID

        Returns:
            List of transactions
        """
        return self.db.query(Transaction).filter(
            Transaction.trip_id == trip_id
        ).order_by(Transaction.date.desc()).all()
