"""Repository for truck operations."""
from typing import Optional

from sqlalchemy.orm import Session

from constants import ID_PREFIX_TRUCK
from models import Truck
from repositories.base import BaseRepository
from utils.identifiers import IdGenerator


class TruckRepository(BaseRepository[Truck]):
    """Repository for truck-specific store operations."""

    id_prefix = ID_PREFIX_TRUCK

    def __init__(self, db: Session, ids: IdGenerator, **kwargs):
        super().__init__(Truck, db, ids, **kwargs)

    def get_by_truck_number(self, truck_number: str) -> Optional[Truck]:
        """Get truck by registration number."""
        return self.db.query(Truck).filter(
            Truck.truck_number == truck_number
        ).first()
