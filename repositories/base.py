"""Base repository with common store operations."""
from datetime import datetime
from typing import Callable, Generic, TypeVar, Type, Optional, List, Dict, Any

from sqlalchemy import desc, asc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import StoreError
from logging_config import get_logger
from utils.date_helpers import utcnow
from utils.identifiers import IdGenerator

logger = get_logger(__name__)

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing the uniform add / update / delete surface.

    Unknown ids are never an error: update returns None and delete returns
    False, leaving the collection untouched. Only database faults raise.
    """

    id_prefix: str = ""
    timestamp_field: Optional[str] = None

    def __init__(
        self,
        model: Type[ModelType],
        db: Session,
        ids: IdGenerator,
        clock: Callable[[], datetime] = utcnow
    ):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Session bound to the store's engine
            ids: Identifier generator shared by the store
            clock: Source of creation timestamps
        """
        self.model = model
        self.db = db
        self.ids = ids
        self.clock = clock

    @property
    def _name(self) -> str:
        return self.model.__name__

    def _column_names(self) -> set:
        return set(self.model.__table__.columns.keys())

    def get_by_id(self, id: str) -> Optional[ModelType]:
        """
        Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None if not found
        """
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            logger.error(f"Error getting {self._name} by ID {id}: {e}")
            raise StoreError(f"Failed to get {self._name}") from e

    def get_all(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        order_direction: str = "desc"
    ) -> List[ModelType]:
        """
        Get all entities, optionally ordered and paginated.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return (None for all)
            order_by: Column to order by
            order_direction: "asc" or "desc"

        Returns:
            List of entities
        """
        try:
            query = self.db.query(self.model)

            # Apply ordering
            if order_by:
                order_field = getattr(self.model, order_by, None)
                if order_field is not None:
                    if order_direction == "asc":
                        query = query.order_by(asc(order_field))
                    else:
                        query = query.order_by(desc(order_field))

            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)

            return query.all()

        except SQLAlchemyError as e:
            logger.error(f"Error getting all {self._name}: {e}")
            raise StoreError(f"Failed to get {self._name} list") from e

    def add(self, **kwargs) -> ModelType:
        """
        Create a new entity with a fresh id.

        A caller supplied id (or creation timestamp) is replaced.

        Args:
            **kwargs: Entity attributes

        Returns:
            Created entity
        """
        kwargs.pop("id", None)
        kwargs["id"] = self.ids.next_id(self.id_prefix)
        if self.timestamp_field:
            kwargs[self.timestamp_field] = self.clock()

        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.commit()

            logger.info(f"Created {self._name} with ID {entity.id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating {self._name}: {e}")
            raise StoreError(f"Failed to create {self._name}") from e

    def update(self, id: str, **kwargs) -> Optional[ModelType]:
        """
        Replace the stored column values of an entity.

        Args:
            id: Entity ID
            **kwargs: Column values; unknown keys and the id are ignored

        Returns:
            Updated entity or None if not found
        """
        entity = self.get_by_id(id)

        if entity is None:
            logger.debug(f"Ignoring update of unknown {self._name} {id}")
            return None

        columns = self._column_names() - {"id"}

        try:
            for key, value in kwargs.items():
                if key in columns:
                    setattr(entity, key, value)

            self.db.commit()

            logger.info(f"Updated {self._name} with ID {id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating {self._name} {id}: {e}")
            raise StoreError(f"Failed to update {self._name}") from e

    def delete(self, id: str) -> bool:
        """
        Delete entity by ID. Nothing referencing it is touched.

        Args:
            id: Entity ID

        Returns:
            True if deleted, False if not found
        """
        entity = self.get_by_id(id)

        if entity is None:
            logger.debug(f"Ignoring delete of unknown {self._name} {id}")
            return False

        try:
            self.db.delete(entity)
            self.db.commit()

            logger.info(f"Deleted {self._name} with ID {id}")
            return True

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting {self._name} {id}: {e}")
            raise StoreError(f"Failed to delete {self._name}") from e

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """
        Count entities with optional filters.

        Args:
            filters: Optional column -> value filter dictionary

        Returns:
            Count of entities
        """
        try:
            query = self.db.query(self.model)

            if filters:
                for key, value in filters.items():
                    if hasattr(self.model, key):
                        query = query.filter(getattr(self.model, key) == value)

            return query.count()

        except SQLAlchemyError as e:
            logger.error(f"Error counting {self._name}: {e}")
            raise StoreError(f"Failed to count {self._name}") from e

    def exists(self, id: str) -> bool:
        """
        Check if entity exists by ID.

        Args:
            id: Entity ID

        Returns:
            True if exists, False otherwise
        """
        return self.get_by_id(id) is not None
