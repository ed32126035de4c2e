"""Repository for load template operations."""
from sqlalchemy.orm import Session

from constants import ID_PREFIX_TEMPLATE
from models import LoadTemplate
from repositories.base import BaseRepository
from utils.identifiers import IdGenerator


class LoadTemplateRepository(BaseRepository[LoadTemplate]):
    """Repository for load templates."""

    id_prefix = ID_PREFIX_TEMPLATE

    def __init__(self, db: Session, ids: IdGenerator, **kwargs):
        super().__init__(LoadTemplate, db, ids, **kwargs)
