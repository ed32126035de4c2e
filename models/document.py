"""Trip document model."""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text

from models.database import Base


class Document(Base):
    """File attached to a trip (bilty, POD, weighbridge slip...)."""

    __tablename__ = "documents"

    id = Column(String(64), primary_key=True, index=True)

    # Trip (soft reference, no cascade)
    trip_id = Column(String(64), nullable=False, index=True)

    file_name = Column(String(255), nullable=False)
    file_type = Column(String(100))
    uploaded_at = Column(DateTime, default=datetime.utcnow)
    file_url = Column(Text)  # Opaque payload, a data: URL when uploaded through the API

    def __repr__(self):
        return f"<Document(id='{self.id}', trip='{self.trip_id}', name='{self.file_name}')>"
