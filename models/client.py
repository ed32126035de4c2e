"""Client model."""
from sqlalchemy import Column, String

from models.database import Base


class Client(Base):
    """Customer who books loads."""

    __tablename__ = "clients"

    id = Column(String(64), primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    phone_number = Column(String(50))

    def __repr__(self):
        return f"<Client(id='{self.id}', name='{self.name}')>"
