"""Load model and its enumerations."""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Float, DateTime, Text, Enum as SQLEnum

from models.database import Base


class LoadStatus(str, Enum):
    """Lifecycle of a client's load."""
    OPEN = "Open"
    ASSIGNED = "Assigned"
    IN_TRANSIT = "In-Transit"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class WeightUnit(str, Enum):
    """Unit of the declared material weight."""
    TONS = "Tons"
    KG = "Kg"


class LoadPriority(str, Enum):
    """Dispatch priority shown on the loads board."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Load(Base):
    """Shipment request from a client."""

    __tablename__ = "loads"

    id = Column(String(64), primary_key=True, index=True)

    # Client (soft reference, no cascade)
    client_id = Column(String(64), nullable=False, index=True)

    # Route
    loading_location = Column(String(255))
    unloading_location = Column(String(255))

    # Material
    material_description = Column(Text)
    material_weight = Column(Float, default=0.0)
    weight_unit = Column(SQLEnum(WeightUnit), default=WeightUnit.TONS)

    # Freight owed by the client
    client_freight = Column(Float, nullable=False, default=0.0)

    # Status
    status = Column(SQLEnum(LoadStatus), default=LoadStatus.OPEN, index=True)
    priority = Column(SQLEnum(LoadPriority), default=LoadPriority.MEDIUM)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Load(id='{self.id}', client='{self.client_id}', status='{self.status}')>"
