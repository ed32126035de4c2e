"""Reusable load templates."""
from sqlalchemy import Column, String, Float, Text, Enum as SQLEnum

from models.database import Base
from models.load import WeightUnit, LoadPriority

# Load fields a template carries; id, status and created_at are never copied
TEMPLATE_FIELDS = (
    "client_id",
    "loading_location",
    "unloading_location",
    "material_description",
    "material_weight",
    "weight_unit",
    "client_freight",
    "priority",
)


class LoadTemplate(Base):
    """Named snapshot of a load used to pre-fill new loads."""

    __tablename__ = "load_templates"

    id = Column(String(64), primary_key=True, index=True)
    template_name = Column(String(200), nullable=False)

    client_id = Column(String(64), nullable=False)
    loading_location = Column(String(255))
    unloading_location = Column(String(255))
    material_description = Column(Text)
    material_weight = Column(Float, default=0.0)
    weight_unit = Column(SQLEnum(WeightUnit), default=WeightUnit.TONS)
    client_freight = Column(Float, default=0.0)
    priority = Column(SQLEnum(LoadPriority), default=LoadPriority.MEDIUM)

    def load_fields(self) -> dict:
        """Field values for a new load created from this template."""
        return {field: getattr(self, field) for field in TEMPLATE_FIELDS}

    def __repr__(self):
        return f"<LoadTemplate(id='{self.id}', name='{self.template_name}')>"
