"""Truck model."""
from sqlalchemy import Column, String, Text

from models.database import Base


class Truck(Base):
    """Truck with its owner, driver, papers and payout bank details."""

    __tablename__ = "trucks"

    id = Column(String(64), primary_key=True, index=True)

    # Vehicle
    truck_number = Column(String(50), nullable=False, index=True)
    truck_type = Column(String(100))

    # Owner
    owner_name = Column(String(255))
    owner_contact = Column(String(50))

    # Driver
    driver_name = Column(String(255))
    driver_phone_number = Column(String(50))

    # Document / image payload references
    truck_image_url = Column(Text)
    driver_image_url = Column(Text)
    driving_licence_url = Column(Text)
    rc_url = Column(Text)
    insurance_url = Column(Text)

    # Payout details
    pan_card = Column(String(20))
    bank_account_number = Column(String(50))
    bank_ifsc_code = Column(String(20))

    def __repr__(self):
        return f"<Truck(id='{self.id}', number='{self.truck_number}')>"
