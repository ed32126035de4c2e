"""Payment transaction model."""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Float, DateTime, Text, Enum as SQLEnum

from models.database import Base


class TransactionType(str, Enum):
    """Direction of the money movement."""
    CREDIT = "Credit"
    DEBIT = "Debit"


class TransactionPurpose(str, Enum):
    """What the money settles."""
    CLIENT_FREIGHT = "Client Freight"
    TRUCK_FREIGHT = "Truck Freight"
    DRIVER_COMMISSION = "Driver Commission"


class PaymentMode(str, Enum):
    """How the money moved."""
    CASH = "Cash"
    UPI = "UPI"
    BANK_TRANSFER = "Bank Transfer"
    CHEQUE = "Cheque"


class PaymentStatus(str, Enum):
    """Whether the money has actually moved."""
    PENDING = "Pending"
    COMPLETED = "Completed"


def default_purpose_for(transaction_type: TransactionType) -> TransactionPurpose:
    """Purpose a payment form pre-selects for the given type."""
    if TransactionType(transaction_type) == TransactionType.CREDIT:
        return TransactionPurpose.CLIENT_FREIGHT
    return TransactionPurpose.TRUCK_FREIGHT


def type_for_purpose(purpose: TransactionPurpose) -> TransactionType:
    """Client freight comes in; truck freight and commission go out."""
    if TransactionPurpose(purpose) == TransactionPurpose.CLIENT_FREIGHT:
        return TransactionType.CREDIT
    return TransactionType.DEBIT


class Transaction(Base):
    """Money received from a client or paid to a truck owner or driver."""

    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True, index=True)

    # Trip (soft reference, no cascade)
    trip_id = Column(String(64), nullable=False, index=True)

    amount = Column(Float, nullable=False, default=0.0)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)

    type = Column(SQLEnum(TransactionType), nullable=False, index=True)
    purpose = Column(SQLEnum(TransactionPurpose), nullable=False, index=True)
    payment_mode = Column(SQLEnum(PaymentMode), default=PaymentMode.CASH)
    status = Column(SQLEnum(PaymentStatus), default=PaymentStatus.PENDING, index=True)

    notes = Column(Text)

    def __repr__(self):
        return f"<Transaction(id='{self.id}', {self.type} {self.purpose} amount={self.amount})>"
