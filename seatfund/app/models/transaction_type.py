"""
Transaction type registry.

A transaction kind can only be recorded once it has a row here.
"""

from sqlalchemy import Column, Integer, String, Enum
from seatfund.app.db.session import Base
from seatfund.app.models.ledger_enums import TransactionKind


class TransactionType(Base):
    """Registered transaction kind. Reference data, never soft-deleted."""
    __tablename__ = "transaction_types"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(Enum(TransactionKind), unique=True, nullable=False)
    description = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<TransactionType(id={self.id}, name='{self.name.value}')>"
