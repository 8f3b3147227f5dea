"""
Expense database model.
"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from seatfund.app.db.session import Base
from seatfund.app.db.types import Money, utcnow


class Expense(Base):
    """Money spent by the scheme, approved by a user."""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    description = Column(String(255), nullable=False)
    amount = Column(Money(), nullable=False)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=True, index=True)
    expense_date = Column(Date, nullable=False, index=True)
    approved_by_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    receipt_url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<Expense(id={self.id}, amount={self.amount}, description='{self.description}')>"
