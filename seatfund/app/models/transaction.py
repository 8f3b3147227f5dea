"""
Member transaction database model.
"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from seatfund.app.db.session import Base
from seatfund.app.db.types import Money, utcnow


class MemberTransaction(Base):
    """
    A money movement for one member.

    running_balance is the member's balance after this transaction and is
    written once, when the row is created.
    """
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Linkage
    member_id = Column(Integer, ForeignKey('members.id'), nullable=False, index=True)
    type_id = Column(Integer, ForeignKey('transaction_types.id'), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=True, index=True)

    # Financials
    amount = Column(Money(), nullable=False)
    running_balance = Column(Money(), nullable=False)

    description = Column(Text, nullable=True)
    transaction_date = Column(Date, nullable=False, index=True)
    reference_number = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<MemberTransaction(id={self.id}, member={self.member_id}, amount={self.amount}, balance={self.running_balance})>"
