"""
Ledger Entry database model.

Immutable double-entry accounting records.
"""

from sqlalchemy import Column, Integer, Text, Date, DateTime, Enum, ForeignKey
from seatfund.app.db.session import Base
from seatfund.app.db.types import Money, utcnow
from seatfund.app.models.ledger_enums import LedgerEntryType, Account


class LedgerEntry(Base):
    """
    Ledger Entry model.

    Immutable record of financial movement.
    Double-entry principle: every business event writes one DEBIT and one CREDIT
    of the same amount. running_balance is the account's balance after this
    entry, in creation (id) order.
    NO updates or deletions allowed.
    """
    __tablename__ = "ledger_entries"

    # Column order is the audit reconstruction order
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Linkage
    transaction_id = Column(Integer, ForeignKey('transactions.id'), nullable=True, index=True)
    expense_id = Column(Integer, ForeignKey('expenses.id'), nullable=True, index=True)

    # Entry details
    entry_type = Column(Enum(LedgerEntryType), nullable=False)
    account = Column(Enum(Account), nullable=False, index=True)

    # Financials
    amount = Column(Money(), nullable=False)
    running_balance = Column(Money(), nullable=False)

    description = Column(Text, nullable=True)
    entry_date = Column(Date, nullable=False, index=True)

    # Timestamps (Immutable - no updated_at)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<LedgerEntry(id={self.id}, type='{self.entry_type.value}', account='{self.account.value}', amount={self.amount}, balance={self.running_balance})>"
