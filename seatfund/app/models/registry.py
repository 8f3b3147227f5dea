"""
Model registry.

Importing this module registers every table with ``Base.metadata``.
"""

from seatfund.app.models.user import User
from seatfund.app.models.member import Member
from seatfund.app.models.category import Category
from seatfund.app.models.transaction_type import TransactionType
from seatfund.app.models.transaction import MemberTransaction
from seatfund.app.models.expense import Expense
from seatfund.app.models.seat import Seat
from seatfund.app.models.seat_contribution import SeatContribution
from seatfund.app.models.ledger_entry import LedgerEntry

ALL_MODELS = (
    User,
    Member,
    Category,
    TransactionType,
    MemberTransaction,
    Expense,
    Seat,
    SeatContribution,
    LedgerEntry,
)
