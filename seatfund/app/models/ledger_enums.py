"""
Ledger enumerations.
"""

import enum


class TransactionKind(str, enum.Enum):
    """Kinds of member transaction. Each kind must be registered in transaction_types."""
    CASH_IN = "CASH_IN"
    CASH_OUT = "CASH_OUT"
    SEAT_PAYMENT = "SEAT_PAYMENT"
    EXPENSE = "EXPENSE"


class LedgerEntryType(str, enum.Enum):
    """Ledger entry type enumeration."""
    DEBIT = "DEBIT"  # Adds to the account's running balance
    CREDIT = "CREDIT"  # Subtracts from the account's running balance


class Account(str, enum.Enum):
    """Named ledger accounts. Grouping key on ledger entries, not a stored row."""
    CASH = "CASH"
    MEMBER_CONTRIBUTION = "MEMBER_CONTRIBUTION"
    MEMBER_PAYOUT = "MEMBER_PAYOUT"
    SEAT_FUND = "SEAT_FUND"
    EXPENSE = "EXPENSE"
