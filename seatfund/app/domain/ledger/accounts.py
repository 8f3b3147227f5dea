"""
Transaction kind dispatch tables.

Both tables are keyed by the closed ``TransactionKind`` enumeration and are
checked for exhaustiveness at import time, so adding a kind without a mapping
fails on startup instead of at the first transaction of that kind.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, NamedTuple

from seatfund.app.models.ledger_enums import Account, TransactionKind


class AccountPair(NamedTuple):
    """Debit and credit accounts for one kind of business event."""
    debit: Account
    credit: Account


ACCOUNT_PAIRS: Mapping[TransactionKind, AccountPair] = MappingProxyType({
    # Cash comes in, member contribution goes up
    TransactionKind.CASH_IN: AccountPair(debit=Account.CASH, credit=Account.MEMBER_CONTRIBUTION),
    # Cash goes out, payout recorded
    TransactionKind.CASH_OUT: AccountPair(debit=Account.MEMBER_PAYOUT, credit=Account.CASH),
    # Cash comes in, seat fund goes up
    TransactionKind.SEAT_PAYMENT: AccountPair(debit=Account.CASH, credit=Account.SEAT_FUND),
    # Expense recorded, cash goes out
    TransactionKind.EXPENSE: AccountPair(debit=Account.EXPENSE, credit=Account.CASH),
})

EXPENSE_PAIR = AccountPair(debit=Account.EXPENSE, credit=Account.CASH)

# Direction of a kind on the member's running balance
MEMBER_BALANCE_SIGN: Mapping[TransactionKind, int] = MappingProxyType({
    TransactionKind.CASH_IN: 1,
    TransactionKind.SEAT_PAYMENT: 1,
    TransactionKind.CASH_OUT: -1,
    TransactionKind.EXPENSE: -1,
})


def _assert_exhaustive(table: Mapping[TransactionKind, object], name: str) -> None:
    missing = set(TransactionKind) - set(table)
    if missing:
        raise RuntimeError(f"{name} has no entry for {sorted(kind.value for kind in missing)}")


_assert_exhaustive(ACCOUNT_PAIRS, "ACCOUNT_PAIRS")
_assert_exhaustive(MEMBER_BALANCE_SIGN, "MEMBER_BALANCE_SIGN")


def account_pair_for(kind: TransactionKind) -> AccountPair:
    return ACCOUNT_PAIRS[kind]


def apply_member_delta(kind: TransactionKind, balance: Decimal, amount: Decimal) -> Decimal:
    """Member balance after a transaction of ``kind``."""
    return balance + amount if MEMBER_BALANCE_SIGN[kind] > 0 else balance - amount
