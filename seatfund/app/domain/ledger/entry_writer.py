"""
Ledger Entry Writer.

The only code path that creates ledger entries. Each entry snapshots the
account's running balance after itself:

    DEBIT:  balance = previous + amount
    CREDIT: balance = previous - amount

Entries are written into the caller's unit of work and flushed one by one, so
a pair posted against the same account still chains correctly.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple

from seatfund.app.core.exceptions import ValidationFailedError
from seatfund.app.db.soft_delete import SoftDeleteStore
from seatfund.app.db.types import to_money
from seatfund.app.domain.ledger.balance_resolver import BalanceResolver
from seatfund.app.models.ledger_entry import LedgerEntry
from seatfund.app.models.ledger_enums import Account, LedgerEntryType


def require_positive_amount(value) -> Decimal:
    """Quantize to cents and reject anything that is not strictly positive."""
    try:
        amount = to_money(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationFailedError(f"Invalid amount: {value!r}", details={"amount": str(value)})
    if amount <= 0:
        raise ValidationFailedError("Amount must be greater than zero", details={"amount": str(amount)})
    return amount


class LedgerEntryWriter:

    def __init__(self, store: SoftDeleteStore, balances: Optional[BalanceResolver] = None):
        self.store = store
        self.balances = balances or BalanceResolver(store)

    async def append_entry(
        self,
        entry_type: LedgerEntryType,
        account: Account,
        amount,
        entry_date: date,
        *,
        transaction_id: Optional[int] = None,
        expense_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> LedgerEntry:
        """
        Append one entry to ``account``.

        Args:
            entry_type: DEBIT or CREDIT
            account: Ledger account the entry posts to
            amount: Positive amount, quantized to cents
            entry_date: Business date of the movement
            transaction_id: Source member transaction, if any
            expense_id: Source expense, if any
            description: Free text

        Returns:
            The flushed LedgerEntry (id assigned)
        """
        amount = require_positive_amount(amount)
        previous = await self.balances.latest_account_balance(account)

        if entry_type == LedgerEntryType.DEBIT:
            running_balance = previous + amount
        else:
            running_balance = previous - amount

        entry = LedgerEntry(
            transaction_id=transaction_id,
            expense_id=expense_id,
            entry_type=entry_type,
            account=account,
            amount=amount,
            running_balance=running_balance,
            description=description,
            entry_date=entry_date,
        )
        self.store.add(entry)
        await self.store.flush()
        return entry

    async def append_paired_entries(
        self,
        debit_account: Account,
        credit_account: Account,
        amount,
        entry_date: date,
        *,
        transaction_id: Optional[int] = None,
        expense_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Tuple[LedgerEntry, LedgerEntry]:
        """
        Append a balanced DEBIT/CREDIT pair for one business event.

        The debit is written first. Both entries carry the same source ids,
        amount and entry date. A failure on either propagates to the caller's
        unit of work, which rolls back both.
        """
        if transaction_id is None and expense_id is None:
            raise ValidationFailedError("Ledger entries need a source transaction or expense")

        amount = require_positive_amount(amount)
        debit = await self.append_entry(
            LedgerEntryType.DEBIT,
            debit_account,
            amount,
            entry_date,
            transaction_id=transaction_id,
            expense_id=expense_id,
            description=description,
        )
        credit = await self.append_entry(
            LedgerEntryType.CREDIT,
            credit_account,
            amount,
            entry_date,
            transaction_id=transaction_id,
            expense_id=expense_id,
            description=description,
        )
        return debit, credit
