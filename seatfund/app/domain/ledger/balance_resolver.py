"""
Balance Resolver.

Reads the latest stored running balance for a ledger account or a member.
Pure reads: nothing is cached and nothing is written.
"""

from decimal import Decimal

from seatfund.app.db.soft_delete import SoftDeleteStore
from seatfund.app.db.types import ZERO
from seatfund.app.models.ledger_entry import LedgerEntry
from seatfund.app.models.ledger_enums import Account
from seatfund.app.models.transaction import MemberTransaction


class BalanceResolver:

    def __init__(self, store: SoftDeleteStore):
        self.store = store

    async def latest_account_balance(self, account: Account) -> Decimal:
        """
        Running balance of the most recently created entry for ``account``.

        Returns 0.00 when the account has no entries yet.
        """
        entry = await self.store.find_first(
            LedgerEntry,
            LedgerEntry.account == account,
            order_by=(LedgerEntry.id.desc(),),
        )
        return entry.running_balance if entry else ZERO

    async def latest_member_balance(self, member_id: int) -> Decimal:
        """
        Running balance snapshot of the member's most recent transaction.

        Logically deleted transactions are skipped by the store.
        Returns 0.00 when the member has no transactions.
        """
        transaction = await self.store.find_first(
            MemberTransaction,
            MemberTransaction.member_id == member_id,
            order_by=(MemberTransaction.id.desc(),),
        )
        return transaction.running_balance if transaction else ZERO
