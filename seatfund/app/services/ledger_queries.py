"""
Ledger read queries.

Paginated entry listing and per-account balances for the reporting side.
"""

import math
from datetime import date
from typing import List, Optional

from seatfund.app.db.soft_delete import SoftDeleteStore
from seatfund.app.domain.ledger.balance_resolver import BalanceResolver
from seatfund.app.models.ledger_entry import LedgerEntry
from seatfund.app.models.ledger_enums import Account, LedgerEntryType
from seatfund.app.schemas.ledger import AccountBalance, LedgerEntryResponse, LedgerPage


async def list_ledger_entries(
    store: SoftDeleteStore,
    account: Optional[Account] = None,
    entry_type: Optional[LedgerEntryType] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = 1,
    limit: int = 50,
) -> LedgerPage:
    """
    List ledger entries, most recent first.

    Args:
        store: Data access for the current session
        account: Filter by account
        entry_type: Filter by DEBIT or CREDIT
        start_date: Inclusive lower bound on entry_date
        end_date: Inclusive upper bound on entry_date
        page: 1-based page number
        limit: Page size

    Returns:
        LedgerPage with the entries and paging metadata
    """
    page = max(page, 1)
    limit = max(limit, 1)

    criteria = []
    if account:
        criteria.append(LedgerEntry.account == account)
    if entry_type:
        criteria.append(LedgerEntry.entry_type == entry_type)
    if start_date:
        criteria.append(LedgerEntry.entry_date >= start_date)
    if end_date:
        criteria.append(LedgerEntry.entry_date <= end_date)

    entries = await store.find_many(
        LedgerEntry,
        *criteria,
        order_by=(LedgerEntry.id.desc(),),
        offset=(page - 1) * limit,
        limit=limit,
    )
    total = await store.count(LedgerEntry, *criteria)

    return LedgerPage(
        data=[LedgerEntryResponse.model_validate(entry) for entry in entries],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


async def get_account_balances(store: SoftDeleteStore) -> List[AccountBalance]:
    """Latest running balance for every account that has at least one entry."""
    balances = BalanceResolver(store)
    result = []
    for account in Account:
        if await store.count(LedgerEntry, LedgerEntry.account == account):
            result.append(AccountBalance(
                account=account,
                balance=await balances.latest_account_balance(account),
            ))
    return result
