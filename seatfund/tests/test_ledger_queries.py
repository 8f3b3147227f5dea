"""
Ledger read side: paginated listing and per-account balances.
"""

from datetime import date
from decimal import Decimal

import pytest

from seatfund.app.models.ledger_enums import Account, LedgerEntryType
from seatfund.app.schemas.ledger import ExpenseCreate, TransactionCreate
from seatfund.app.services.ledger_queries import get_account_balances, list_ledger_entries


@pytest.fixture
async def posted(orchestrator, member, approver, transaction_types):
    """CASH_IN 5000.00 in January, then a 200.00 expense in March."""
    await orchestrator.record_transaction(TransactionCreate(
        member_id=member.id, transaction_type="CASH_IN", amount=Decimal("5000.00"),
        transaction_date=date(2024, 1, 15),
    ))
    await orchestrator.record_expense(ExpenseCreate(
        description="Hall rental", amount=Decimal("200.00"),
        expense_date=date(2024, 3, 5), approved_by_id=approver.id,
    ))


# TEST 1: Account balances
@pytest.mark.asyncio
async def test_account_balances(store, posted):
    balances = await get_account_balances(store)

    assert [(b.account, b.balance) for b in balances] == [
        (Account.CASH, Decimal("4800.00")),
        (Account.MEMBER_CONTRIBUTION, Decimal("-5000.00")),
        (Account.EXPENSE, Decimal("200.00")),
    ]


@pytest.mark.asyncio
async def test_account_balances_empty_ledger(store):
    assert await get_account_balances(store) == []


# TEST 2: Listing and pagination
@pytest.mark.asyncio
async def test_entries_are_listed_newest_first(store, posted):
    first = await list_ledger_entries(store, page=1, limit=3)
    second = await list_ledger_entries(store, page=2, limit=3)

    assert first.total == 4
    assert first.total_pages == 2
    assert len(first.data) == 3
    assert len(second.data) == 1

    ids = [e.id for e in first.data] + [e.id for e in second.data]
    assert ids == sorted(ids, reverse=True)
    assert first.data[0].account == Account.CASH
    assert first.data[0].running_balance == Decimal("4800.00")


@pytest.mark.asyncio
async def test_entries_filtered(store, posted):
    cash = await list_ledger_entries(store, account=Account.CASH)
    assert cash.total == 2
    assert all(e.account == Account.CASH for e in cash.data)

    credits = await list_ledger_entries(store, entry_type=LedgerEntryType.CREDIT)
    assert {e.account for e in credits.data} == {Account.MEMBER_CONTRIBUTION, Account.CASH}

    march = await list_ledger_entries(store, start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))
    assert march.total == 2
    assert all(e.expense_id is not None for e in march.data)


@pytest.mark.asyncio
async def test_page_out_of_range_is_empty(store, posted):
    page = await list_ledger_entries(store, page=9, limit=50)
    assert page.data == []
    assert page.total == 4
    assert page.total_pages == 1
