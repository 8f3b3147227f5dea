"""
Tests for recording seat contributions.

Validates seat funding, the OPEN -> ACTIVE -> COMPLETED transitions,
rejection of closed seats and the path where SEAT_PAYMENT is not registered.
"""

import logging
from datetime import date
from decimal import Decimal

import pytest

from seatfund.app.core.exceptions import PreconditionFailedError, ResourceNotFoundError
from seatfund.app.models.enums import SeatStatus
from seatfund.app.models.ledger_entry import LedgerEntry
from seatfund.app.models.ledger_enums import Account, LedgerEntryType, TransactionKind
from seatfund.app.models.seat import Seat
from seatfund.app.models.seat_contribution import SeatContribution
from seatfund.app.models.transaction import MemberTransaction
from seatfund.app.schemas.ledger import SeatContributionCreate, TransactionCreate


def contribution(seat_id, member_id, amount, contribution_date=date(2024, 2, 1), notes=None):
    return SeatContributionCreate(
        seat_id=seat_id,
        member_id=member_id,
        amount=Decimal(amount),
        contribution_date=contribution_date,
        notes=notes,
    )


# TEST 1: Seat fills up and completes
@pytest.mark.asyncio
async def test_seat_moves_to_active_then_completed(orchestrator, store, seat, member, transaction_types):
    """Total 10000.00; 4000.00 then 6000.00; a third contribution is refused."""
    assert seat.status == SeatStatus.OPEN

    await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "4000.00"))
    seat = await store.get(Seat, seat.id)
    assert seat.paid_amount == Decimal("4000.00")
    assert seat.status == SeatStatus.ACTIVE

    await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "6000.00"))
    seat = await store.get(Seat, seat.id)
    assert seat.paid_amount == Decimal("10000.00")
    assert seat.status == SeatStatus.COMPLETED

    with pytest.raises(PreconditionFailedError) as exc_info:
        await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "1.00"))

    assert exc_info.value.error_code == "ERR_PRECONDITION_001"
    assert exc_info.value.details["status"] == "COMPLETED"


@pytest.mark.asyncio
async def test_overpayment_completes_seat(orchestrator, store, seat, member, transaction_types):
    await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "12000.00"))
    seat = await store.get(Seat, seat.id)
    assert seat.status == SeatStatus.COMPLETED
    assert seat.paid_amount == Decimal("12000.00")


# TEST 2: Paid amount is the sum of contributions
@pytest.mark.asyncio
async def test_paid_amount_is_sum_of_contributions(orchestrator, store, seat, member, second_member,
                                                   transaction_types, assert_ledger_consistent):
    amounts = ["1250.00", "333.33", "2000.00", "416.67"]
    for i, amount in enumerate(amounts):
        payer = member if i % 2 == 0 else second_member
        await orchestrator.record_seat_contribution(contribution(seat.id, payer.id, amount))

    seat = await store.get(Seat, seat.id)
    rows = await store.find_many(SeatContribution, SeatContribution.seat_id == seat.id)
    assert seat.paid_amount == sum(r.amount for r in rows) == Decimal("4000.00")
    assert seat.status == SeatStatus.ACTIVE

    entries = await assert_ledger_consistent()
    assert len(entries) == 2 * len(amounts)


# TEST 3: Contribution writes a SEAT_PAYMENT transaction and ledger pair
@pytest.mark.asyncio
async def test_contribution_records_seat_payment(orchestrator, store, seat, member, transaction_types):
    created = await orchestrator.record_seat_contribution(
        contribution(seat.id, member.id, "4000.00", notes="January contribution to seat 1")
    )

    assert created.id is not None
    assert created.notes == "January contribution to seat 1"

    transaction = await store.find_first(MemberTransaction, MemberTransaction.member_id == member.id)
    assert transaction.amount == Decimal("4000.00")
    assert transaction.running_balance == Decimal("4000.00")
    assert transaction.description == "Seat #1 contribution"
    assert transaction.transaction_date == date(2024, 2, 1)

    debit, credit = await store.find_many(
        LedgerEntry, LedgerEntry.transaction_id == transaction.id, order_by=(LedgerEntry.id,)
    )
    assert (debit.entry_type, debit.account) == (LedgerEntryType.DEBIT, Account.CASH)
    assert (credit.entry_type, credit.account) == (LedgerEntryType.CREDIT, Account.SEAT_FUND)
    assert debit.amount == credit.amount == Decimal("4000.00")
    assert debit.description == "Seat #1 contribution by Asha Rao"


@pytest.mark.asyncio
async def test_contribution_adds_to_member_balance(orchestrator, store, seat, member, transaction_types):
    await orchestrator.record_transaction(TransactionCreate(
        member_id=member.id, transaction_type="CASH_OUT", amount=Decimal("100.00"),
        transaction_date=date(2024, 1, 10),
    ))
    await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "250.00"))

    latest = await orchestrator.balances.latest_member_balance(member.id)
    assert latest == Decimal("150.00")


# TEST 4: Closed seats are rejected with zero side effects
@pytest.mark.asyncio
@pytest.mark.parametrize("status", [SeatStatus.COMPLETED, SeatStatus.CANCELLED])
async def test_closed_seat_rejects_contribution(orchestrator, store, db_session, member, transaction_types, status):
    closed = Seat(seat_number=7, total_amount=Decimal("500.00"), paid_amount=Decimal("0.00"), status=status)
    db_session.add(closed)
    await db_session.commit()
    closed_id = closed.id

    with pytest.raises(PreconditionFailedError):
        await orchestrator.record_seat_contribution(contribution(closed_id, member.id, "50.00"))
    assert not db_session.in_transaction()

    assert await store.count(SeatContribution) == 0
    assert await store.count(MemberTransaction) == 0
    assert await store.count(LedgerEntry) == 0
    assert (await store.get(Seat, closed_id)).paid_amount == Decimal("0.00")


@pytest.mark.asyncio
async def test_completed_seat_keeps_existing_rows(orchestrator, store, seat, member, transaction_types):
    await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "10000.00"))

    with pytest.raises(PreconditionFailedError):
        await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "10.00"))

    assert await store.count(SeatContribution) == 1
    assert await store.count(LedgerEntry) == 2


# TEST 5: Missing references
@pytest.mark.asyncio
async def test_missing_seat_is_not_found(orchestrator, member, transaction_types):
    with pytest.raises(ResourceNotFoundError):
        await orchestrator.record_seat_contribution(contribution(404, member.id, "10.00"))


@pytest.mark.asyncio
async def test_deleted_seat_is_not_found(orchestrator, store, seat, member, transaction_types):
    seat_id = seat.id
    await store.delete(seat)
    await store.session.commit()

    with pytest.raises(ResourceNotFoundError) as exc_info:
        await orchestrator.record_seat_contribution(contribution(seat_id, member.id, "10.00"))
    assert exc_info.value.details["resource"] == "Seat"


@pytest.mark.asyncio
async def test_missing_member_is_not_found(orchestrator, store, seat, transaction_types):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await orchestrator.record_seat_contribution(contribution(seat.id, 31337, "10.00"))

    assert exc_info.value.details["resource"] == "Member"
    assert await store.count(SeatContribution) == 0


# TEST 6: SEAT_PAYMENT not registered
@pytest.mark.asyncio
async def test_unregistered_seat_payment_still_records_contribution(orchestrator, store, seat, member,
                                                                     register_kinds, caplog):
    """Contribution and seat update commit; no transaction, no ledger entries."""
    await register_kinds([TransactionKind.CASH_IN, TransactionKind.CASH_OUT, TransactionKind.EXPENSE])
    caplog.set_level(logging.WARNING, logger="seatfund")

    created = await orchestrator.record_seat_contribution(contribution(seat.id, member.id, "4000.00"))

    assert created.id is not None
    seat = await store.get(Seat, seat.id)
    assert seat.paid_amount == Decimal("4000.00")
    assert seat.status == SeatStatus.ACTIVE
    assert await store.count(MemberTransaction) == 0
    assert await store.count(LedgerEntry) == 0
    assert any("SEAT_PAYMENT is not registered" in r.getMessage() for r in caplog.records)
