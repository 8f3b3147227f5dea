"""
Transaction Orchestrator (Domain Logic).

The three money-moving workflows. Each one:

1. Validates the input values
2. Opens one atomic unit of work and checks the referenced rows in it
3. Resolves the current balance(s)
4. Persists the primary row (with a balance snapshot where applicable)
5. Appends the paired ledger entries
6. Commits, or rolls everything back

Logically deleting a transaction, expense or contribution later does not
retract the ledger entries written here.
"""

from decimal import Decimal
from typing import Optional, Type

from seatfund.app.core.exceptions import (
    PreconditionFailedError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from seatfund.app.core.observability import get_logger
from seatfund.app.db.soft_delete import SoftDeleteStore
from seatfund.app.db.types import to_money
from seatfund.app.db.unit_of_work import atomic
from seatfund.app.domain.ledger.accounts import (
    EXPENSE_PAIR,
    account_pair_for,
    apply_member_delta,
)
from seatfund.app.domain.ledger.balance_resolver import BalanceResolver
from seatfund.app.domain.ledger.entry_writer import LedgerEntryWriter, require_positive_amount
from seatfund.app.models.category import Category
from seatfund.app.models.enums import SeatStatus
from seatfund.app.models.expense import Expense
from seatfund.app.models.ledger_enums import TransactionKind
from seatfund.app.models.member import Member
from seatfund.app.models.seat import Seat
from seatfund.app.models.seat_contribution import SeatContribution
from seatfund.app.models.transaction import MemberTransaction
from seatfund.app.models.transaction_type import TransactionType
from seatfund.app.models.user import User
from seatfund.app.schemas.ledger import ExpenseCreate, SeatContributionCreate, TransactionCreate

logger = get_logger("ledger.orchestrator")

# Seats in these states accept no further contributions
CLOSED_SEAT_STATUSES = (SeatStatus.COMPLETED, SeatStatus.CANCELLED)


def parse_transaction_kind(value) -> TransactionKind:
    try:
        return TransactionKind(value)
    except ValueError:
        raise ValidationFailedError(
            f"Invalid transaction type: {value}",
            details={"transaction_type": str(value), "allowed": [kind.value for kind in TransactionKind]},
        )


def seat_status_for(paid_amount: Decimal, total_amount: Decimal) -> SeatStatus:
    """Status implied by a seat's funding after a contribution."""
    return SeatStatus.COMPLETED if paid_amount >= total_amount else SeatStatus.ACTIVE


def ensure_seat_accepts_contributions(seat: Seat) -> None:
    if seat.status in CLOSED_SEAT_STATUSES:
        raise PreconditionFailedError(
            f"Seat #{seat.seat_number} is {seat.status.value.lower()} and accepts no contributions",
            details={"seat_id": seat.id, "status": seat.status.value},
        )


class TransactionOrchestrator:
    """
    Entry points for recording money movements.

    Works on one SoftDeleteStore (one session). Each public method commits
    its own unit of work and returns the created primary row.
    """

    def __init__(self, store: SoftDeleteStore):
        self.store = store
        self.balances = BalanceResolver(store)
        self.ledger = LedgerEntryWriter(store, self.balances)

    async def _require(self, model: Type, record_id: Optional[int], resource: str):
        record = await self.store.get(model, record_id) if record_id is not None else None
        if record is None:
            raise ResourceNotFoundError(resource, record_id)
        return record

    async def _registered_type(self, kind: TransactionKind) -> Optional[TransactionType]:
        return await self.store.find_first(TransactionType, TransactionType.name == kind)

    async def record_transaction(self, data: TransactionCreate) -> MemberTransaction:
        """
        Record a member transaction with its ledger pair.

        Raises:
            ValidationFailedError: unknown or unregistered kind, bad amount
            ResourceNotFoundError: member or category missing or deleted
            StorageFailureError: the store failed; nothing was committed
        """
        kind = parse_transaction_kind(data.transaction_type)
        amount = require_positive_amount(data.amount)

        async with atomic(self.store.session):
            # 1. Validate before any write; a rejection rolls the scope back
            transaction_type = await self._registered_type(kind)
            if transaction_type is None:
                raise ValidationFailedError(
                    f"Transaction type {kind.value} is not registered",
                    details={"transaction_type": kind.value},
                )
            member = await self._require(Member, data.member_id, "Member")
            if data.category_id is not None:
                await self._require(Category, data.category_id, "Category")

            # 2. Member running balance
            current_balance = await self.balances.latest_member_balance(member.id)
            new_balance = apply_member_delta(kind, current_balance, amount)

            # 3. Primary row with balance snapshot
            transaction = MemberTransaction(
                member_id=member.id,
                type_id=transaction_type.id,
                category_id=data.category_id,
                amount=amount,
                description=data.description,
                transaction_date=data.transaction_date,
                reference_number=data.reference_number,
                running_balance=new_balance,
            )
            self.store.add(transaction)
            await self.store.flush()

            # 4. Double entry
            pair = account_pair_for(kind)
            await self.ledger.append_paired_entries(
                pair.debit,
                pair.credit,
                amount,
                data.transaction_date,
                transaction_id=transaction.id,
                description=f"{kind.value}: {data.description or 'Transaction'}",
            )

        logger.info(
            "Transaction recorded",
            extra={
                "transaction_id": transaction.id,
                "kind": kind.value,
                "amount": str(amount),
                "member_id": member.id,
                "running_balance": str(new_balance),
            },
        )
        return transaction

    async def record_seat_contribution(self, data: SeatContributionCreate) -> SeatContribution:
        """
        Record a contribution towards a seat.

        Flow:
        1. Validate seat, member and seat state
        2. Create the contribution
        3. Grow the seat's paid amount and move its status
        4. If SEAT_PAYMENT is registered, record the member transaction and
           its CASH/SEAT_FUND ledger pair; otherwise skip with a warning

        Raises:
            ResourceNotFoundError: seat or member missing or deleted
            PreconditionFailedError: seat is COMPLETED or CANCELLED
            StorageFailureError: the store failed; nothing was committed
        """
        amount = require_positive_amount(data.amount)

        async with atomic(self.store.session):
            # 1. Seat is read under lock and checked in the same scope that updates it
            seat = await self.store.find_first(Seat, Seat.id == data.seat_id, for_update=True)
            if seat is None:
                raise ResourceNotFoundError("Seat", data.seat_id)
            member = await self._require(Member, data.member_id, "Member")
            ensure_seat_accepts_contributions(seat)

            # 2. Contribution row
            contribution = SeatContribution(
                seat_id=seat.id,
                member_id=member.id,
                amount=amount,
                contribution_date=data.contribution_date,
                notes=data.notes,
            )
            self.store.add(contribution)

            # 3. Seat funding
            seat.paid_amount = to_money(seat.paid_amount + amount)
            seat.status = seat_status_for(seat.paid_amount, seat.total_amount)
            await self.store.flush()

            # 4. Member transaction + ledger, when the kind is registered
            seat_payment_type = await self._registered_type(TransactionKind.SEAT_PAYMENT)
            if seat_payment_type is None:
                logger.warning(
                    "SEAT_PAYMENT is not registered; contribution recorded without transaction or ledger entries",
                    extra={"seat_id": seat.id, "contribution_id": contribution.id},
                )
            else:
                current_balance = await self.balances.latest_member_balance(member.id)
                new_balance = apply_member_delta(TransactionKind.SEAT_PAYMENT, current_balance, amount)

                transaction = MemberTransaction(
                    member_id=member.id,
                    type_id=seat_payment_type.id,
                    amount=amount,
                    description=f"Seat #{seat.seat_number} contribution",
                    transaction_date=data.contribution_date,
                    running_balance=new_balance,
                )
                self.store.add(transaction)
                await self.store.flush()

                pair = account_pair_for(TransactionKind.SEAT_PAYMENT)
                await self.ledger.append_paired_entries(
                    pair.debit,
                    pair.credit,
                    amount,
                    data.contribution_date,
                    transaction_id=transaction.id,
                    description=f"Seat #{seat.seat_number} contribution by {member.name}",
                )

        logger.info(
            "Seat contribution recorded",
            extra={
                "contribution_id": contribution.id,
                "seat_id": seat.id,
                "seat_number": seat.seat_number,
                "amount": str(amount),
                "member_id": member.id,
                "paid_amount": str(seat.paid_amount),
                "seat_status": seat.status.value,
            },
        )
        return contribution

    async def record_expense(self, data: ExpenseCreate) -> Expense:
        """
        Record an expense with its EXPENSE/CASH ledger pair.

        Raises:
            ValidationFailedError: bad amount
            ResourceNotFoundError: approver or category missing or deleted
            StorageFailureError: the store failed; nothing was committed
        """
        amount = require_positive_amount(data.amount)

        async with atomic(self.store.session):
            approver = await self._require(User, data.approved_by_id, "User")
            if data.category_id is not None:
                await self._require(Category, data.category_id, "Category")

            expense = Expense(
                description=data.description,
                amount=amount,
                category_id=data.category_id,
                expense_date=data.expense_date,
                approved_by_id=approver.id,
                receipt_url=data.receipt_url,
                notes=data.notes,
            )
            self.store.add(expense)
            await self.store.flush()

            await self.ledger.append_paired_entries(
                EXPENSE_PAIR.debit,
                EXPENSE_PAIR.credit,
                amount,
                data.expense_date,
                expense_id=expense.id,
                description=f"Expense: {data.description}",
            )

        logger.info(
            "Expense recorded",
            extra={"expense_id": expense.id, "amount": str(amount), "approved_by_id": approver.id},
        )
        return expense
