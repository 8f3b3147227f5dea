"""
Administrative record maintenance.

Logical removal of records and the administrative seat cancellation.
Removing a transaction, expense or contribution leaves its ledger entries
in place; the ledger is never rewritten after the fact.
"""

from typing import Type

from seatfund.app.core.exceptions import PreconditionFailedError, ResourceNotFoundError
from seatfund.app.core.observability import get_logger
from seatfund.app.db.soft_delete import SoftDeleteStore
from seatfund.app.db.unit_of_work import atomic
from seatfund.app.models.enums import SeatStatus
from seatfund.app.models.expense import Expense
from seatfund.app.models.member import Member
from seatfund.app.models.seat import Seat
from seatfund.app.models.seat_contribution import SeatContribution
from seatfund.app.models.transaction import MemberTransaction

logger = get_logger("services.records")


async def remove_record(store: SoftDeleteStore, model: Type, record_id: int, resource: str):
    """
    Logically delete one record.

    Raises:
        ResourceNotFoundError: no such record, or it is already deleted
    """
    async with atomic(store.session):
        record = await store.get(model, record_id)
        if record is None:
            raise ResourceNotFoundError(resource, record_id)
        await store.delete(record)

    logger.info("Record removed", extra={"resource": resource, "record_id": record_id})
    return record


async def remove_member(store: SoftDeleteStore, member_id: int) -> Member:
    return await remove_record(store, Member, member_id, "Member")


async def remove_transaction(store: SoftDeleteStore, transaction_id: int) -> MemberTransaction:
    return await remove_record(store, MemberTransaction, transaction_id, "Transaction")


async def remove_expense(store: SoftDeleteStore, expense_id: int) -> Expense:
    return await remove_record(store, Expense, expense_id, "Expense")


async def remove_seat(store: SoftDeleteStore, seat_id: int) -> Seat:
    return await remove_record(store, Seat, seat_id, "Seat")


async def remove_seat_contribution(store: SoftDeleteStore, contribution_id: int) -> SeatContribution:
    return await remove_record(store, SeatContribution, contribution_id, "SeatContribution")


async def cancel_seat(store: SoftDeleteStore, seat_id: int) -> Seat:
    """
    Move a seat to CANCELLED.

    Completed seats cannot be cancelled. Cancelling twice is a no-op.
    """
    async with atomic(store.session):
        seat = await store.find_first(Seat, Seat.id == seat_id, for_update=True)
        if seat is None:
            raise ResourceNotFoundError("Seat", seat_id)
        if seat.status == SeatStatus.CANCELLED:
            return seat
        if seat.status == SeatStatus.COMPLETED:
            raise PreconditionFailedError(
                f"Seat #{seat.seat_number} is completed and cannot be cancelled",
                details={"seat_id": seat.id, "status": seat.status.value},
            )
        seat.status = SeatStatus.CANCELLED

    logger.info("Seat cancelled", extra={"seat_id": seat.id, "seat_number": seat.seat_number})
    return seat
