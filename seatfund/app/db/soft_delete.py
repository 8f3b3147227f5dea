"""
Soft-delete store.

``SoftDeleteStore`` wraps a raw ``AsyncSession`` and is the only data-access
path the ledger core uses. For the soft-deletable models it

- turns ``delete``/``delete_many`` into an UPDATE of ``deleted_at``, and
- adds ``deleted_at IS NULL`` to ``get``/``find_first``/``find_many``/``count``
  unless the caller passes ``include_deleted=True`` or already filters on
  the model's ``deleted_at`` column.

Ledger entries are append-only and are never deleted, soft or hard.
"""

from typing import Any, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import Column, delete as sql_delete, func, select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value
from sqlalchemy.sql import visitors

from seatfund.app.core.exceptions import LedgerImmutableError
from seatfund.app.db.types import utcnow
from seatfund.app.models.user import User
from seatfund.app.models.member import Member
from seatfund.app.models.category import Category
from seatfund.app.models.transaction import MemberTransaction
from seatfund.app.models.seat import Seat
from seatfund.app.models.seat_contribution import SeatContribution
from seatfund.app.models.expense import Expense
from seatfund.app.models.ledger_entry import LedgerEntry

ModelT = TypeVar("ModelT")

DELETION_MARKER = "deleted_at"
LAST_UPDATE = "updated_at"

SOFT_DELETE_MODELS = frozenset({
    User,
    Member,
    Category,
    MemberTransaction,
    Seat,
    SeatContribution,
    Expense,
})


def is_soft_deletable(model: type) -> bool:
    return model in SOFT_DELETE_MODELS


def deletion_values(model: type, stamp) -> dict:
    """SET clause for a logical delete: the marker only, updated_at written back unchanged."""
    values = {DELETION_MARKER: stamp}
    columns = model.__table__.c
    if LAST_UPDATE in columns:
        values[LAST_UPDATE] = columns[LAST_UPDATE]
    return values


def references_deletion_marker(model: type, criteria: Iterable[Any]) -> bool:
    """True if any criterion mentions ``model.deleted_at``."""
    table_name = model.__table__.name
    for criterion in criteria:
        for element in visitors.iterate(criterion):
            if (
                isinstance(element, Column)
                and element.key == DELETION_MARKER
                and element.table is not None
                and element.table.name == table_name
            ):
                return True
    return False


class SoftDeleteStore:
    """
    Data access with logical deletion applied uniformly.

    Constructed once per unit of work around the session that unit of work
    uses, then handed to every component that reads or writes.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _visible(self, model: type, criteria: Sequence[Any], include_deleted: bool) -> List[Any]:
        criteria = list(criteria)
        if (
            is_soft_deletable(model)
            and not include_deleted
            and not references_deletion_marker(model, criteria)
        ):
            criteria.append(getattr(model, DELETION_MARKER).is_(None))
        return criteria

    # Reads

    async def get(self, model: Type[ModelT], record_id: Any, *, include_deleted: bool = False) -> Optional[ModelT]:
        """Fetch one row by primary key."""
        return await self.find_first(model, model.id == record_id, include_deleted=include_deleted)

    async def find_first(
        self,
        model: Type[ModelT],
        *criteria: Any,
        order_by: Sequence[Any] = (),
        include_deleted: bool = False,
        for_update: bool = False,
    ) -> Optional[ModelT]:
        """
        Fetch the first matching row.

        ``for_update`` locks the row for the rest of the unit of work and
        refreshes any copy already loaded in the session.
        """
        stmt = select(model).where(*self._visible(model, criteria, include_deleted))
        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.limit(1)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_many(
        self,
        model: Type[ModelT],
        *criteria: Any,
        order_by: Sequence[Any] = (),
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        include_deleted: bool = False,
    ) -> List[ModelT]:
        stmt = select(model).where(*self._visible(model, criteria, include_deleted))
        if order_by:
            stmt = stmt.order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, model: type, *criteria: Any, include_deleted: bool = False) -> int:
        stmt = select(func.count()).select_from(model).where(*self._visible(model, criteria, include_deleted))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    # Writes

    def add(self, instance: Any) -> None:
        self.session.add(instance)

    async def flush(self) -> None:
        await self.session.flush()

    async def delete(self, instance: ModelT) -> ModelT:
        """
        Delete one row.

        Soft-deletable rows get ``deleted_at`` set and stay in the table;
        no other column changes, and a row already deleted keeps its
        original stamp. Other rows are removed. Ledger entries are refused.
        """
        model = type(instance)
        if model is LedgerEntry:
            raise LedgerImmutableError(instance.id, "delete")

        if is_soft_deletable(model):
            if getattr(instance, DELETION_MARKER) is not None:
                return instance
            stamp = utcnow()
            stmt = (
                sql_update(model)
                .where(model.id == instance.id, getattr(model, DELETION_MARKER).is_(None))
                .values(deletion_values(model, stamp))
                .execution_options(synchronize_session=False)
            )
            await self.session.execute(stmt)
            set_committed_value(instance, DELETION_MARKER, stamp)
            return instance

        await self.session.delete(instance)
        await self.session.flush()
        return instance

    async def delete_many(self, model: type, *criteria: Any) -> int:
        """Bulk delete; returns the number of rows affected."""
        if model is LedgerEntry:
            raise LedgerImmutableError(None, "delete")

        if is_soft_deletable(model):
            marker = getattr(model, DELETION_MARKER)
            stmt = (
                sql_update(model)
                .where(*criteria, marker.is_(None))
                .values(deletion_values(model, utcnow()))
                .execution_options(synchronize_session="fetch")
            )
        else:
            stmt = sql_delete(model).where(*criteria)

        result = await self.session.execute(stmt)
        return result.rowcount
