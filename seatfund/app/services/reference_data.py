"""
Reference data seeding.

Registers the transaction kinds and the default categories. Idempotent:
rows that already exist (deleted categories included) are left alone.
"""

from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from seatfund.app.core.observability import get_logger
from seatfund.app.db.soft_delete import SoftDeleteStore
from seatfund.app.db.unit_of_work import atomic
from seatfund.app.models.category import Category
from seatfund.app.models.ledger_enums import TransactionKind
from seatfund.app.models.transaction_type import TransactionType

logger = get_logger("services.reference_data")

TRANSACTION_TYPES = {
    TransactionKind.CASH_IN: "Money received / contribution",
    TransactionKind.CASH_OUT: "Money paid out / withdrawal",
    TransactionKind.SEAT_PAYMENT: "Payment towards a seat",
    TransactionKind.EXPENSE: "Expense deduction",
}

DEFAULT_CATEGORIES = {
    "Monthly Contribution": "Regular monthly member contribution",
    "Seat Payment": "Payment towards a contribution seat",
    "Payout": "Money paid out to a member",
    "Administrative": "Administrative expenses",
    "Miscellaneous": "Uncategorized transactions",
    "Penalty": "Late payment or rule violation penalties",
    "Interest": "Interest earned or charged",
}


async def seed_reference_data(session: AsyncSession) -> Dict[str, int]:
    """
    Create missing transaction types and categories.

    Returns:
        Number of rows created, per table
    """
    store = SoftDeleteStore(session)
    created = {"transaction_types": 0, "categories": 0}

    async with atomic(session):
        for kind, description in TRANSACTION_TYPES.items():
            if await store.find_first(TransactionType, TransactionType.name == kind) is None:
                store.add(TransactionType(name=kind, description=description))
                created["transaction_types"] += 1

        for name, description in DEFAULT_CATEGORIES.items():
            # Names are unique across deleted rows too
            existing = await store.find_first(Category, Category.name == name, include_deleted=True)
            if existing is None:
                store.add(Category(name=name, description=description))
                created["categories"] += 1

    logger.info("Reference data seeded", extra=created)
    return created
