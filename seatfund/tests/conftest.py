"""
Centralized Test Configuration.
"""

from decimal import Decimal

import pytest
from sqlalchemy import event
from sqlalchemy.pool import Pool, StaticPool

from seatfund.app.db.session import Database
from seatfund.app.db.soft_delete import SoftDeleteStore
from seatfund.app.domain.ledger.orchestrator import TransactionOrchestrator
from seatfund.app.models.category import Category
from seatfund.app.models.enums import UserRole
from seatfund.app.models.ledger_enums import TransactionKind
from seatfund.app.models.member import Member
from seatfund.app.models.seat import Seat
from seatfund.app.models.transaction_type import TransactionType
from seatfund.app.models.user import User

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@pytest.fixture
async def database():
    """Fresh in-memory database per test, tables created and dropped around it."""
    db = Database(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await db.create_all()

    yield db

    await db.drop_all()
    await db.dispose()


@pytest.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def store(db_session):
    return SoftDeleteStore(db_session)


@pytest.fixture
def orchestrator(store):
    return TransactionOrchestrator(store)


@pytest.fixture
def register_kinds(db_session):
    """Returns a coroutine function registering the given transaction kinds."""
    async def register(kinds=tuple(TransactionKind)):
        for kind in kinds:
            db_session.add(TransactionType(name=kind, description=kind.value))
        await db_session.commit()

    return register


@pytest.fixture
async def transaction_types(register_kinds):
    """All four transaction kinds registered."""
    await register_kinds()


@pytest.fixture
async def member(db_session):
    m = Member(name="Asha Rao", phone="+911234567890", email="asha@example.com")
    db_session.add(m)
    await db_session.commit()
    return m


@pytest.fixture
async def second_member(db_session):
    m = Member(name="Vikram Shah")
    db_session.add(m)
    await db_session.commit()
    return m


@pytest.fixture
async def approver(db_session):
    user = User(
        email="treasurer@example.com",
        first_name="Meera",
        last_name="Iyer",
        role=UserRole.OPERATOR,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def category(db_session):
    c = Category(name="Monthly Contribution", description="Regular monthly member contribution")
    db_session.add(c)
    await db_session.commit()
    return c


@pytest.fixture
async def seat(db_session):
    s = Seat(seat_number=1, total_amount=Decimal("10000.00"))
    db_session.add(s)
    await db_session.commit()
    return s


@pytest.fixture
def assert_ledger_consistent(store):
    """
    Check the ledger invariants over everything written so far:
    every account chains from 0 in id order, and every source id has
    exactly one DEBIT and one CREDIT of equal amount and date.
    """
    from seatfund.app.models.ledger_entry import LedgerEntry
    from seatfund.app.models.ledger_enums import Account, LedgerEntryType

    async def check():
        entries = await store.find_many(LedgerEntry, order_by=(LedgerEntry.id.asc(),))

        for account in Account:
            balance = Decimal("0.00")
            for entry in (e for e in entries if e.account == account):
                if entry.entry_type == LedgerEntryType.DEBIT:
                    balance += entry.amount
                else:
                    balance -= entry.amount
                assert entry.running_balance == balance, f"{account.value} broke at entry {entry.id}"

        pairs = {}
        for entry in entries:
            pairs.setdefault((entry.transaction_id, entry.expense_id), []).append(entry)
        for source, group in pairs.items():
            assert len(group) == 2, f"source {source} has {len(group)} entries"
            debit, credit = group
            assert debit.entry_type == LedgerEntryType.DEBIT
            assert credit.entry_type == LedgerEntryType.CREDIT
            assert debit.amount == credit.amount
            assert debit.entry_date == credit.entry_date
        return entries

    return check
