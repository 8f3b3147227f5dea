"""
Atomic unit of work.

Every money-moving workflow runs inside ``atomic(session)``: all writes made
in the block commit together or not at all.

Isolation is not chosen here but on the engine (``Settings.db_isolation_level``,
SERIALIZABLE by default). The workflows read the latest balance and write a new
one in the same block; under weaker isolation two concurrent workflows on the
same account or member could both read the same balance. Conflicts detected by
the store surface as a retryable ``StorageFailureError``. Nothing is retried
here; the caller decides.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from seatfund.app.core.exceptions import AppException, StorageFailureError
from seatfund.app.core.observability import get_logger

logger = get_logger("db.unit_of_work")

# SQLSTATE for serialization_failure and deadlock_detected
_CONFLICT_SQLSTATES = {"40001", "40P01"}


def is_conflict(exc: SQLAlchemyError) -> bool:
    """True when the store aborted the unit of work because of a concurrent writer."""
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _CONFLICT_SQLSTATES:
        return True
    # SQLite reports write contention as a locked database
    return isinstance(exc, OperationalError) and "database is locked" in str(exc)


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run the enclosed block as one all-or-nothing unit of work.

    Commits on success. On any exception the session is rolled back;
    SQLAlchemy errors are re-raised as StorageFailureError, application
    errors are re-raised unchanged.
    """
    try:
        yield session
        await session.commit()
    except AppException:
        await session.rollback()
        raise
    except SQLAlchemyError as exc:
        await session.rollback()
        retryable = is_conflict(exc)
        logger.error(
            "Unit of work rolled back",
            extra={"error": type(exc).__name__, "retryable": retryable},
        )
        raise StorageFailureError(retryable=retryable) from exc
    except Exception:
        await session.rollback()
        raise
