"""
ORM-level immutability for ledger entries.

A ``before_flush`` listener rejects any flush that would UPDATE or DELETE a
``LedgerEntry``. Entries are written once by the ledger entry writer and
never touched again.
"""

from sqlalchemy import event
from sqlalchemy.orm import Session

from seatfund.app.core.exceptions import LedgerImmutableError


def _reject_ledger_mutation(session, flush_context, instances):
    # Inline import: models import db.session, which registers this listener
    from seatfund.app.models.ledger_entry import LedgerEntry

    for obj in list(session.deleted):
        if isinstance(obj, LedgerEntry):
            raise LedgerImmutableError(obj.id, "delete")

    for obj in list(session.dirty):
        if isinstance(obj, LedgerEntry) and session.is_modified(obj, include_collections=False):
            raise LedgerImmutableError(obj.id, "update")


def register_immutability_listeners() -> None:
    """Install the listener on all sessions. Safe to call more than once."""
    if not event.contains(Session, "before_flush", _reject_ledger_mutation):
        event.listen(Session, "before_flush", _reject_ledger_mutation)
