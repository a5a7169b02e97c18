# Overview: Transaction helpers shared by the record services.

from __future__ import annotations

from contextlib import contextmanager

from ..extensions import db


def lock_for_update(query):
    """
    Apply row-level locking for read-modify-write operations (payment toggles).

    NOTE: SQLite ignores SELECT ... FOR UPDATE, but other DBs will honor it.
    """
    return query.with_for_update()


@contextmanager
def atomic():
    """
    Run a unit of work as a single transaction.

    Base fields and derived fields are written inside the block and
    committed together. Any exception rolls the session back and is
    re-raised; there is no automatic retry, the prior state stays
    authoritative.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
