from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_local = threading.local()

LOCK_TIMEOUT_SECONDS = 10


def _current_conn():
    return getattr(_local, "conn", None)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``.

    Inside ``transaction()`` the thread's open connection is reused and the
    commit is left to the transaction; otherwise a short-lived connection is
    opened, committed and closed here.
    """

    shared = _current_conn()
    if shared is not None:
        cur = shared.cursor(dictionary=dictionary)
        try:
            yield shared, cur
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def transaction(conn_factory: DatabaseConnection, *, lock_name: Optional[str] = None) -> Iterator[None]:
    """Run every repository call of the block on one connection and commit once.

    When ``lock_name`` is given a MySQL named lock is held for the duration,
    serializing read-then-write sequences for the same key (e.g. one intern).
    Nested calls join the outer transaction.
    """

    if _current_conn() is not None:
        yield
        return

    conn = conn_factory.connect()
    conn.start_transaction()
    _local.conn = conn
    locked = False
    try:
        if lock_name:
            cur = conn.cursor()
            try:
                cur.execute("SELECT GET_LOCK(%s, %s)", (lock_name, LOCK_TIMEOUT_SECONDS))
                row = cur.fetchone()
            finally:
                cur.close()
            if not row or row[0] != 1:
                raise ConflictError("Another update for this record is in progress, try again")
            locked = True
        yield
        conn.commit()
    except Exception:
        logger.debug("Rolling back transaction (lock=%s)", lock_name)
        conn.rollback()
        raise
    finally:
        _local.conn = None
        if locked:
            cur = conn.cursor()
            try:
                cur.execute("SELECT RELEASE_LOCK(%s)", (lock_name,))
                cur.fetchall()
            finally:
                cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_date(value: Any) -> Optional[date]:
    """DATE columns may come back as date, datetime or string depending on the connector."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
