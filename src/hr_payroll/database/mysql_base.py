from __future__ import annotations

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on error.

    Driver errors (connect, execute, commit) are re-raised as StoreError.
    A failing rollback or close never replaces the error being raised.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Database connection failed: %s", e)
        raise StoreError(f"Database connection failed: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            _quietly(cur.close, "close cursor")
    except mysql.connector.Error as e:
        _quietly(conn.rollback, "roll back")
        logger.error("Database operation failed: %s", e)
        raise StoreError(str(e)) from e
    except Exception:
        _quietly(conn.rollback, "roll back")
        raise
    finally:
        _quietly(conn.close, "close connection")


def _quietly(action, what: str) -> None:
    try:
        action()
    except mysql.connector.Error as e:
        logger.warning("Could not %s: %s", what, e)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_decimal(value: Any) -> Decimal:
    """Normalize a DECIMAL column across connector implementations.

    mysql-connector usually returns Decimal, but the pure-Python protocol can
    hand back str/bytes and some setups return float.
    """

    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bytes):
        value = value.decode("ascii")
    return Decimal(str(value))
