from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _rollback_quietly(conn) -> None:
    # A dropped connection fails its rollback too; the server discards the
    # open transaction on its own.
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        logger.warning("Rollback failed: %s", e)


def _close_quietly(conn) -> None:
    try:
        conn.close()
    except mysql.connector.Error as e:
        logger.warning("Closing connection failed: %s", e)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` on a fresh connection.

    Commits when the block exits cleanly, rolls back otherwise. Driver errors
    surface as :class:`StoreError` so services never see mysql-connector types,
    even when the rollback after them fails as well.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Cannot connect to record store: %s", e)
        raise StoreError("Record store is unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        _rollback_quietly(conn)
        logger.error("Record store query failed: %s", e, exc_info=True)
        raise StoreError("Record store query failed") from e
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        _close_quietly(conn)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholder list for ``IN (...)`` with one ``%s`` per value."""
    return ", ".join(["%s"] * len(values))
