from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..core.exceptions import DataProviderError
from .connection import DatabaseConnection

_LOGGER = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on error.

    Driver errors are re-raised as DataProviderError so callers above the
    repository layer only deal with domain exceptions.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as err:
        _LOGGER.error("Could not connect to database: %s", err)
        raise DataProviderError(str(err)) from err

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as err:
        conn.rollback()
        _LOGGER.error("Database statement failed: %s", err)
        raise DataProviderError(str(err)) from err
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for ``IN (...)``; callers must skip empty sequences."""
    if not values:
        raise ValueError("in_clause() needs at least one value")
    return ", ".join(["%s"] * len(values))
