from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
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


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def time_to_minutes(value: Any) -> Optional[int]:
    """Normalize MySQL TIME values to minutes from midnight.

    mysql-connector can return TIME as:
    - datetime.timedelta (may exceed 24h, e.g. '29:00:00' for a night shift end)
    - datetime.time
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, timedelta):
        return int(value.total_seconds()) // 60

    if isinstance(value, time):
        return value.hour * 60 + value.minute

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return int(parts[0]) * 60 + int(parts[1])

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
