from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple


class ConnectionFactory(Protocol):
    def connect(self) -> Any:
        raise NotImplementedError


@contextmanager
def db_cursor(conn_factory: ConnectionFactory, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """Open a connection and cursor for a single read.

    Readers only: nothing is committed, any error rolls back and propagates.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
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
