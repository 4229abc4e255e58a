"""Database connection helpers."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from car_sharing.config import DB_TIMEOUT_SECONDS


def get_connection(
    database_path: Path | str,
    timeout: float = DB_TIMEOUT_SECONDS,
) -> sqlite3.Connection:
    """Create a SQLite connection with foreign keys enabled.

    ``timeout`` is how long a writer waits for another connection's write
    lock before ``sqlite3.OperationalError`` is raised.
    """
    connection = sqlite3.connect(database_path, timeout=timeout)
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON;")
    return connection


@contextmanager
def transaction(
    connection: sqlite3.Connection,
    *,
    immediate: bool = False,
) -> Iterator[sqlite3.Connection]:
    """Provide a transaction scope for SQLite operations.

    With ``immediate=True`` the write lock is taken up front, so concurrent
    writers are serialized before they read anything.
    """
    if immediate:
        connection.execute("BEGIN IMMEDIATE")
    try:
        yield connection
    except BaseException:
        connection.rollback()
        raise
    else:
        connection.commit()
