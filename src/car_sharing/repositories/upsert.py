"""Insert-or-replace primitive shared by the repositories."""

from __future__ import annotations

import sqlite3
from typing import Any, Mapping


def upsert(
    connection: sqlite3.Connection,
    table: str,
    record: Mapping[str, Any],
    *,
    key: str,
) -> tuple[Any, bool]:
    """Write ``record`` into ``table``, replacing the row that shares its key.

    A ``None`` key lets SQLite generate one. Returns the key of the written row
    and whether it was inserted. The caller owns the transaction; nothing is
    committed here.
    """
    key_value = record.get(key)
    columns = [column for column in record if column != key]

    if key_value is not None:
        exists = connection.execute(
            f"SELECT 1 FROM {table} WHERE {key} = ?",
            (key_value,),
        ).fetchone()
        if exists:
            assignments = ", ".join(f"{column} = ?" for column in columns)
            connection.execute(
                f"UPDATE {table} SET {assignments} WHERE {key} = ?",
                [*(record[column] for column in columns), key_value],
            )
            return key_value, False
        columns = [key, *columns]

    placeholders = ", ".join(["?"] * len(columns))
    cursor = connection.execute(
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
        [record[column] for column in columns],
    )
    return (key_value if key_value is not None else cursor.lastrowid), True
