from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

import mysql.connector

from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import KeyValueStorage


class MySQLKeyValueStorage(KeyValueStorage):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def multi_get(self, keys: Sequence[str]) -> Mapping[str, Optional[str]]:
        result: Dict[str, Optional[str]] = {k: None for k in keys}
        if not keys:
            return result
        placeholders = ", ".join(["%s"] * len(keys))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT storage_key, value
                    FROM session_kv
                    WHERE storage_key IN ({placeholders})
                    """,
                    tuple(keys),
                )
                for r in fetchall(cur):
                    result[r["storage_key"]] = r["value"]
        except mysql.connector.Error as e:
            raise PersistenceError(f"multi_get failed: {e}") from e
        return result

    def multi_set(self, items: Mapping[str, str]) -> None:
        if not items:
            return
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.executemany(
                    """
                    INSERT INTO session_kv (storage_key, value)
                    VALUES (%s, %s)
                    ON DUPLICATE KEY UPDATE value=VALUES(value)
                    """,
                    [(k, str(v)) for k, v in items.items()],
                )
        except mysql.connector.Error as e:
            raise PersistenceError(f"multi_set failed: {e}") from e

    def multi_remove(self, keys: Sequence[str]) -> None:
        if not keys:
            return
        placeholders = ", ".join(["%s"] * len(keys))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"DELETE FROM session_kv WHERE storage_key IN ({placeholders})",
                    tuple(keys),
                )
        except mysql.connector.Error as e:
            raise PersistenceError(f"multi_remove failed: {e}") from e
