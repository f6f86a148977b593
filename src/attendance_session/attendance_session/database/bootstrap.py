from __future__ import annotations

from .connection import DatabaseConnection
from .mysql_base import db_cursor

SESSION_KV_DDL = """
CREATE TABLE IF NOT EXISTS session_kv (
    storage_key VARCHAR(191) NOT NULL PRIMARY KEY,
    value VARCHAR(64) NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
)
"""


def apply_schema(conn_factory: DatabaseConnection) -> None:
    # Idempotent: CREATE IF NOT EXISTS.
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute(SESSION_KV_DDL)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [str(r[0]) for r in cur.fetchall()]
