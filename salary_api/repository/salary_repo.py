from __future__ import annotations

import re
from sqlite3 import Connection
from typing import Any

_YEAR_TABLE = re.compile(r"^(\d{4})Data$")


def quote_ident(name: str) -> str:
    """Quote an SQL identifier; SQLite cannot bind table/column names as parameters."""
    return '"' + name.replace('"', '""') + '"'


def list_years(conn: Connection) -> list[str]:
    """Years that have a `<year>Data` table, ascending."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type IN ('table', 'view') AND name LIKE '%Data'"
    ).fetchall()
    years = set()
    for r in rows:
        m = _YEAR_TABLE.match(r["name"])
        if m:
            years.add(m.group(1))
    return sorted(years)


def table_columns(conn: Connection, table: str) -> list[str]:
    return [r["name"] for r in conn.execute(f"PRAGMA table_info({quote_ident(table)})").fetchall()]


def fetch_rows(conn: Connection, sql: str, params: tuple[Any, ...]) -> list[dict[str, Any]]:
    return [dict(r) for r in conn.execute(sql, params).fetchall()]


def fetch_count(conn: Connection, sql: str, params: tuple[Any, ...]) -> int:
    row = conn.execute(sql, params).fetchone()
    return int(row[0]) if row is not None else 0
