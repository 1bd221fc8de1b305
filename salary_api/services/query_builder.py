"""
SQL construction for the per-year salary tables.

Nothing here touches a connection: `build_query` turns request parameters into a
`QueryDescriptor` (SQL text + bound parameters). The count variant shares the
data variant's filter but never its ORDER BY / LIMIT, so `count` is the total
number of matches regardless of page.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Literal

from ..errors import InvalidSortColumnError, InvalidYearError
from ..repository.salary_repo import quote_ident

PAGE_SIZE = 10
# largest value SQLite can bind as an INTEGER
SQLITE_MAX_INT = 2**63 - 1
SEARCH_COLUMNS = ("Division", "Department", "Title", "Employee", "Salary")

# Salary is stored as formatted text ("$50,000.00"); strip currency formatting before casting
SALARY_SORT_SQL = "CAST(REPLACE(REPLACE(Salary,'$',''),',','') AS INTEGER)"

QueryKind = Literal["results", "count"]

_SPACES = re.compile(r" +")


@dataclass(frozen=True)
class SalaryQuery:
    year: str | None
    page: Any = None
    search: str | None = None
    sortby: str | None = None
    order: str | None = None


@dataclass(frozen=True)
class QueryDescriptor:
    string: str
    params: tuple[Any, ...]


def table_name(year: str | None) -> str:
    if year is None or not str(year).strip():
        raise InvalidYearError()
    return f"{str(year).strip()}Data"


def page_offset(page: Any) -> int:
    """(page-1) * PAGE_SIZE for a numeric page >= 1, otherwise 0; capped at SQLITE_MAX_INT."""
    if page is None or page == "":
        return 0
    try:
        n = float(page)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(n) or n < 1:
        return 0
    return min(int((n - 1) * PAGE_SIZE), SQLITE_MAX_INT)


def resolve_sort_column(sortby: str, columns: Iterable[str] | None = None) -> str:
    """Map a requested sort column onto the table's own spelling of it."""
    name = sortby.strip()
    if columns is None:
        if not name:
            raise InvalidSortColumnError()
        return name
    by_lower = {c.lower(): c for c in columns}
    try:
        return by_lower[name.lower()]
    except KeyError:
        raise InvalidSortColumnError(detail={"sortby": sortby}) from None


def _where(search: str | None, params: list[Any]) -> str:
    if not search:
        return ""
    preds = []
    for col in SEARCH_COLUMNS:
        preds.append(f"{col} LIKE ?")
        params.append(f"%{search}%")
    return " WHERE " + " OR ".join(preds)


def _order_by(q: SalaryQuery, columns: Iterable[str] | None) -> str:
    if not q.sortby:
        return ""
    if q.sortby.strip().lower() == "salary":
        sql = f" ORDER BY {SALARY_SORT_SQL}"
    else:
        # ignore whitespace while sorting
        sql = f" ORDER BY REPLACE({quote_ident(resolve_sort_column(q.sortby, columns))},' ','')"
    if q.order and q.order.strip().upper() == "DESC":
        sql += " DESC"
    return sql


def build_query(q: SalaryQuery, kind: QueryKind = "results", columns: Iterable[str] | None = None) -> QueryDescriptor:
    """
    Build the data ("results") or count ("count") statement for one request.

    `columns`, when given, is the table's column list; a sortby outside it raises
    InvalidSortColumnError. A missing year raises InvalidYearError.
    """
    if kind not in ("results", "count"):
        raise ValueError(f"unknown query kind: {kind!r}")

    table = quote_ident(table_name(q.year))
    params: list[Any] = []
    if kind == "count":
        sql = f"SELECT COUNT(*) AS count FROM {table}"
    else:
        sql = f"SELECT * FROM {table}"
    sql += _where(q.search, params)

    if kind == "count":
        return QueryDescriptor(_SPACES.sub(" ", sql).strip(), tuple(params))

    sql += _order_by(q, columns)
    sql += " LIMIT ? OFFSET ?"
    params.extend([PAGE_SIZE, page_offset(q.page)])
    return QueryDescriptor(_SPACES.sub(" ", sql).strip(), tuple(params))
