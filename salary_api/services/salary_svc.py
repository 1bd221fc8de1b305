from __future__ import annotations

# salary_api/services/salary_svc.py
import logging
import sqlite3
from dataclasses import replace
from typing import Any

from ..config import get_settings
from ..db import get_conn
from ..errors import DatabaseError, InvalidYearError, QueryTimeoutError, SalaryApiError
from ..repository import salary_repo
from .query_builder import SalaryQuery, build_query, table_name

logger = logging.getLogger(__name__)


def translate_db_error(err: sqlite3.Error) -> SalaryApiError:
    """Map a driver error onto the client-facing error; full detail goes to the log."""
    msg = str(err)
    detail = {"type": type(err).__name__, "detail": msg}
    if isinstance(err, sqlite3.OperationalError):
        if msg.startswith("no such table"):
            return InvalidYearError(detail=detail)
        if msg == "interrupted":
            logger.warning("salary_query_timeout: %s", msg)
            return QueryTimeoutError(detail=detail)
    logger.error("salary_query_db_error: %s", msg, exc_info=err)
    return DatabaseError(detail=detail)


def _open(settings: dict, db_path: str | None):
    return get_conn(db_path or settings["db_path"], settings["query_timeout_s"])


def _allowed_years(conn: sqlite3.Connection, restrict: list[str] | None = None) -> list[str]:
    years = salary_repo.list_years(conn)
    if restrict:
        allowed = set(restrict)
        years = [y for y in years if y in allowed]
    return years


def resolve_year(conn: sqlite3.Connection, year: str | None, restrict: list[str] | None = None) -> str:
    """Return the normalized year if its table is on the allow-list, else raise InvalidYearError."""
    y = (year or "").strip()
    if not y or y not in _allowed_years(conn, restrict):
        raise InvalidYearError(detail={"year": year})
    return y


def available_years(db_path: str | None = None, settings: dict | None = None) -> list[str]:
    settings = settings or get_settings()
    try:
        with _open(settings, db_path) as conn:
            return _allowed_years(conn, settings["years"])
    except sqlite3.Error as e:
        raise translate_db_error(e) from e


def describe(q: SalaryQuery, db_path: str | None = None, settings: dict | None = None) -> dict[str, Any]:
    """Both descriptors for a request, without executing them."""
    settings = settings or get_settings()
    try:
        with _open(settings, db_path) as conn:
            q = replace(q, year=resolve_year(conn, q.year, settings["years"]))
            columns = salary_repo.table_columns(conn, table_name(q.year))
    except sqlite3.Error as e:
        raise translate_db_error(e) from e
    data_q = build_query(q, "results", columns)
    count_q = build_query(q, "count")
    return {
        "results": {"string": data_q.string, "params": list(data_q.params)},
        "count": {"string": count_q.string, "params": list(count_q.params)},
    }


def query_salaries(q: SalaryQuery, db_path: str | None = None, settings: dict | None = None) -> dict[str, Any]:
    """
    Run the data query then the count query for one request.

    Returns {"data": [...], "count": int}. Any failure aborts before a payload is
    assembled, so callers never see partial results. `settings` is read once by
    the caller; it is loaded here only when omitted.
    """
    settings = settings or get_settings()
    try:
        with _open(settings, db_path) as conn:
            q = replace(q, year=resolve_year(conn, q.year, settings["years"]))
            columns = salary_repo.table_columns(conn, table_name(q.year))
            data_q = build_query(q, "results", columns)
            count_q = build_query(q, "count")
            data = salary_repo.fetch_rows(conn, data_q.string, data_q.params)
            count = salary_repo.fetch_count(conn, count_q.string, count_q.params)
    except sqlite3.Error as e:
        raise translate_db_error(e) from e
    return {"data": data, "count": count}
