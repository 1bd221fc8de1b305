#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Salary Guide (SQLite) - read-only command line

Commands:
  years               List years that have a <year>Data table
  query YEAR          Run the same paginated/filtered/sorted lookup the HTTP API serves
  sql YEAR            Print the data and count statements without executing them

Notes:
- Output is JSON on stdout; errors print {"message": ...} and exit with status 1.
- --db overrides the database path (otherwise SALARY_DB_PATH / config.yaml).
"""

import argparse
import json
import sys

from salary_api.errors import SalaryApiError
from salary_api.services.query_builder import SalaryQuery
from salary_api.services.salary_svc import available_years, describe, query_salaries


def _query_from_args(args) -> SalaryQuery:
    return SalaryQuery(year=args.year, page=args.page, search=args.search, sortby=args.sortby, order=args.order)


def _dump(obj):
    print(json.dumps(obj, ensure_ascii=False, indent=2))


# ---------------- Commands ----------------

def cmd_years(args):
    _dump({"years": available_years(args.db)})


def cmd_query(args):
    _dump(query_salaries(_query_from_args(args), args.db))


def cmd_sql(args):
    out = describe(_query_from_args(args), args.db)
    _dump(out["count"] if args.count else out["results"])


# ---------------- Entry ----------------

def _add_query_args(p):
    p.add_argument("year", help="e.g. 2019 (reads table 2019Data)")
    p.add_argument("--page", required=False, help="1-indexed page (default 1)")
    p.add_argument("--search", required=False)
    p.add_argument("--sortby", required=False, help="column name or 'salary'")
    p.add_argument("--order", required=False, choices=["ASC", "DESC", "asc", "desc"])


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Salary guide (SQLite, read-only)")
    parser.add_argument("--db", default=None, help="SQLite database path")
    sub = parser.add_subparsers()

    p_years = sub.add_parser("years", help="list available years")
    p_years.set_defaults(func=cmd_years)

    p_query = sub.add_parser("query", help="fetch one page of rows plus the total count")
    _add_query_args(p_query)
    p_query.set_defaults(func=cmd_query)

    p_sql = sub.add_parser("sql", help="print the generated statement")
    _add_query_args(p_sql)
    p_sql.add_argument("--count", action="store_true", help="print the count statement instead")
    p_sql.set_defaults(func=cmd_sql)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        args.func(args)
    except SalaryApiError as e:
        _dump(e.to_body())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
