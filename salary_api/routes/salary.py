from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from ..config import get_settings
from ..errors import SalaryApiError
from ..logs import LogContext
from ..services.query_builder import SalaryQuery
from ..services.salary_svc import available_years, query_salaries

router = APIRouter()


def _request_settings(request: Request) -> dict:
    # read once per request; the error handler picks the same dict up from request.state
    request.state.settings = get_settings()
    return request.state.settings


@router.get("/salary", include_in_schema=False)
def api_salary_docs():
    return RedirectResponse(get_settings()["docs_url"], status_code=302)


@router.get("/salary/years")
def api_salary_years(request: Request):
    return {"years": available_years(settings=_request_settings(request))}


@router.get("/salary/year/{year}")
def api_salary_year(
    request: Request,
    year: str,
    page: str | None = None,
    search: str | None = None,
    sortby: str | None = None,
    order: str | None = None,
):
    # page stays a string: non-numeric values fall back to the first page instead of 422
    q = SalaryQuery(year=year, page=page, search=search, sortby=sortby, order=order)
    settings = _request_settings(request)
    log = LogContext("SALARY_QUERY")
    log.set_entity("year", year)
    log.set_payload(asdict(q))
    try:
        out = query_salaries(q, settings=settings)
    except SalaryApiError as e:
        log.write("ERROR", e.message)
        raise
    log.set_after({"count": out["count"], "rows": len(out["data"])})
    log.write("OK")
    return out
