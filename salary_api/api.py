"""
FastAPI app entry point for the salary guide API.
Keep as `uvicorn salary_api.api:app`.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .errors import SalaryApiError
from .routes import base as base_routes
from .routes import salary as salary_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings["log_level"])
    logger.info("salary_api_startup cors=%s timeout_s=%s", settings["cors_origins"], settings["query_timeout_s"])
    yield


app = FastAPI(title=base_routes.APP_NAME, version=base_routes.APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings()["cors_origins"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(SalaryApiError)
async def salary_api_error_handler(request: Request, exc: SalaryApiError):
    settings = getattr(request.state, "settings", None) or get_settings()
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(settings["expose_errors"]))


app.include_router(base_routes.router)
app.include_router(salary_routes.router)
