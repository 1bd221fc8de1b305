from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as dist_version

from fastapi import APIRouter

APP_NAME = "salary-api"

try:
    APP_VERSION = dist_version(APP_NAME)
except PackageNotFoundError:
    # running from a source checkout without `pip install -e .`
    APP_VERSION = "0.0.0+local"

router = APIRouter()


@router.get("/")
def index():
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs",
        "years": "/salary/years",
    }


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/version")
def version():
    return {"app": APP_NAME, "version": APP_VERSION}
