"""
chat_gateway.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) reporting a degraded configuration.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from chat_gateway.settings import Settings, get_settings

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz", response_model=None)
async def readyz(settings: Settings = Depends(get_settings)) -> dict[str, Any] | JSONResponse:
    # Readiness: a misconfigured snapshot serves traffic but cannot sign in or relay.
    missing = settings.missing_values()
    if missing:
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "misconfigured", "missing": missing},
        )
    return {"status": "ready"}
