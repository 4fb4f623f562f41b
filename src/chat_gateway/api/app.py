"""
chat_gateway.api.app

FastAPI app factory for the chat gateway.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Resolve and report configuration once at process start.
- Own the shared provider HTTP client (created/closed by the lifespan).
- Render every `GatewayError` as `{"error": message}`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from chat_gateway.api.routers.auth import router as auth_router
from chat_gateway.api.routers.chat import router as chat_router
from chat_gateway.api.routers.health import router as health_router
from chat_gateway.errors import GatewayError
from chat_gateway.observability.logging import configure_logging, get_logger
from chat_gateway.observability.middleware import RequestContextMiddleware
from chat_gateway.relay.provider import ModelProvider, ResponsesProvider
from chat_gateway.settings import Settings, get_settings, report_configuration

log = get_logger(__name__)


async def _gateway_error_handler(_: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("request_rejected", errors=len(exc.errors()))
    return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


def create_app(*, settings: Settings, provider: ModelProvider | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    report_configuration(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, misconfigured=settings.misconfigured)
        http: httpx.AsyncClient | None = None
        if provider is None:
            # One pooled client per process; per-call timeout is set by the provider.
            http = httpx.AsyncClient()
            app.state.provider = ResponsesProvider(settings=settings, http=http)
        try:
            yield
        finally:
            if http is not None:
                await http.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Chat Gateway",
        version="0.1.0",
        docs_url=None if settings.env == "prod" else "/docs",
        openapi_url=None if settings.env == "prod" else "/openapi.json",
        lifespan=lifespan,
    )
    if provider is not None:
        app.state.provider = provider

    # Every `Depends(get_settings)` sees this snapshot, not a fresh env read.
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(chat_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; relay logic stays
# in `chat_gateway.relay`.
