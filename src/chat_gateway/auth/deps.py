"""
chat_gateway.auth.deps

FastAPI dependency functions for session authentication.

Responsibilities:
- Extract a session token from the session cookie or a bearer header.
- Convert it into a typed `Principal`, or refuse the request with 401.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chat_gateway.auth.models import Principal
from chat_gateway.auth.tokens import SessionTokenCodec
from chat_gateway.errors import Unauthorized
from chat_gateway.observability.logging import get_logger
from chat_gateway.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_token_codec(settings: Settings = Depends(get_settings)) -> SessionTokenCodec:
    return SessionTokenCodec(settings)


def extract_session_tokens(
    request: Request,
    creds: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> list[str]:
    # Cookie first (browser client), then bearer header (scripts, tests).
    tokens: list[str] = []
    cookie = request.cookies.get(settings.session_cookie_name)
    if cookie:
        tokens.append(cookie)
    if creds is not None and creds.credentials:
        tokens.append(creds.credentials)
    return tokens


async def require_session(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
    codec: SessionTokenCodec = Depends(get_token_codec),
) -> Principal:
    tokens = extract_session_tokens(request, creds, settings)
    if not tokens:
        log.info("session_rejected", reason="missing")
        raise Unauthorized()

    # A stale cookie must not shadow a valid bearer token.
    principal = next((p for p in map(codec.validate, tokens) if p is not None), None)
    if principal is None:
        log.info("session_rejected", reason="invalid")
        raise Unauthorized()

    request.state.principal = principal
    structlog.contextvars.bind_contextvars(principal_id=principal.id)
    return principal


# --- Module Notes -----------------------------------------------------------
# This is the security boundary. Any client-side "redirect when signed out"
# behaviour is UX only; every protected route must depend on `require_session`.
