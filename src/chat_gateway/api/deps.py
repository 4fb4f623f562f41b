"""
chat_gateway.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for the model provider and relay service.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Depends, Request

from chat_gateway.relay.provider import ModelProvider
from chat_gateway.relay.service import ChatRelay


def provider_from_app(request: Request) -> ModelProvider:
    # Set by `chat_gateway.api.app.create_app` (injected) or its lifespan (httpx-backed).
    return request.app.state.provider  # type: ignore[attr-defined]


def relay_dep(provider: ModelProvider = Depends(provider_from_app)) -> ChatRelay:
    return ChatRelay(provider=provider)
