"""
tests.conftest

Shared fixtures: settings snapshots and a stub model provider.
"""

from __future__ import annotations

from typing import Any

import pytest

from chat_gateway.observability.logging import configure_logging
from chat_gateway.relay.provider import FlatText, ProviderReply
from chat_gateway.settings import Settings

SIGNING_SECRET = "test-signing-secret-0123456789abcdef0123456789"
POC_USER = "poc"
POC_PASS = "pw"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "env": "test",
        "auth_secret": SIGNING_SECRET,
        "poc_user": POC_USER,
        "poc_pass": POC_PASS,
        "openai_api_key": "sk-test",
        "session_cookie_secure": False,
        "provider_retry_backoff_seconds": 0.0,
    }
    values.update(overrides)
    return Settings(**values)


class StubProvider:
    """Records every prompt; returns a canned reply or raises a canned error."""

    def __init__(
        self,
        reply: ProviderReply | None = None,
        error: Exception | None = None,
    ) -> None:
        self.reply = reply if reply is not None else FlatText("hi")
        self.error = error
        self.calls: list[str] = []

    async def complete(self, prompt: str) -> ProviderReply:
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def provider_factory():
    return StubProvider


@pytest.fixture(scope="session", autouse=True)
def _structured_logging() -> None:
    # Route structlog through stdlib logging so `caplog` sees every event.
    configure_logging(service_name="chat-gateway-test", level="INFO")
