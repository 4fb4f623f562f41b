"""
tests.test_logging

Log hygiene: sensitive keys are redacted and provider failures never write the
API key or request headers into error records.
"""

from __future__ import annotations

import logging

import httpx
import pytest

from chat_gateway.errors import ProviderError
from chat_gateway.observability.logging import REDACTED, redact_sensitive
from chat_gateway.relay.models import ConversationMessage, RelayRequest
from chat_gateway.relay.provider import ResponsesProvider
from chat_gateway.relay.service import ChatRelay

PROVIDER_KEY = "sk-proj-DO-NOT-LOG-0123456789abcdef"


def test_redact_sensitive_masks_named_keys() -> None:
    event = {
        "event": "signin_attempt",
        "password": "pw",
        "access_token": "eyJ...",
        "Authorization": "Bearer eyJ...",
        "openai_api_key": PROVIDER_KEY,
        "auth_secret": "s3cret",
        "principal_id": "poc-user",
    }

    out = redact_sensitive(None, "info", dict(event))

    assert out["event"] == "signin_attempt"
    assert out["principal_id"] == "poc-user"
    for key in ("password", "access_token", "Authorization", "openai_api_key", "auth_secret"):
        assert out[key] == REDACTED


@pytest.mark.asyncio
async def test_provider_failure_log_omits_api_key_and_headers(settings_factory, caplog) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    settings = settings_factory(openai_api_key=PROVIDER_KEY, provider_max_retries=0)
    http = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
    relay = ChatRelay(provider=ResponsesProvider(settings=settings, http=http))

    with caplog.at_level(logging.ERROR), pytest.raises(ProviderError):
        await relay.relay(RelayRequest(messages=[ConversationMessage(role="user", text="hello")]))
    await http.aclose()

    assert "provider_call_failed" in caplog.text
    assert "ConnectError" in caplog.text
    assert PROVIDER_KEY not in caplog.text
    assert "Bearer" not in caplog.text
