"""
chat_gateway.relay.service

Chat relay service.

Responsibilities:
- Select the message to answer (latest user turn).
- Invoke the model provider once.
- Normalize the provider reply into a single text value.

Per request: selected -> invoked -> normalized; any failing step ends the
request with its own error (NoInput / ConfigurationError / ProviderError).
"""

from __future__ import annotations

from collections.abc import Sequence

from chat_gateway.errors import ConfigurationError, NoInput, ProviderError
from chat_gateway.observability.logging import get_logger
from chat_gateway.relay.models import ConversationMessage, RelayRequest, RelayResponse
from chat_gateway.relay.provider import ModelProvider, normalize_reply

log = get_logger(__name__)


def select_user_text(messages: Sequence[ConversationMessage]) -> str:
    for message in reversed(messages):
        if message.role == "user":
            text = message.text.strip()
            if not text:
                raise NoInput()
            return text
    raise NoInput()


class ChatRelay:
    def __init__(self, *, provider: ModelProvider) -> None:
        self._provider = provider

    async def relay(self, request: RelayRequest) -> RelayResponse:
        prompt = select_user_text(request.messages)

        try:
            reply = await self._provider.complete(prompt)
        except ConfigurationError:
            raise
        except Exception as e:
            # Detail stays in the log; the caller only sees a generic message.
            log.error("provider_call_failed", error_type=type(e).__name__, exc_info=True)
            raise ProviderError() from e

        text = normalize_reply(reply)
        log.info(
            "relay_completed",
            prompt_chars=len(prompt),
            reply_chars=len(text),
            reply_shape=type(reply).__name__,
        )
        return RelayResponse(text=text)
