"""
chat_gateway.relay.provider

Model provider boundary.

Responsibilities:
- Model the provider's two reply shapes as a tagged union (`FlatText` /
  `SegmentedContent`) with one normalization function.
- Call the hosted Responses API over httpx with a fixed request shape, an
  explicit timeout and bounded retry with backoff for transient failures.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from chat_gateway.errors import ConfigurationError, ProviderError
from chat_gateway.observability.logging import get_logger
from chat_gateway.settings import Settings

log = get_logger(__name__)

RETRYABLE_STATUS = frozenset({408, 409, 429, 500, 502, 503, 504})


@dataclass(frozen=True, slots=True)
class FlatText:
    text: str


@dataclass(frozen=True, slots=True)
class SegmentedContent:
    # Text-bearing content parts, in reply order.
    parts: tuple[str, ...] = ()


ProviderReply = FlatText | SegmentedContent


def parse_provider_reply(payload: Any) -> ProviderReply:
    """
    Classify a raw Responses API payload.

    `output_text` wins whenever it is a non-empty string; otherwise every string
    `text` found in `output[*].content[*]` is collected in order. Anything that
    does not look like a segment or content part is skipped.
    """

    if not isinstance(payload, dict):
        return SegmentedContent()

    flat = payload.get("output_text")
    if isinstance(flat, str) and flat:
        return FlatText(flat)

    parts: list[str] = []
    output = payload.get("output")
    if isinstance(output, list):
        for segment in output:
            if not isinstance(segment, dict):
                continue
            content = segment.get("content")
            if not isinstance(content, list):
                continue
            for part in content:
                if isinstance(part, dict) and isinstance(part.get("text"), str):
                    parts.append(part["text"])
    return SegmentedContent(tuple(parts))


def normalize_reply(reply: ProviderReply) -> str:
    if isinstance(reply, FlatText):
        return reply.text
    return "".join(reply.parts)


class ModelProvider(Protocol):
    async def complete(self, prompt: str) -> ProviderReply: ...


class ResponsesProvider:
    """
    httpx client for `POST {base_url}/responses`.

    The request shape is fixed by settings; callers only supply the prompt.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    def _request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._settings.provider_model,
            "input": prompt,
            "max_output_tokens": self._settings.provider_max_output_tokens,
            "reasoning": {"effort": self._settings.provider_reasoning_effort},
        }

    def _backoff(self, attempt: int) -> float:
        base = self._settings.provider_retry_backoff_seconds * (2**attempt)
        return base * (0.5 + random.random())

    async def complete(self, prompt: str) -> ProviderReply:
        api_key = self._settings.openai_api_key
        if not api_key:
            log.error("provider_unconfigured", missing=["OPENAI_API_KEY"])
            raise ConfigurationError()

        url = f"{self._settings.provider_base_url.rstrip('/')}/responses"
        retries = self._settings.provider_max_retries
        attempt = 0
        while True:
            try:
                r = await self._http.post(
                    url,
                    json=self._request_body(prompt),
                    headers={"Authorization": f"Bearer {api_key}"},
                    timeout=self._settings.provider_timeout_seconds,
                )
            except httpx.TransportError as e:
                # Connect/read timeouts are TransportErrors too.
                if attempt < retries:
                    await self._sleep_before_retry(attempt, reason=type(e).__name__)
                    attempt += 1
                    continue
                raise ProviderError() from e

            if r.status_code in RETRYABLE_STATUS and attempt < retries:
                await self._sleep_before_retry(attempt, reason=f"http_{r.status_code}")
                attempt += 1
                continue

            try:
                r.raise_for_status()
                payload = r.json()
            except (httpx.HTTPStatusError, ValueError) as e:
                raise ProviderError() from e

            return parse_provider_reply(payload)

    async def _sleep_before_retry(self, attempt: int, *, reason: str) -> None:
        delay = self._backoff(attempt)
        log.warning("provider_retry", attempt=attempt + 1, reason=reason, delay_s=round(delay, 3))
        await asyncio.sleep(delay)


# --- Module Notes -----------------------------------------------------------
# The relay depends on `ModelProvider`, not on httpx; tests substitute a stub.
