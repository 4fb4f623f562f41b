"""
chat_gateway.errors

Gateway error taxonomy.

Responsibilities:
- Give every expected failure a status code and a caller-safe message.
- Keep internal detail (provider errors, missing config names) out of responses;
  that detail belongs in logs only.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class GatewayError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(GatewayError):
    default_message = "Service is not configured"


class Unauthorized(GatewayError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class AuthenticationFailed(GatewayError):
    status_code = HTTP_401_UNAUTHORIZED
    # Same text whichever field was wrong.
    default_message = "Invalid credentials"


class NoInput(GatewayError):
    status_code = HTTP_400_BAD_REQUEST
    default_message = "No user message"


class ProviderError(GatewayError):
    default_message = "Internal Server Error"
