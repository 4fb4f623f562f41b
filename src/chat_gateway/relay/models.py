"""
chat_gateway.relay.models

Request/response models for the chat relay endpoint.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ConversationMessage(BaseModel):
    role: Literal["user", "assistant"]
    text: str = ""
    # Client-side epoch millis; ordering is list order, not this value.
    timestamp: float | None = None


class RelayRequest(BaseModel):
    messages: list[ConversationMessage] = Field(default_factory=list)


class RelayResponse(BaseModel):
    # May be empty: a valid reply with no text is not an error.
    text: str
