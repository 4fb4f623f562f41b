"""
chat_gateway.api.routers.chat

Relay endpoint.

Responsibilities:
- Guard the route with `require_session` (runs before the body is handled).
- Delegate selection/invocation/normalization to `ChatRelay`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from chat_gateway.api.deps import relay_dep
from chat_gateway.auth.deps import require_session
from chat_gateway.relay.models import RelayRequest, RelayResponse
from chat_gateway.relay.service import ChatRelay

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chat",
    response_model=RelayResponse,
    dependencies=[Depends(require_session)],
)
async def chat(
    body: RelayRequest,
    relay: ChatRelay = Depends(relay_dep),
) -> RelayResponse:
    return await relay.relay(body)


# --- Module Notes -----------------------------------------------------------
# Error responses (400/401/500) are rendered by the GatewayError handler in
# `api.app`; this router never builds error bodies itself.
