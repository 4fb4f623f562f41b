"""
chat_gateway.auth

Authentication package.

Responsibilities:
- Verify the single shared credential pair.
- Mint and validate signed session tokens.
- Guard protected endpoints (FastAPI dependency).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `auth.models` stays dependency-free: `chat_gateway.settings` imports it.
