"""
chat_gateway.api

API package for the chat gateway.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and error rendering.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + session guard + delegation
# to the relay service.
