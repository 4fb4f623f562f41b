"""
chat_gateway.api.__main__

Entrypoint for running the gateway via `python -m chat_gateway.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from chat_gateway.api.app import create_app
from chat_gateway.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Missing secrets do not stop startup: `create_app` logs `configuration_missing`
# and `/readyz` reports 503 until the environment is fixed.
