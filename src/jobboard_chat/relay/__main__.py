"""Entrypoint: python -m jobboard_chat.relay"""
from __future__ import annotations

import uvicorn

from jobboard_chat.log_config import configure_logging
from jobboard_chat.relay.config import relay_settings


def main() -> None:
    configure_logging(relay_settings.LOG_LEVEL)
    uvicorn.run(
        "jobboard_chat.relay.app:create_relay_app",
        factory=True,
        host=relay_settings.RELAY_HOST,
        port=relay_settings.RELAY_PORT,
        log_level=relay_settings.LOG_LEVEL,
        log_config=None,
    )


if __name__ == "__main__":
    main()
