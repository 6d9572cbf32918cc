"""Entrypoint: python -m jobboard_chat (Persistence API)"""
from __future__ import annotations

import uvicorn

from jobboard_chat.config import settings
from jobboard_chat.log_config import configure_logging


def main() -> None:
    configure_logging()
    uvicorn.run(
        "jobboard_chat.app:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level="info",
        log_config=None,
    )


if __name__ == "__main__":
    main()
