from __future__ import annotations

from pydantic import AliasChoices, ConfigDict, Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    API_BASE_URL: str = "http://localhost:8000"
    API_TIMEOUT: float = 10.0

    # Deployed relay, e.g. wss://relay.example.com. Unset → same-host default.
    RELAY_PUBLIC_URL: str | None = None
    RELAY_PORT: int = Field(
        default=3002,
        validation_alias=AliasChoices("RELAY_PORT", "SOCKET_SERVER_PORT"),
    )
    RELAY_CONNECT_TIMEOUT: float = 10.0
    RELAY_RECONNECT_ATTEMPTS: int = 5
    RELAY_RECONNECT_DELAY: float = 1.0
    RELAY_RECONNECT_DELAY_MAX: float = 5.0

    @property
    def relay_ws_url(self) -> str:
        base = (self.RELAY_PUBLIC_URL or f"http://localhost:{self.RELAY_PORT}").rstrip("/")
        if base.startswith("https://"):
            base = "wss://" + base.removeprefix("https://")
        elif base.startswith("http://"):
            base = "ws://" + base.removeprefix("http://")
        return f"{base}/ws"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


client_settings = ClientSettings()
