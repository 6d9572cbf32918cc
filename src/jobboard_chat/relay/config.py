from __future__ import annotations

from pydantic import AliasChoices, ConfigDict, Field
from pydantic_settings import BaseSettings


class RelaySettings(BaseSettings):
    """Relay server settings. Independent of the API's database settings."""

    RELAY_HOST: str = "0.0.0.0"
    RELAY_PORT: int = Field(
        default=3002,
        validation_alias=AliasChoices("RELAY_PORT", "SOCKET_SERVER_PORT"),
    )

    CORS_ORIGINS: list[str] = ["*"]

    WS_HEARTBEAT_SECONDS: int = 30
    # A member that cannot take a frame within this long is dropped.
    WS_SEND_TIMEOUT_SECONDS: float = 10.0

    # When set, join-conversation requires a token issued by the API.
    RELAY_JOIN_SECRET: str = ""
    RELAY_JOIN_ALGORITHM: str = "HS256"

    LOG_LEVEL: str = "info"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


relay_settings = RelaySettings()
