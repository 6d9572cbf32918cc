from __future__ import annotations

from pydantic import AliasChoices, ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Persistence API settings."""

    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    CORS_ORIGINS: list[str] = ["*"]

    # Relay used by the publish bridge. RELAY_URL wins over the same-host default.
    RELAY_URL: str | None = None
    RELAY_PORT: int = Field(
        default=3002,
        validation_alias=AliasChoices("RELAY_PORT", "SOCKET_SERVER_PORT"),
    )
    RELAY_PUBLISH_TIMEOUT: float = 3.0

    # Empty secret disables join-token issuance.
    RELAY_JOIN_SECRET: str = ""
    RELAY_JOIN_ALGORITHM: str = "HS256"
    RELAY_JOIN_TOKEN_TTL: int = 3600

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def relay_base_url(self) -> str:
        if self.RELAY_URL:
            return self.RELAY_URL.rstrip("/")
        return f"http://localhost:{self.RELAY_PORT}"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()  # type: ignore[call-arg]
