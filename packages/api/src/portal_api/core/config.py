# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables (or a local ``.env``) with
sensible local dev defaults. ``JWT_SECRET`` has no default on purpose: the
app refuses to start without it.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "ma-portal"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:5173"]

    # -- Auth --
    JWT_SECRET: str | None = Field(
        default=None,
        description="HMAC secret used to sign bearer tokens. Required.",
    )
    JWT_EXPIRES_IN: str = Field(
        default="24h",
        description="Token lifetime: '<n>s', '<n>m', '<n>h', '<n>d' or bare seconds.",
    )
    JWT_ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = Field(
        default=12,
        description="bcrypt work factor used when hashing seeded passwords.",
    )


settings = Settings()
