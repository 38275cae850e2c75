"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a working default: the registry runs with no .env at all
    - get_settings() is cached (lru_cache) — single instance per process
    - challenge_window_seconds must be positive

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - STARCHAIN_ env prefix: avoids clashing with generic names like LOG_LEVEL
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from starchain.core.domain_types import (
    CHALLENGE_SUFFIX, CHALLENGE_WINDOW_SECONDS, GENESIS_DATA,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="STARCHAIN_", case_sensitive=False,
    )

    # Ownership challenge
    challenge_window_seconds: int = CHALLENGE_WINDOW_SECONDS
    challenge_suffix: str = CHALLENGE_SUFFIX

    @field_validator("challenge_window_seconds")
    @classmethod
    def window_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("challenge_window_seconds must be positive")
        return v

    # Ledger
    genesis_data: str = GENESIS_DATA
    validate_on_owner_lookup: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
