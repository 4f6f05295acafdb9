from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_version: str = "0.1.0"
    log_level: str = "INFO"
    timezone: str = Field(
        default="UTC",
        description="IANA zone whose calendar day drives daily stats and streaks",
    )

    # Storage
    storage_backend: Literal["redis", "memory"] = Field(
        default="redis",
        description="Key-value store backing flashcards and stats",
    )
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_key_prefix: str = Field(
        default="",
        description="Optional namespace prepended to every storage key",
    )

    # Generation
    generator_backend: Literal["heuristic", "remote"] = "heuristic"
    remote_generator_url: str | None = Field(
        default=None,
        description="Endpoint for the model-backed generator (GENERATOR_BACKEND=remote)",
    )
    max_card_count: int = Field(default=20, ge=1)
    min_sentence_length: int = Field(
        default=20,
        ge=0,
        description="Sentences at or below this trimmed length are discarded",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
