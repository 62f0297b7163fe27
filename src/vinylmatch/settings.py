"""Application settings using pydantic-settings.

Settings are read once at the edge (the CLI) and turned into explicit
config objects. The matching engine never reads the environment itself.
"""

from functools import cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vinylmatch.config import EngineConfig, SearchBackend, SearchConfig

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VINYLMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fallback search
    youtube_api_key: str | None = Field(
        default=None, description="YouTube Data API v3 key"
    )
    search_backend: SearchBackend = Field(
        default=SearchBackend.YOUTUBE, description="Fallback search backend"
    )
    search_max_results: int = Field(
        default=5, ge=1, le=50, description="Results requested per search"
    )
    search_timeout: float = Field(
        default=10.0, gt=0, description="Search timeout in seconds"
    )

    # Engine
    max_workers: int = Field(
        default=1, ge=1, description="Tracks resolved concurrently (1 = sequential)"
    )

    # Storage
    db_path: Path = Field(
        default=Path("vinylmatch.db"), description="SQLite database for track matches"
    )

    log_level: LogLevel = Field(default="INFO", description="Log level")

    @field_validator("youtube_api_key")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace-only key as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    def engine_config(self) -> EngineConfig:
        """Build the engine configuration from these settings."""
        return EngineConfig(
            search_timeout=self.search_timeout,
            max_workers=self.max_workers,
        )

    def search_config(self) -> SearchConfig:
        """Build the search provider configuration from these settings."""
        return SearchConfig(
            backend=self.search_backend,
            api_key=self.youtube_api_key,
            max_results=self.search_max_results,
            timeout=self.search_timeout,
        )


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
