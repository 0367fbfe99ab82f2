"""
Configuration settings for the numbersense practice engine.

Uses Pydantic Settings for environment variable management with .env file support.
Every field can be overridden with a NUMBERSENSE_ prefixed environment variable,
e.g. NUMBERSENSE_SPACED_REPETITION_ENABLED=false.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NUMBERSENSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Scheduling
    # ========================================
    spaced_repetition_enabled: bool = Field(
        default=True,
        description="Pick skills by SM-2 review urgency instead of mastery/recency weights",
    )

    # ========================================
    # Session Shape
    # ========================================
    session_length: int = Field(
        default=10,
        ge=1,
        description="Number of question slots in a practice session",
    )
    warmup_slots: int = Field(
        default=2,
        ge=0,
        description="Leading slots re-picked by the skill selector when no skill is requested",
    )
    max_flagged_retries: int = Field(
        default=2,
        ge=0,
        description="Maximum flagged-retry slots inserted per session",
    )

    # ========================================
    # Storage
    # ========================================
    data_dir: Path = Field(
        default=Path.home() / ".numbersense",
        description="Directory holding per-player progress files",
    )
    skills_file: Path | None = Field(
        default=None,
        description="Optional JSON skill catalog (defaults to the built-in strategies)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    def is_spaced_repetition_enabled(self) -> bool:
        """Whether skill selection is delegated to the spaced-repetition scheduler."""
        return self.spaced_repetition_enabled

    @property
    def progress_dir(self) -> Path:
        """Directory for JSON progress files."""
        return self.data_dir / "progress"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
