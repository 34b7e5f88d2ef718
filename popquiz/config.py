"""
Configuration settings for popquiz.

Uses Pydantic Settings for environment variable management with .env file support.
Every setting can be overridden with a POPQUIZ_-prefixed environment variable.
"""
from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POPQUIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    data_dir: Path = Field(
        default=Path.home() / ".popquiz",
        description="Directory holding quiz files and the results/ subdirectory",
    )
    results_dirname: str = Field(
        default="results",
        description="Name of the results subdirectory inside data_dir",
    )

    # ========================================
    # Editing
    # ========================================
    editor: str | None = Field(
        default=None,
        description="Editor for `popquiz edit` (falls back to $EDITOR)",
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


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Route loguru output to stderr (and optionally a rotating file)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            level="DEBUG",
            rotation="1 MB",
            retention=3,
            encoding="utf-8",
        )
