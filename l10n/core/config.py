"""Package configuration via Pydantic Settings.

Reads ``L10N_*`` environment variables (and an optional .env file).
Use ``get_settings()`` to obtain a cached singleton.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validated settings sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="L10N_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Bootstrap bundle (optional — empty means start in fallback mode) ---
    BUNDLE_LOCATION: str = ""

    # --- Optional (with defaults) ----------------------------------------
    FETCH_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    # --- Validators ------------------------------------------------------
    @field_validator("FETCH_TIMEOUT_SECONDS")
    @classmethod
    def _validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("BUNDLE_LOCATION")
    @classmethod
    def _strip_location(cls, v: str) -> str:
        return v.strip()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings singleton."""
    return Settings()
