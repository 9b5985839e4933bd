"""Runtime configuration for the triage core."""
from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or a local ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    scoring_pack: str = Field(default="ed_vitals", alias="SCORING_PACK")
    department: str = Field(default="emergency", alias="DEPARTMENT")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_redact_phi: bool = Field(default=True, alias="LOG_REDACT_PHI")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
