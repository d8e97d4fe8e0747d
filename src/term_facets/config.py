"""Centralized configuration for term-facets using Pydantic Settings."""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_STOPWORDS_DIR = Path(__file__).resolve().parent / "search" / "data" / "stopwords"


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every field can be overridden through an environment variable of the
    same name (case-insensitive) or a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Stopword data
    stopwords_dir: Path = Field(
        default=DEFAULT_STOPWORDS_DIR,
        description="Directory holding one <language>.txt stopword list per supported language",
    )
    stopwords_extension: str = Field(default=".txt", description="File extension of stopword lists")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Tracing
    tracing_enabled: bool = Field(default=False, description="Install an OpenTelemetry tracer provider")
    service_name: str = Field(default="term-facets", description="Service name reported on spans")

    @field_validator("stopwords_extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"stopwords_extension must look like '.txt', got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level {value!r}")
        return normalized.lower()
