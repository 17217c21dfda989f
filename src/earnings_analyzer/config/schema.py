"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from various sources (environment, files, programmatic) into the correct
types with proper defaults.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVICE_NAME = "Earnings Transcript Analyzer"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AnalyzerSettings(BaseSettings):
    """Pydantic settings schema for the analyzer service.

    Handles validation, type coercion and defaults for every configuration
    field. Environment variables use the ``EARNINGS_ANALYZER_`` prefix; the
    model credential is also accepted as ``GEMINI_API_KEY``.
    """

    model_config = SettingsConfigDict(
        env_prefix="EARNINGS_ANALYZER_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Model ---

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
        validation_alias=AliasChoices("EARNINGS_ANALYZER_API_KEY", "GEMINI_API_KEY"),
    )

    model: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model identifier",
        min_length=1,
    )

    use_real_api: bool = Field(
        default=False,
        description="Call the real Gemini API instead of the deterministic mock",
    )

    # --- Service ---

    cors_origin: str = Field(
        default="*",
        description="Permitted cross-origin caller",
        min_length=1,
    )

    host: str = Field(default="0.0.0.0", description="Listening host", min_length=1)

    port: int = Field(default=3000, description="Listening port", ge=1, le=65535)

    log_level: str = Field(default="INFO", description="Root log level")

    service_name: str = Field(
        default=DEFAULT_SERVICE_NAME,
        description="Name reported by the health probe",
        min_length=1,
    )

    # --- Validation Rules ---

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> str:
        """Normalize and check the log level name."""
        if isinstance(v, str) and v.strip().upper() in LOG_LEVELS:
            return v.strip().upper()
        raise ValueError(f"Invalid log_level: {v}. Must be one of: {', '.join(LOG_LEVELS)}")

    @model_validator(mode="after")
    def validate_api_key_requirement(self) -> "AnalyzerSettings":
        """Ensure api_key is provided when use_real_api is True."""
        if self.use_real_api and not self.api_key:
            raise ValueError(
                "api_key is required when use_real_api=True. "
                "Set GEMINI_API_KEY or EARNINGS_ANALYZER_API_KEY, provide it in "
                "pyproject.toml, or pass it programmatically."
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for SourceMap annotation."""
        return {
            "api_key": self.api_key,
            "model": self.model,
            "use_real_api": self.use_real_api,
            "cors_origin": self.cors_origin,
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "service_name": self.service_name,
        }


FIELD_NAMES: tuple[str, ...] = tuple(AnalyzerSettings.model_fields)
