"""Application settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..common.constants import (
    CRYPTOGRAPHIC_HASHES,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_REPORT_DIR,
    DEFAULT_SIMILARITY_THRESHOLD,
    DEFAULT_SIZE_THRESHOLD,
    REPORT_FORMATS,
)
from ..common.exceptions import ConfigError


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DUPSWEEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Detection
    similarity_threshold: float = Field(
        default=DEFAULT_SIMILARITY_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Minimum bigram similarity for a near-duplicate pair",
    )
    size_threshold: float = Field(
        default=DEFAULT_SIZE_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Maximum relative size difference before two files are compared",
    )
    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="Content digest used for exact matching",
    )

    # Reports
    report_dir: Path = Field(
        default=Path(DEFAULT_REPORT_DIR),
        description="Directory receiving timestamped reports",
    )
    report_format: str = Field(
        default="txt",
        description="Report format (txt, json, csv)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("hash_algorithm")
    @classmethod
    def _check_hash_algorithm(cls, value: str) -> str:
        value = value.lower()
        if value not in CRYPTOGRAPHIC_HASHES:
            raise ValueError(
                f"unsupported hash algorithm {value!r}, "
                f"expected one of {sorted(CRYPTOGRAPHIC_HASHES)}"
            )
        return value

    @field_validator("report_format")
    @classmethod
    def _check_report_format(cls, value: str) -> str:
        value = value.lower()
        if value not in REPORT_FORMATS:
            raise ValueError(f"report format must be one of {', '.join(REPORT_FORMATS)}")
        return value


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance.

    Raises:
        ConfigError: If environment or .env values are invalid
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigError(str(e)) from e
    return _settings


def reset_settings() -> None:
    """Reset global settings instance."""
    global _settings
    _settings = None
