"""Configuration management for the spreadsheet sampler.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
SAMPLER_ prefix, or via a .env file in the project root.

Environment Variables:
    SAMPLER_SPREADSHEET_FILE_NAME: Result workbook file name (default: rezultatas.xlsx)
    SAMPLER_REPORT_FILE_NAME: Explanation file name (default: paaiskinimas.txt)
    SAMPLER_OUTPUT_SHEET_NAME: Sheet title in the result workbook
        (default: Parinkti duomenys)
    SAMPLER_REPORT_LANGUAGE: Explanation language, lt or en (default: lt)
    SAMPLER_RANDOM_SEED: Optional seed for reproducible sampling
    SAMPLER_MAX_FILE_SIZE_MB: Maximum upload size in MB (default: 10)
    SAMPLER_TEMP_UPLOAD_DIR: Directory for uploaded workbooks
    SAMPLER_RESULTS_DIR: Directory holding one folder of artifacts per API job
    SAMPLER_LOG_LEVEL: Logging level (default: INFO)
    SAMPLER_DEBUG: Enable debug mode (default: false)
    SAMPLER_CORS_ORIGINS: Comma-separated CORS origins (default: *)
    SAMPLER_SERVER_HOST: Server bind host (default: 0.0.0.0)
    SAMPLER_SERVER_PORT: Server bind port (default: 8000)
"""

import logging
from pathlib import PurePath
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_REPORT_LANGUAGES = ("lt", "en")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Example .env file:
        SAMPLER_REPORT_LANGUAGE=en
        SAMPLER_LOG_LEVEL=DEBUG
        SAMPLER_RANDOM_SEED=42
    """

    model_config = SettingsConfigDict(
        env_prefix="SAMPLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Output Settings
    # =========================================================================

    spreadsheet_file_name: str = "rezultatas.xlsx"
    """File name of the workbook holding the header and sampled rows."""

    report_file_name: str = "paaiskinimas.txt"
    """File name of the plain-text explanation of the sampling."""

    output_sheet_name: str = "Parinkti duomenys"
    """Title of the single sheet in the result workbook."""

    report_language: str = "lt"
    """Language of the explanation text (lt or en)."""

    # =========================================================================
    # Sampling Settings
    # =========================================================================

    random_seed: int | None = None
    """Seed for the row sampler. None draws a fresh sample on every run."""

    # =========================================================================
    # Upload Settings
    # =========================================================================

    max_file_size_mb: int = 10
    """Maximum workbook upload size in megabytes."""

    temp_upload_dir: str = "/tmp/sampler_uploads"
    """Directory for storing uploaded workbooks while they are processed."""

    results_dir: str = "/tmp/sampler_results"
    """Directory in which the API creates one artifact folder per job."""

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with additional error details in API responses."""

    # =========================================================================
    # Server Settings
    # =========================================================================

    cors_origins: str = "*"
    """Comma-separated list of allowed CORS origins, or * for all."""

    server_host: str = "0.0.0.0"
    """Host address for the server to bind to."""

    server_port: int = 8000
    """Port for the server to listen on."""

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return upper_v

    @field_validator("report_language")
    @classmethod
    def validate_report_language(cls, v: str) -> str:
        """Validate the explanation language has a bundled template."""
        lower_v = v.strip().lower()
        if lower_v not in SUPPORTED_REPORT_LANGUAGES:
            raise ValueError(
                f"Unsupported report language: {v}. "
                f"Must be one of: {', '.join(SUPPORTED_REPORT_LANGUAGES)}"
            )
        return lower_v

    @field_validator("spreadsheet_file_name", "report_file_name")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """Validate output names are bare file names."""
        stripped = v.strip()
        if not stripped or PurePath(stripped).name != stripped:
            raise ValueError(f"Output file name must be a bare file name, got {v!r}")
        return stripped

    @field_validator("spreadsheet_file_name")
    @classmethod
    def validate_spreadsheet_suffix(cls, v: str) -> str:
        """Validate the result workbook is written as .xlsx."""
        if not v.lower().endswith(".xlsx"):
            raise ValueError(f"spreadsheet_file_name must end with .xlsx, got {v}")
        return v

    @field_validator("output_sheet_name")
    @classmethod
    def validate_sheet_name(cls, v: str) -> str:
        """Validate the sheet title against Excel's limits."""
        if not v or len(v) > 31 or any(ch in v for ch in "[]:*?/\\"):
            raise ValueError(
                "output_sheet_name must be 1-31 characters without []:*?/\\"
            )
        return v

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_file_size(cls, v: int) -> int:
        """Validate file size is positive and reasonable."""
        if not 1 <= v <= 500:
            raise ValueError(f"max_file_size_mb must be between 1 and 500, got {v}")
        return v

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"server_port must be between 1 and 65535, got {v}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        level: int = getattr(logging, self.log_level)
        return level

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to a dictionary suitable for logging."""
        return {
            "spreadsheet_file_name": self.spreadsheet_file_name,
            "report_file_name": self.report_file_name,
            "output_sheet_name": self.output_sheet_name,
            "report_language": self.report_language,
            "random_seed": self.random_seed,
            "max_file_size_mb": self.max_file_size_mb,
            "temp_upload_dir": self.temp_upload_dir,
            "results_dir": self.results_dir,
            "log_level": self.log_level,
            "debug": self.debug,
            "cors_origins": self.cors_origins,
            "server_host": self.server_host,
            "server_port": self.server_port,
        }


def validate_settings_on_startup(s: Settings) -> None:
    """Validate settings on application startup.

    Emits warnings for configurations that work but are risky in production.

    Args:
        s: Settings instance to validate.
    """
    logger = logging.getLogger(__name__)

    if s.cors_origins == "*" and not s.debug:
        logger.warning(
            "CORS is configured to allow all origins (*). "
            "Consider restricting this in production."
        )

    if s.random_seed is not None:
        logger.warning(
            "SAMPLER_RANDOM_SEED is set; every run on the same workbook "
            "selects the same rows."
        )

    logger.info(f"Configuration loaded: {s.to_safe_dict()}")


# Create the global settings instance
settings = Settings()
