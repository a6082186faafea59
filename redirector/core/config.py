"""Application configuration module.

This module contains settings for the redirect service,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Set up basic logger for config module
logger = logging.getLogger(__name__)


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here. PORT, STORAGE_FOLDER and TOTP_SECRET also answer to
    GRY_PORT, GRY_FOLDER and GRY_TOTP_SECRET; the plain name wins when both are set.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "Redirector"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "A small slug-to-URL redirect service"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = Field(3000, validation_alias=AliasChoices("PORT", "GRY_PORT"))

    # Where "/" sends visitors
    HOME_URL: str = "https://ctrlalt.dev/GRY/"

    # Storage: STORAGE_DIR wins, otherwise ~/STORAGE_FOLDER
    STORAGE_FOLDER: str = Field(".GRY", validation_alias=AliasChoices("STORAGE_FOLDER", "GRY_FOLDER"))
    STORAGE_DIR: Optional[Path] = None

    # TOTP authorization for mutating requests
    TOTP_SECRET: str = Field("", validation_alias=AliasChoices("TOTP_SECRET", "GRY_TOTP_SECRET"))
    TOTP_ISSUER: str = "https://ln.0x5f.info"
    TOTP_ACCOUNT_NAME: str = "GRY"

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    @field_validator("STORAGE_DIR", mode="before")
    def validate_storage_dir(cls, v):
        """Treat an empty STORAGE_DIR as unset."""
        if v == "":
            return None
        return v

    @model_validator(mode="after")
    def require_secret_in_production(self) -> "Settings":
        if self.ENVIRONMENT == EnvironmentType.PRODUCTION and not self.TOTP_SECRET:
            raise ValueError("TOTP_SECRET must be set in the production environment")
        return self

    # Computed fields
    @computed_field
    def STORAGE_PATH(self) -> Path:
        """Directory holding one file per redirect."""
        if self.STORAGE_DIR is not None:
            return Path(self.STORAGE_DIR).expanduser()
        try:
            home = Path.home()
        except RuntimeError as e:
            # No resolvable home directory; fall back to a path relative to the CWD
            logger.error(f"Could not resolve home directory: {e}")
            home = Path(".")
        return home / self.STORAGE_FOLDER


# Create a singleton instance of the settings
settings = Settings()
