"""Runtime configuration settings for time-tracker.

This module uses Pydantic Settings for configuration that can be
overridden via environment variables (TT_ prefix). Settings cover where
data is stored, how exports are named, and how logging is set up; the
activity labels themselves are user data managed by ConfigService.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from time_tracker.config.paths import DEFAULT_DATA_DIR, EXPORT_FILE_PREFIX


class StorageSettings(BaseSettings):
    """Local storage settings.

    Can be overridden via environment variables with TT_STORAGE_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="TT_STORAGE_")

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / DEFAULT_DATA_DIR,
        description="Directory holding the log, configuration and theme",
    )


class ExportSettings(BaseSettings):
    """Export settings.

    Can be overridden via environment variables with TT_EXPORT_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="TT_EXPORT_")

    file_prefix: str = Field(
        default=EXPORT_FILE_PREFIX,
        description="Prefix of suggested export file names",
    )
    directory: Path = Field(
        default_factory=Path.cwd,
        description="Default destination directory for exports",
    )


class LoggingSettings(BaseSettings):
    """Diagnostic logging settings.

    Can be overridden via environment variables with TT_LOG_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="TT_LOG_")

    level: str = Field(default="WARNING", description="Log level name")
    file: Path | None = Field(default=None, description="Optional rotating log file")


def get_storage_settings() -> StorageSettings:
    return StorageSettings()


def get_export_settings() -> ExportSettings:
    return ExportSettings()


def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()
