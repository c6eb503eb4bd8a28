"""Configuration management for the dynamic font loader."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    EmptyConfigFileError,
    InvalidYamlError,
)

DEFAULT_RESPONSE_TIMEOUT = 5.0
DEFAULT_PROGRESS_STEP = 0.10
DEFAULT_PROGRESS_COMPLETE = 0.99


class FontSettings(BaseSettings):
    """Font acquisition and cache configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DYNAMIC_FONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    cache_dir: Path | None = Field(None, description="Font cache directory override")
    app_name: str = Field("dynamic-font", min_length=1, description="Default cache dir name")
    assets_dir: Path | None = Field(None, description="Root directory of bundled font assets")
    cache_naming: Literal["segment", "hashed"] = Field(
        "segment", description="Cache file naming strategy"
    )
    deduplicate_downloads: bool = Field(
        False, description="Share one in-flight download per cache path"
    )

    # Download
    response_timeout_seconds: float = Field(
        DEFAULT_RESPONSE_TIMEOUT, gt=0.0, description="Initial response timeout"
    )
    chunk_size: int | None = Field(None, ge=1, description="Response body chunk size")
    user_agent: str = Field("dynamic-font/1.0.0", description="HTTP User-Agent header")

    # Progress throttling
    progress_step: float = Field(
        DEFAULT_PROGRESS_STEP, gt=0.0, lt=1.0, description="Minimum progress delta"
    )
    progress_complete: float = Field(
        DEFAULT_PROGRESS_COMPLETE, gt=0.0, lt=1.0, description="Always-report threshold"
    )

    log_level: str = Field("INFO", description="Log level")

    @field_validator("cache_dir", "assets_dir")
    @classmethod
    def expand_user_dirs(cls, v):
        """Expand user home references in directory settings."""
        if v is not None:
            return Path(v).expanduser()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def check_progress_thresholds(self):
        if self.progress_step >= self.progress_complete:
            raise ValueError("progress_step must be smaller than progress_complete")
        return self

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontSettings":
        """Load settings from a YAML file."""
        return load_settings_from_yaml(config_path)


def load_settings_from_yaml(config_path: str | Path) -> FontSettings:
    """Load font settings from YAML file, ignoring the .env file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with config_path.open() as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e
    except OSError as e:
        raise ConfigLoadError(str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))
    if not isinstance(config_data, dict):
        raise ConfigLoadError(f"expected a mapping in {config_path}")

    return FontSettings(_env_file=None, **config_data)
