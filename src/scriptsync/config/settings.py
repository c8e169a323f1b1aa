"""ScriptSync configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scriptsync.exceptions import ConfigurationError, check_config_keys


class ScriptSyncSettings(BaseSettings):
    """ScriptSync configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. Explicit overrides passed by the embedding application
    2. Config file values (YAML, TOML, or JSON)
       Multiple files: Later files override earlier ones
    3. Environment variables (prefixed with SCRIPTSYNC_)
       Example: export SCRIPTSYNC_LOG_LEVEL=DEBUG
    4. .env file (in current directory or specified path)
    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    # Classifier settings
    classifier_max_cue_length: int = Field(
        default=40,
        description="Maximum length of a line that can be a character cue",
        ge=1,
    )
    classifier_require_time_of_day: bool = Field(
        default=False,
        description=(
            "Only treat INT./EXT. lines as scene headings when they carry a "
            "'- TIME' suffix"
        ),
    )
    preamble_heading: str = Field(
        default="UNNAMED SCENE",
        description="Heading given to content that appears before the first scene",
    )

    # Validator settings
    validator_error_weight: float = Field(
        default=0.15,
        description="Confidence penalty per error issue",
        ge=0.0,
    )
    validator_warning_weight: float = Field(
        default=0.05,
        description="Confidence penalty per warning issue",
        ge=0.0,
    )
    validator_element_scale: float = Field(
        default=10.0,
        description="Number of elements over which one unit of penalty is spread",
        gt=0.0,
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and resolve path.

        Accepts None, str (with env vars and ~ expansion) and Path.
        """
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be string or Path. Got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("preamble_heading")
    @classmethod
    def normalize_preamble_heading(cls, v: str) -> str:
        """Preamble headings follow the same uppercase rule as parsed headings."""
        return " ".join(v.split()).upper()

    @classmethod
    def from_env(cls) -> ScriptSyncSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScriptSyncSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> ScriptSyncSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: List of config files to load (later files override earlier).
            env_file: Path to .env file (default: .env in current directory).
            overrides: Explicit values with the highest precedence.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        if config_files:
            for config_file in config_files:
                try:
                    file_settings = cls.from_file(config_file)
                    data.update(file_settings.model_dump(exclude_unset=True))
                except FileNotFoundError:
                    # Imported here to avoid a circular import at module load
                    from scriptsync.config.logging import get_logger as _get_logger

                    _get_logger("scriptsync.config.settings").warning(
                        "Configuration file not found, using defaults",
                        config_file=str(config_file),
                    )

        if env_file:
            settings = cast(
                "ScriptSyncSettings", cast(Any, cls)(_env_file=env_file, **data)
            )
        else:
            settings = cls(**data)

        if overrides:
            override_data = {k: v for k, v in overrides.items() if v is not None}
            if override_data:
                updated_data = settings.model_dump()
                updated_data.update(override_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: ScriptSyncSettings | None = None


def _get_config_paths() -> list[Path]:
    """Get the existing config files, in priority order (later files win)."""
    potential_paths = [
        Path.home() / ".config" / "scriptsync" / "config.yaml",
        Path.home() / ".config" / "scriptsync" / "config.toml",
        Path.cwd() / "scriptsync.yaml",
        Path.cwd() / "scriptsync.json",
        Path.cwd() / "scriptsync.toml",
    ]

    existing_paths = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> ScriptSyncSettings:
    """Get the global settings instance.

    Returns:
        Global ScriptSyncSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScriptSyncSettings.from_multiple_sources(
                config_files=list(config_paths)
            )
        else:
            _settings = ScriptSyncSettings.from_env()
    return _settings


def set_settings(settings: ScriptSyncSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings instance.

    Forces recreation of settings on next call to get_settings(),
    useful for tests that modify environment variables.
    """
    global _settings
    _settings = None
