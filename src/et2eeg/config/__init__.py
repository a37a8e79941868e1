"""Configuration module for ET2EEG.

Load and validate TOML configuration with Pydantic models and environment
overrides. Every default used by the synchronization and overweighting
pipelines is resolved here, before any core algorithm runs.

Example:
    >>> from et2eeg.config import load_settings
    >>> settings = load_settings("et2eeg.toml")
    >>> settings.sync.search_radius
    4
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Tuple

try:
    import tomllib  # Python >= 3.11
except ImportError:
    import tomli as tomllib  # Python < 3.11

from pydantic import BaseModel, Field, field_validator, model_validator

from ..exceptions import ConfigError

__all__ = [
    "SyncConfig",
    "OverweightConfig",
    "LoggingConfig",
    "Settings",
    "load_settings",
    "ENV_PREFIX",
]

ENV_PREFIX = "ET2EEG_"


# ============================================================================
# Configuration Models
# ============================================================================


class SyncConfig(BaseModel):
    """Synchronization defaults.

    Attributes:
        search_radius: Samples around each EEG event searched for a
            same-type ET event during regression matching
        do_regression: Fit the mapping over all shared events instead of
            the two anchors only
        filter_eyetrack: Anti-alias filtering request (accepted, no effect)
        plot_fig: Hand the sync-quality table to a plotter
        import_eye_events: Import tracker-detected eye movement events
    """

    model_config = {"extra": "forbid"}

    search_radius: int = Field(default=4, gt=0)
    do_regression: bool = Field(default=True)
    filter_eyetrack: bool = Field(default=False)
    plot_fig: bool = Field(default=False)
    import_eye_events: bool = Field(default=False)


class OverweightConfig(BaseModel):
    """Event-window overweighting defaults."""

    model_config = {"extra": "forbid"}

    event_type: str = Field(default="saccade")
    timelim: Tuple[float, float] = Field(default=(-0.02, 0.01))
    ow_proportion: float = Field(default=0.5, ge=0)
    remove_mean: bool = Field(default=True)

    @field_validator("event_type")
    @classmethod
    def validate_event_type(cls, v: str) -> str:
        """Ensure event_type is non-empty."""
        if not v.strip():
            raise ValueError("event_type cannot be empty")
        return v

    @model_validator(mode="after")
    def validate_timelim(self) -> "OverweightConfig":
        """Window start must precede window end."""
        if self.timelim[0] >= self.timelim[1]:
            raise ValueError(f"timelim must be increasing, got {list(self.timelim)}")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = {"extra": "forbid"}

    level: str = Field(default="INFO")
    structured: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got '{v}'")
        return v_upper


class Settings(BaseModel):
    """Complete ET2EEG settings."""

    sync: SyncConfig = Field(default_factory=SyncConfig)
    overweight: OverweightConfig = Field(default_factory=OverweightConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}  # Reject unknown keys


# ============================================================================
# Loading Functions
# ============================================================================


def load_settings(
    toml_path: Path | str | None = None,
    env_prefix: str = ENV_PREFIX,
) -> Settings:
    """Load and validate settings from TOML and environment.

    Args:
        toml_path: Path to TOML configuration file (optional)
        env_prefix: Environment variable prefix (default: ET2EEG_)

    Returns:
        Validated Settings object

    Raises:
        FileNotFoundError: If toml_path specified but doesn't exist
        ConfigError: If the TOML file cannot be parsed
        pydantic.ValidationError: If configuration is invalid
    """
    config_dict: dict[str, Any] = {}

    if toml_path is not None:
        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")

        with open(toml_path, "rb") as f:
            try:
                config_dict = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"Invalid TOML in {toml_path.name}: {e}", context={"path": str(toml_path)}) from e

    config_dict = _apply_env_overrides(config_dict, env_prefix)

    return Settings(**config_dict)


def _apply_env_overrides(config: dict[str, Any], prefix: str) -> dict[str, Any]:
    """Apply environment variable overrides to config dict.

    Supports nested keys with double underscore notation:
    ET2EEG_SYNC__SEARCH_RADIUS=6
    ET2EEG_LOGGING__LEVEL=DEBUG
    """
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :].lower()
        parts = config_key.split("__")

        current = config
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]

        current[parts[-1]] = _parse_env_value(value)

    return config


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to bool, int, float or str."""
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value
