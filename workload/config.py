"""
Centralized configuration for the workload core.

Values come from three layers, highest precedence first:
1. Environment variables (WORKLOAD_*)
2. config/workload.yaml (or the file named by WORKLOAD_CONFIG)
3. Hardcoded defaults below

Settings are resolved once into an immutable object and passed explicitly.
"""

import logging
import os
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from workload import paths
from workload.errors import ConfigError

logger = logging.getLogger(__name__)

# ============================================================
# Defaults
# ============================================================

DEFAULT_WEEKLY_CAPACITY_HOURS: float = 40.0
"""Capacity assumed for a member whose profile has no weekly hours."""

DEFAULT_TIMELINE_WINDOW_DAYS: int = 21
"""Length of the rolling Gantt window, starting today."""

DEFAULT_NEAR_CAPACITY_RATIO: float = 0.8
"""Consumed/capacity ratio above which a member is flagged NEAR_CAP."""

DEFAULT_URGENT_LIMIT: int = 5
"""Number of urgent tickets listed on the dashboard."""

DEFAULT_TEAM_PREVIEW: int = 4
"""Number of members shown in the dashboard workload preview."""

DEFAULT_LOG_LEVEL: str = "INFO"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# setting name -> (env var, yaml key)
_SOURCES = {
    "default_weekly_capacity_hours": (
        "WORKLOAD_DEFAULT_CAPACITY_HOURS",
        "default_weekly_capacity_hours",
    ),
    "timeline_window_days": ("WORKLOAD_TIMELINE_WINDOW_DAYS", "timeline_window_days"),
    "near_capacity_ratio": ("WORKLOAD_NEAR_CAPACITY_RATIO", "near_capacity_ratio"),
    "urgent_limit": ("WORKLOAD_URGENT_LIMIT", "urgent_limit"),
    "team_preview": ("WORKLOAD_TEAM_PREVIEW", "team_preview"),
    "log_level": ("WORKLOAD_LOG_LEVEL", "log_level"),
}


@dataclass(frozen=True)
class Settings:
    default_weekly_capacity_hours: float = DEFAULT_WEEKLY_CAPACITY_HOURS
    timeline_window_days: int = DEFAULT_TIMELINE_WINDOW_DAYS
    near_capacity_ratio: float = DEFAULT_NEAR_CAPACITY_RATIO
    urgent_limit: int = DEFAULT_URGENT_LIMIT
    team_preview: int = DEFAULT_TEAM_PREVIEW
    log_level: str = DEFAULT_LOG_LEVEL

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a validated copy with the given fields replaced."""
        return _validate(replace(self, **overrides))


def _coerce(name: str, raw: Any) -> Any:
    try:
        if name in ("timeline_window_days", "urgent_limit", "team_preview"):
            if isinstance(raw, float) and not raw.is_integer():
                raise ValueError("expected an integer")
            return int(raw)
        if name in ("default_weekly_capacity_hours", "near_capacity_ratio"):
            return float(raw)
        return str(raw).upper()
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name}: cannot parse {raw!r} ({exc})") from exc


def _validate(settings: Settings) -> Settings:
    if settings.default_weekly_capacity_hours < 0:
        raise ConfigError(
            f"default_weekly_capacity_hours must be >= 0, got {settings.default_weekly_capacity_hours}"
        )
    if settings.timeline_window_days < 1:
        raise ConfigError(
            f"timeline_window_days must be >= 1, got {settings.timeline_window_days}"
        )
    if not 0 < settings.near_capacity_ratio <= 1:
        raise ConfigError(
            f"near_capacity_ratio must be in (0, 1], got {settings.near_capacity_ratio}"
        )
    if settings.urgent_limit < 0 or settings.team_preview < 0:
        raise ConfigError("urgent_limit and team_preview must be >= 0")
    if settings.log_level not in _LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {_LOG_LEVELS}, got {settings.log_level}")
    return settings


def _load_yaml(config_path: Path) -> dict:
    """Load YAML config; a missing file means defaults."""
    if not config_path.exists():
        logger.debug("Workload config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load workload config %s: %s", config_path, exc)
        raise ConfigError(f"cannot read {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        logger.error("Workload config %s is not a mapping", config_path)
        raise ConfigError(f"{config_path} must contain a mapping, got {type(data).__name__}")
    return data


def load_settings(
    config_path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """
    Resolve settings from environment, YAML file and defaults.

    Args:
        config_path: YAML file to read. Defaults to paths.config_file().
        environ: Environment mapping. Defaults to os.environ.

    Raises:
        ConfigError: a value is malformed or out of range.
    """
    if environ is None:
        environ = dict(os.environ)
    if config_path is None:
        config_path = paths.config_file()

    file_values = _load_yaml(config_path)

    values: dict[str, Any] = {}
    for name, (env_var, yaml_key) in _SOURCES.items():
        if environ.get(env_var) not in (None, ""):
            values[name] = _coerce(name, environ[env_var])
        elif file_values.get(yaml_key) is not None:
            values[name] = _coerce(name, file_values[yaml_key])

    settings = _validate(Settings(**values))
    logger.debug("Workload settings resolved", extra={"settings": settings})
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, resolved on first use."""
    return load_settings()
