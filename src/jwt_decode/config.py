"""
Configuration loading, validation, and typed models.

Supports:
  - Optional YAML config file (config/config.yaml)
  - Environment variable override for the display timezone (JWT_DECODE_TZ)
  - CLI argument merging via merge_cli_overrides()

Every setting has a default, so the tool works without any config file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "PROJECT_ROOT",
    "ENV_TIMEZONE",
    "ConfigError",
    "DisplayConfig",
    "InputConfig",
    "AppConfig",
    "load_config",
    "merge_cli_overrides",
    "resolve_timezone",
]

logger = logging.getLogger(__name__)

# Project root directory (two levels up from this file)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

ENV_TIMEZONE = "JWT_DECODE_TZ"

LOCAL_TIMEZONE = "local"


# ---------------------------------------------------------------------------
# Typed configuration models
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration file or a setting is invalid."""


@dataclass(frozen=True)
class DisplayConfig:
    indent: int = 4
    timezone: str = LOCAL_TIMEZONE
    show_raw: bool = False


@dataclass(frozen=True)
class InputConfig:
    strip_bearer_prefix: bool = True


@dataclass(frozen=True)
class AppConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    input: InputConfig = field(default_factory=InputConfig)

    @property
    def tz(self) -> tzinfo | None:
        """Timezone for status timestamps; None means the local zone."""
        return resolve_timezone(self.display.timezone)


def resolve_timezone(name: str) -> tzinfo | None:
    """Turn a configured zone name into a ``tzinfo`` (None for ``local``).

    Raises:
        ConfigError: If the zone name is unknown.
    """
    if not name or name.lower() == LOCAL_TIMEZONE:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ConfigError(f"Unknown timezone: {name!r}") from e


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _read_yaml(config_path: str, explicit: bool) -> dict:
    path = Path(config_path)
    if not path.exists():
        if explicit:
            raise ConfigError(
                f"Config file not found: {config_path}\n"
                "Copy config/config.yaml.example to config/config.yaml and adjust it."
            )
        logger.debug("No config file at %s, using defaults", config_path)
        return {}

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Invalid config file format: expected YAML mapping, got {type(raw).__name__}"
        )
    logger.debug("Config loaded from %s", config_path)
    return raw


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def load_config(config_path: str | None = None) -> AppConfig:
    """Load and validate the YAML configuration file.

    With no *config_path* the default location is tried and a missing file
    simply yields defaults. An explicitly given path must exist.

    The JWT_DECODE_TZ environment variable takes precedence over
    ``display.timezone``.

    Raises:
        ConfigError: If the file is missing (explicit path only), is not a
            mapping, or holds an invalid value.
    """
    explicit = config_path is not None
    raw = _read_yaml(config_path or DEFAULT_CONFIG_PATH, explicit)

    # --- Display ---
    display = _section(raw, "display")
    indent = display.get("indent", 4)
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ConfigError(f"display.indent must be a non-negative integer, got {indent!r}")

    timezone = os.environ.get(ENV_TIMEZONE) or display.get("timezone") or LOCAL_TIMEZONE
    if not isinstance(timezone, str):
        raise ConfigError("display.timezone must be a string")
    resolve_timezone(timezone)

    show_raw = display.get("show_raw", False)
    if not isinstance(show_raw, bool):
        raise ConfigError("display.show_raw must be true or false")

    # --- Input ---
    input_section = _section(raw, "input")
    strip_bearer = input_section.get("strip_bearer_prefix", True)
    if not isinstance(strip_bearer, bool):
        raise ConfigError("input.strip_bearer_prefix must be true or false")

    return AppConfig(
        display=DisplayConfig(indent=indent, timezone=timezone, show_raw=show_raw),
        input=InputConfig(strip_bearer_prefix=strip_bearer),
    )


def merge_cli_overrides(
    cfg: AppConfig,
    *,
    timezone: str | None = None,
    show_raw: bool | None = None,
) -> AppConfig:
    """Return a copy of *cfg* with any non-None CLI values applied.

    Raises:
        ConfigError: If the timezone override is unknown.
    """
    display = cfg.display
    if timezone is not None:
        resolve_timezone(timezone)
        display = replace(display, timezone=timezone)
    if show_raw is not None:
        display = replace(display, show_raw=show_raw)
    return replace(cfg, display=display)
