"""User settings for mapmarker.

Settings come from three places, later ones winning:
1. ``$XDG_CONFIG_HOME/mapmarker/settings.json``
2. The MAPMARKER_API_KEY environment variable (API key only)
3. Command-line flags (applied by cli.py)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from constants import API_KEY_ENV, APP_NAME, DEFAULT_ZOOM, MAX_ZOOM, MIN_ZOOM
from model import MapConfig, MapType, parse_zoom

log = logging.getLogger(__name__)


class SettingsError(Exception):
    """Raised when the settings file cannot be used."""


@dataclass(frozen=True)
class Settings:
    """Resolved application settings."""

    api_key: str | None = None
    default_zoom: int = DEFAULT_ZOOM
    map_type: MapType = MapType.HYBRID
    lookup_timeout: float | None = None
    offline: bool = False

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def get_config_dir() -> Path:
    """Get the config directory using XDG Base Directory spec."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / "settings.json"


def _parse_timeout(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise SettingsError(f"lookup_timeout must be a positive number, got {value!r}")
    return float(value)


def parse_settings(data: Any) -> Settings:
    """Build Settings from decoded settings.json content.

    Raises:
        SettingsError: If the content is not an object or holds unusable values.
    """
    if not isinstance(data, dict):
        raise SettingsError("Settings file must contain a JSON object")

    api_key = data.get("api_key")
    if api_key is not None and not isinstance(api_key, str):
        raise SettingsError("api_key must be a string")

    default_zoom = DEFAULT_ZOOM
    if "default_zoom" in data:
        zoom = parse_zoom(data["default_zoom"])
        if zoom is None or not MIN_ZOOM <= zoom <= MAX_ZOOM:
            raise SettingsError(
                f"default_zoom must be between {MIN_ZOOM} and {MAX_ZOOM}, got {data['default_zoom']!r}"
            )
        default_zoom = zoom

    map_type = MapType.HYBRID
    if "map_type" in data:
        map_type = MapType.parse(data["map_type"])
        if map_type.value != str(data["map_type"]).strip().lower():
            log.warning(f"Unknown map_type {data['map_type']!r}, using {map_type.value}")

    return Settings(
        api_key=api_key or None,
        default_zoom=default_zoom,
        map_type=map_type,
        lookup_timeout=_parse_timeout(data.get("lookup_timeout")),
    )


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk and the environment.

    A missing settings file is not an error; the defaults are used.

    Raises:
        SettingsError: If the file exists but cannot be parsed.
    """
    path = path or get_settings_path()
    settings = Settings()
    if path.exists():
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Cannot read {path}: {e}") from e
        settings = parse_settings(data)
        log.info(f"Loaded settings from {path}")

    env_key = os.environ.get(API_KEY_ENV)
    if env_key:
        settings = replace(settings, api_key=env_key)
    return settings


def build_map_config(settings: Settings) -> MapConfig:
    """Per-widget map configuration for the given settings."""
    return MapConfig(
        default_zoom=settings.default_zoom,
        map_type=settings.map_type,
        lookup_timeout=settings.lookup_timeout,
    )
