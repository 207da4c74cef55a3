"""Settings file I/O for city-vitals.

Manages a JSON settings file at XDG_CONFIG_HOME/city-vitals/settings.json.
Persistence is advisory: load() never raises and save() never raises.

// [LAW:single-enforcer] This module is the only writer of the settings file.
// [LAW:dataflow-not-control-flow] A fresh default Settings is the "no data" value.
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path

from city_vitals.app.settings_model import (
    DEFAULT_PANEL_POSITION,
    DEFAULT_TOGGLE_BUTTON_POSITION,
    Position,
    ResolutionLayout,
    Settings,
)
from city_vitals.core.stat_catalog import StatId, default_enabled_map

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
SETTINGS_FILE_NAME = "settings.json"
MAX_RESOLUTIONS = 16


class SettingsSchemaError(ValueError):
    """Raised by from_dict() when the stored document does not match the schema."""


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / city-vitals / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "city-vitals" / SETTINGS_FILE_NAME


# ─── Serialization ────────────────────────────────────────────────────────────


def _position_to_dict(position: Position) -> dict:
    return {"x": position.x, "y": position.y}


def _require_number(value, what: str) -> float:
    """Finite JSON number as float. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsSchemaError("{} must be a number".format(what))
    try:
        number = float(value)
    except OverflowError as exc:
        raise SettingsSchemaError("{} is out of range".format(what)) from exc
    if not math.isfinite(number):
        raise SettingsSchemaError("{} must be finite".format(what))
    return number


def _require_int(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsSchemaError("{} must be an integer".format(what))
    return value


def _position_from_dict(raw) -> Position:
    if not isinstance(raw, dict):
        raise SettingsSchemaError("position must be an object, got {!r}".format(raw))
    return Position(
        _require_number(raw.get("x"), "position x"),
        _require_number(raw.get("y"), "position y"),
    )


def _require_bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise SettingsSchemaError("{} must be a boolean".format(key))
    return value


def to_dict(settings: Settings) -> dict:
    """Serialize settings to a JSON-compatible dict."""
    return {
        "version": SCHEMA_VERSION,
        "default_panel_visibility": settings.default_panel_visibility,
        "transparent_when_unhovered": settings.transparent_when_unhovered,
        "enabled_stats": {
            stat_id.value: settings.is_stat_enabled(stat_id) for stat_id in StatId
        },
        "resolutions": [
            {
                "screen_width": r.screen_width,
                "screen_height": r.screen_height,
                "panel_position": _position_to_dict(r.panel_position),
                "toggle_button_position": _position_to_dict(r.toggle_button_position),
                "last_used": r.last_used,
            }
            for r in settings.resolutions
        ],
    }


def from_dict(data) -> Settings:
    """Deserialize a settings document.

    Raises SettingsSchemaError on a version mismatch or wrongly typed field.
    Unknown stat keys are ignored; missing ones keep the catalog default.
    """
    if not isinstance(data, dict):
        raise SettingsSchemaError("settings document must be an object")
    if data.get("version") != SCHEMA_VERSION:
        raise SettingsSchemaError(
            "unsupported settings version {!r}".format(data.get("version"))
        )

    enabled = default_enabled_map()
    raw_enabled = data.get("enabled_stats", {})
    if not isinstance(raw_enabled, dict):
        raise SettingsSchemaError("enabled_stats must be an object")
    known = {s.value: s for s in StatId}
    for key, value in raw_enabled.items():
        stat_id = known.get(key)
        if stat_id is None:
            logger.debug("Ignoring unknown stat key %r in settings", key)
            continue
        if not isinstance(value, bool):
            raise SettingsSchemaError("enabled_stats[{}] must be a boolean".format(key))
        enabled[stat_id] = value

    raw_resolutions = data.get("resolutions", [])
    if not isinstance(raw_resolutions, list):
        raise SettingsSchemaError("resolutions must be a list")
    resolutions: list[ResolutionLayout] = []
    seen: set[tuple[int, int]] = set()
    for raw in raw_resolutions:
        if not isinstance(raw, dict):
            raise SettingsSchemaError("resolution entries must be objects")
        width = _require_int(raw.get("screen_width"), "screen_width")
        height = _require_int(raw.get("screen_height"), "screen_height")
        # Keep the first entry for a pair; later duplicates are dropped.
        if (width, height) in seen:
            continue
        seen.add((width, height))
        resolutions.append(ResolutionLayout(
            screen_width=width,
            screen_height=height,
            panel_position=_position_from_dict(raw.get("panel_position")),
            toggle_button_position=_position_from_dict(raw.get("toggle_button_position")),
            last_used=_require_number(raw.get("last_used", 0.0), "last_used"),
        ))

    return Settings(
        default_panel_visibility=_require_bool(data, "default_panel_visibility", True),
        transparent_when_unhovered=_require_bool(data, "transparent_when_unhovered", True),
        enabled_stats=enabled,
        resolutions=resolutions,
    )


# ─── Store ────────────────────────────────────────────────────────────────────


class SettingsStore:
    """Load/save boundary for Settings on a single JSON file."""

    def __init__(self, path: Path | str | None = None, max_resolutions: int = MAX_RESOLUTIONS):
        self._path = Path(path) if path is not None else None
        self._max_resolutions = max_resolutions

    @property
    def path(self) -> Path:
        return self._path if self._path is not None else get_config_path()

    def load(self) -> Settings:
        """Load settings; any failure yields fresh catalog defaults."""
        path = self.path
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info("No settings file at %s, using defaults", path)
            return Settings()
        except Exception as exc:
            # Includes oversized numbers and recursion limits from the decoder.
            logger.warning("Unreadable settings file %s (%r), using defaults", path, exc)
            return Settings()
        try:
            return from_dict(data)
        except SettingsSchemaError as exc:
            logger.warning("Stale settings file %s (%s), using defaults", path, exc)
            return Settings()
        except Exception:
            logger.exception("Corrupt settings file %s, using defaults", path)
            return Settings()

    def save(self, settings: Settings, keep: tuple[int, int] | None = None) -> bool:
        """Atomic write of settings. Catches and logs I/O errors.

        keep names a resolution that must survive pruning (the current one).
        Returns True when the file was written.
        """
        prune_resolutions(settings, self._max_resolutions, keep=keep)
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Atomic: write temp → rename
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(to_dict(settings), f, indent=2)
                    f.write("\n")
                os.replace(tmp_path, path)
            except Exception:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        except Exception:
            logger.exception("Failed to persist settings to %s", path)
            return False
        return True

    def get_or_create_resolution(self, settings: Settings, width: int, height: int) -> ResolutionLayout:
        return get_or_create_resolution(settings, width, height)


def get_or_create_resolution(settings: Settings, width: int, height: int) -> ResolutionLayout:
    """Return the layout for (width, height), appending a default one on first sight.

    Repeated calls with the same pair return the same object.
    """
    resolution = settings.find_resolution(width, height)
    if resolution is None:
        resolution = ResolutionLayout(
            screen_width=width,
            screen_height=height,
            panel_position=Position(*DEFAULT_PANEL_POSITION),
            toggle_button_position=Position(*DEFAULT_TOGGLE_BUTTON_POSITION),
        )
        settings.resolutions.append(resolution)
        logger.debug("Created layout for resolution %sx%s", width, height)
    resolution.touch()
    return resolution


def prune_resolutions(settings: Settings, limit: int, keep: tuple[int, int] | None = None) -> int:
    """Drop least recently used resolution entries beyond limit.

    Surviving entries keep their relative order. Returns the number removed.
    """
    if limit <= 0 or len(settings.resolutions) <= limit:
        return 0
    ranked = sorted(
        settings.resolutions,
        key=lambda r: (r.key == keep, r.last_used),
        reverse=True,
    )
    survivors = {id(r) for r in ranked[:limit]}
    before = len(settings.resolutions)
    settings.resolutions[:] = [r for r in settings.resolutions if id(r) in survivors]
    removed = before - len(settings.resolutions)
    logger.info("Pruned %d stale resolution layout(s)", removed)
    return removed
