"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/HockeyTimer/settings.json

The file uses the same keys the iOS app kept in its defaults store
(``totalTime``, ``interval``, ``beepVolume``, ``selectedSound``,
``backgroundColorKey``).

Usage::

    settings = load_settings()
    settings.interval = 90
    save_settings(settings)
    engine.start(settings.session_config())
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import SessionConfig

log = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "HockeyTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

# ── domains ───────────────────────────────────────────────────────────────

TOTAL_TIME_RANGE = (5 * 60, 60 * 60)
TOTAL_TIME_STEP = 60
INTERVAL_RANGE = (30, 300)
INTERVAL_STEP = 30
VOLUME_RANGE = (0.0, 1.0)

SOUND_NAMES = ("hockey whistle", "whistle", "bell", "horn")

BACKGROUND_COLOR_KEYS = (
    "black",
    "darkBlue",
    "navy",
    "darkGreen",
    "white",
    "ivory",
    "lightGrey",
    "offWhite",
    "cream",
)

# attribute name → persisted key
_STORAGE_KEYS: dict[str, str] = {
    "total_time": "totalTime",
    "interval": "interval",
    "beep_volume": "beepVolume",
    "selected_sound": "selectedSound",
    "background_color_key": "backgroundColorKey",
}


def _clamp(value, low, high):
    return max(low, min(high, value))


def _snap(value: int, low: int, high: int, step: int) -> int:
    """Clamp *value* into [low, high] and round it onto the step grid."""
    value = _clamp(int(value), low, high)
    return low + round((value - low) / step) * step


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    total_time: int = 15 * 60              # seconds
    interval: int = 60                     # seconds

    # ── audio ─────────────────────────────────────────────────────────
    beep_volume: float = 1.0               # 0.0-1.0
    selected_sound: str = "hockey whistle"

    # ── appearance ────────────────────────────────────────────────────
    background_color_key: str = "white"

    def normalize(self) -> "Settings":
        """Pull every value back into its allowed domain (in place)."""
        self.total_time = _snap(self.total_time, *TOTAL_TIME_RANGE, TOTAL_TIME_STEP)
        self.interval = _snap(self.interval, *INTERVAL_RANGE, INTERVAL_STEP)
        self.beep_volume = float(_clamp(float(self.beep_volume), *VOLUME_RANGE))
        if self.selected_sound not in SOUND_NAMES:
            log.warning("Unknown sound %r, using the default", self.selected_sound)
            self.selected_sound = SOUND_NAMES[0]
        if self.background_color_key not in BACKGROUND_COLOR_KEYS:
            log.warning(
                "Unknown background colour %r, using white",
                self.background_color_key,
            )
            self.background_color_key = "white"
        return self

    def session_config(self) -> SessionConfig:
        return SessionConfig(
            total_duration=self.total_time,
            interval_length=self.interval,
        )

    def to_storage(self) -> dict:
        return {_STORAGE_KEYS[k]: v for k, v in asdict(self).items()}

    @classmethod
    def from_storage(cls, data: dict) -> "Settings":
        """Build settings from persisted keys, ignoring unknown ones."""
        by_key = {stored: attr for attr, stored in _STORAGE_KEYS.items()}
        valid_attrs = {f.name for f in fields(cls)}
        kwargs = {
            by_key[k]: v for k, v in data.items()
            if k in by_key and by_key[k] in valid_attrs
        }
        return cls(**kwargs).normalize()


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("settings file does not hold an object")
        return Settings.from_storage(data)
    except (OSError, ValueError, TypeError, OverflowError) as exc:
        log.warning("Could not read %s (%s), using defaults", SETTINGS_PATH, exc)
        return Settings()


def save_settings(settings: Settings) -> bool:
    """Write settings to disk as JSON.  Returns False if the write failed."""
    try:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(settings.to_storage(), indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        log.warning(
            "Could not write %s (%s), keeping settings in memory", SETTINGS_PATH, exc,
        )
        return False
    return True
