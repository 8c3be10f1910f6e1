"""Persistent settings for the test tree."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ..logging import get_logger

logger = get_logger(__name__)


SETTINGS_DIR = Path.home() / ".config" / "spectree"
SETTINGS_PATH = SETTINGS_DIR / "settings.json"

DEFAULT_UPDATE_ON_TYPE_DELAY_MS = 1000
DEFAULT_DOUBLE_CLICK_THRESHOLD_MS = 400
DEFAULT_LANGUAGE_ID = "go"


class UpdateOn(Enum):
    """When an edited document's outline is refreshed."""
    ON_SAVE = "onSave"
    ON_TYPE = "onType"


def load_settings() -> dict:
    """Load settings from disk.

    Returns an empty dict if settings file does not exist or contains invalid JSON.
    """
    if not SETTINGS_PATH.exists():
        return {}

    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}

    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Persist settings to disk atomically."""
    SETTINGS_DIR.mkdir(parents=True, exist_ok=True)
    tmp_path = SETTINGS_PATH.with_suffix(".tmp")
    tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
    tmp_path.replace(SETTINGS_PATH)


def get_setting(key: str, default: Any = None) -> Any:
    """Read a setting value with a fallback default."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> None:
    """Set and persist a single setting key."""
    settings = load_settings()
    settings[key] = value
    save_settings(settings)


def _non_negative_ms(value: Any, default: int) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        logger.warning(f"Invalid millisecond value {value!r}, using {default}")
        return default


@dataclass
class TreeSettings:
    """Runtime-adjustable behaviour of the test tree."""
    update_on: UpdateOn = UpdateOn.ON_TYPE
    update_on_type_delay: int = DEFAULT_UPDATE_ON_TYPE_DELAY_MS
    double_click_threshold: int = DEFAULT_DOUBLE_CLICK_THRESHOLD_MS
    language_id: str = DEFAULT_LANGUAGE_ID

    def __post_init__(self):
        self.update_on_type_delay = max(self.update_on_type_delay, 0)
        self.double_click_threshold = max(self.double_click_threshold, 0)

    @classmethod
    def from_dict(cls, d: dict) -> TreeSettings:
        """Build from a settings dict, falling back to defaults on bad values."""
        try:
            update_on = UpdateOn(d.get("updateOn", UpdateOn.ON_TYPE.value))
        except ValueError:
            logger.warning(f"Unknown updateOn value {d.get('updateOn')!r}, using onType")
            update_on = UpdateOn.ON_TYPE
        return cls(
            update_on=update_on,
            update_on_type_delay=_non_negative_ms(
                d.get("updateOnTypeDelay", DEFAULT_UPDATE_ON_TYPE_DELAY_MS),
                DEFAULT_UPDATE_ON_TYPE_DELAY_MS,
            ),
            double_click_threshold=_non_negative_ms(
                d.get("doubleClickThreshold", DEFAULT_DOUBLE_CLICK_THRESHOLD_MS),
                DEFAULT_DOUBLE_CLICK_THRESHOLD_MS,
            ),
            language_id=str(d.get("languageId", DEFAULT_LANGUAGE_ID)),
        )

    def to_dict(self) -> dict:
        return {
            "updateOn": self.update_on.value,
            "updateOnTypeDelay": self.update_on_type_delay,
            "doubleClickThreshold": self.double_click_threshold,
            "languageId": self.language_id,
        }

    @classmethod
    def load(cls) -> TreeSettings:
        """Read the persisted settings file."""
        return cls.from_dict(load_settings())

    def save(self) -> None:
        settings = load_settings()
        settings.update(self.to_dict())
        save_settings(settings)
