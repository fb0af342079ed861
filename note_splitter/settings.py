"""
User settings for the split command.

Settings are a flat JSON record. Loading merges the stored record over the
defaults, so keys missing from the file fall back to their default value and
unknown keys are ignored. Every change is written back immediately.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from .exceptions import SettingsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitSettings:
    """Settings record consumed by the split pipeline."""

    # Destination folder; empty means "next to the source note"
    save_folder_path: str = "note-splitter"

    # Derive each file name from the first line of its fragment
    use_content_as_title: bool = False

    # Stored in escaped form: the two characters backslash + n mean newline
    delimiter: str = "\\n"

    # Appended verbatim to every fragment body
    append_to_split_content: str = ""

    # Delete the source note, but only when every fragment was written
    delete_original_note: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'SplitSettings':
        """Build settings from a stored record, defaulting missing keys."""
        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in (data or {}).items():
            if key not in known:
                logger.debug(f"Ignoring unknown settings key: {key}")
                continue
            expected = bool if known[key].type in (bool, 'bool') else str
            if not isinstance(value, expected):
                raise SettingsError(
                    f"Setting '{key}' must be {expected.__name__}, got {type(value).__name__}"
                )
            values[key] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def with_value(self, key: str, raw: str) -> 'SplitSettings':
        """
        Return a copy with one setting changed from its string form.

        Boolean settings accept true/false, yes/no, on/off and 1/0.
        """
        known = {f.name: f for f in fields(self)}
        if key not in known:
            raise SettingsError(f"Unknown setting '{key}'. Valid keys: {', '.join(known)}")

        if known[key].type in (bool, 'bool'):
            lowered = raw.strip().lower()
            if lowered in ('true', 'yes', 'on', '1'):
                value: Any = True
            elif lowered in ('false', 'no', 'off', '0'):
                value = False
            else:
                raise SettingsError(f"Setting '{key}' expects true or false, got '{raw}'")
        else:
            value = raw
        return replace(self, **{key: value})


class SettingsStore:
    """Loads and saves `SplitSettings` as a JSON file."""

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> SplitSettings:
        if not self.path.exists():
            logger.info(f"No settings file at {self.path}, using defaults")
            return SplitSettings()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Failed to read settings from {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {self.path} must contain a JSON object")
        return SplitSettings.from_dict(data)

    def save(self, settings: SplitSettings) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise SettingsError(f"Failed to write settings to {self.path}: {e}") from e
        logger.info(f"Saved settings to {self.path}")

    def update(self, key: str, raw: str) -> SplitSettings:
        """Change one setting and persist the result."""
        settings = self.load().with_value(key, raw)
        self.save(settings)
        return settings
