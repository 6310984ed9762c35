"""User-configurable preferences stored in data/settings.json."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bedtime.models import BedtimeSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = BedtimeSettings().model_dump()

_SETTINGS_FILE = "settings.json"


def load_settings(data_path: Path) -> BedtimeSettings:
    """Read preferences from data_path/settings.json.

    Stored values are layered over the defaults, and the cutoff is clamped to
    00:00-23:59. Returns the defaults and writes the defaults file if missing
    or unparseable.
    """
    settings_file = data_path / _SETTINGS_FILE
    if settings_file.exists():
        try:
            with open(settings_file, encoding="utf-8") as f:
                stored: dict[str, Any] = json.load(f)
            known = {k: v for k, v in stored.items() if k in DEFAULT_SETTINGS}
            return BedtimeSettings(**{**DEFAULT_SETTINGS, **known})
        except (json.JSONDecodeError, OSError, AttributeError, ValidationError):
            logger.warning("Settings file corrupt or unreadable, returning defaults")
            return BedtimeSettings()
    # Write defaults so the file exists for next time
    defaults = BedtimeSettings()
    save_settings(data_path, defaults)
    return defaults


def save_settings(data_path: Path, settings: BedtimeSettings) -> None:
    """Write preferences to data_path/settings.json using atomic write."""
    data_path.mkdir(parents=True, exist_ok=True)
    settings_file = data_path / _SETTINGS_FILE
    fd, tmp_path = tempfile.mkstemp(dir=str(data_path), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(settings.model_dump(), f, indent=2)
            f.write("\n")
        os.replace(tmp_path, str(settings_file))
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
