"""Decide which day an instant belongs to when the day starts after midnight.

With a cutoff of 04:00, everything from 04:00 on one date up to (but not
including) 04:00 on the next belongs to the first date. The cutoff is passed
in on every call; callers are expected to have clamped it already.
"""

import re
import unicodedata
from datetime import date, datetime, time, timedelta, tzinfo
from pathlib import PurePosixPath

from bedtime.models import (
    NOT_TODAY_ANNOTATION,
    TODAY_ANNOTATION,
    DailyNoteConfig,
    DayStatus,
    DayWindow,
)

NOTE_EXTENSION = "md"

_SLASHES_RE = re.compile(r"[\\/]+")
_EDGE_SLASHES_RE = re.compile(r"^/+|/+$")
_NBSP_RE = re.compile("[\u00a0\u202f]")


def resolve_effective_instant(now: datetime, cutoff_minutes: int) -> datetime:
    """Pretend it is `cutoff_minutes` earlier than it actually is."""
    return now - timedelta(minutes=cutoff_minutes)


def effective_date(now: datetime, cutoff_minutes: int) -> date:
    """The calendar date whose daily note counts as today's at `now`."""
    return resolve_effective_instant(now, cutoff_minutes).date()


def window_for_date(
    day: date | datetime, cutoff_minutes: int, tzinfo: tzinfo | None = None
) -> DayWindow:
    """Return the window of instants that belong to `day`.

    Args:
        day: The note's date, or a datetime at local midnight of that date.
        cutoff_minutes: Minutes after midnight at which the day starts.
        tzinfo: Zone a plain date's midnight is taken in. Pass the tzinfo of
            the instants the window will be compared with.
    """
    if isinstance(day, datetime):
        midnight = day
    else:
        midnight = datetime.combine(day, time.min, tzinfo=tzinfo)
    start = midnight + timedelta(minutes=cutoff_minutes)
    return DayWindow(start=start, end=start + timedelta(days=1))


def classify(instant: datetime, window: DayWindow) -> DayStatus:
    """Place a window relative to an instant."""
    if instant < window.start:
        return DayStatus.FUTURE
    if instant >= window.end:
        return DayStatus.PAST
    return DayStatus.CURRENT


def annotation_text(status: DayStatus) -> str:
    # Past and future are deliberately shown the same way
    return TODAY_ANNOTATION if status is DayStatus.CURRENT else NOT_TODAY_ANNOTATION


def normalize_path(path: str) -> str:
    """Normalize a vault-relative path the way Obsidian does."""
    path = _SLASHES_RE.sub("/", path)
    path = _EDGE_SLASHES_RE.sub("", path)
    if not path:
        path = "/"
    path = _NBSP_RE.sub(" ", path)
    return unicodedata.normalize("NFC", path)


def _file_name(path: str) -> str:
    return PurePosixPath(path.replace("\\", "/")).name


def _base_name(path: str) -> str:
    name = _file_name(path)
    stem, dot, _ext = name.rpartition(".")
    return stem if dot else name


def matches_note_naming_convention(candidate_path: str, config: DailyNoteConfig) -> bool:
    """Check that a file sits directly in the daily note folder as a markdown note.

    This says nothing about whether the name is a valid date.
    """
    name = _file_name(candidate_path)
    _stem, dot, extension = name.rpartition(".")
    if not dot or extension.lower() != NOTE_EXTENSION:
        return False
    return normalize_path(candidate_path) == normalize_path(f"{config.folder}/{name}")


def note_date(candidate_path: str, config: DailyNoteConfig) -> date | None:
    """The date a daily note is for, or None if the file is not a daily note."""
    if not matches_note_naming_convention(candidate_path, config):
        return None
    return config.pattern.parse(_base_name(candidate_path))


def daily_note_window(
    candidate_path: str,
    config: DailyNoteConfig,
    cutoff_minutes: int,
    tzinfo: tzinfo | None = None,
) -> DayWindow | None:
    """Return the window of a daily note, or None if the file is not one."""
    day = note_date(candidate_path, config)
    if day is None:
        return None
    return window_for_date(day, cutoff_minutes, tzinfo)


def is_daily_note(candidate_path: str, config: DailyNoteConfig) -> bool:
    return note_date(candidate_path, config) is not None
