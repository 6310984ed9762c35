"""Open today's daily note while considering the configured bedtime."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from bedtime.core.resolver import resolve_effective_instant
from bedtime.core.sexagesimal import encode
from bedtime.models import BedtimeSettings
from bedtime.settings import save_settings
from bedtime.vault.daily_notes import DailyNoteIndex

logger = logging.getLogger(__name__)


@dataclass
class TodayResult:
    """Outcome of trying to open today's daily note."""

    effective_date: date
    path: Path | None  # None when missing and creation was not allowed
    created: bool = False

    @property
    def found(self) -> bool:
        return self.path is not None


def open_todays_daily_note(
    index: DailyNoteIndex,
    cutoff_minutes: int,
    *,
    create_if_missing: bool,
    now: datetime | None = None,
) -> TodayResult:
    """Find (or create) the daily note that counts as today's.

    The current time is treated as if it were `cutoff_minutes` earlier, so
    shortly after midnight the previous date's note is used.
    """
    now = now or datetime.now()
    offset_now = resolve_effective_instant(now, cutoff_minutes)
    day = offset_now.date()

    path = index.get_daily_note(day)
    created = False
    if path is None:
        if not create_if_missing:
            logger.info("Daily note for %s does not exist yet", day)
            return TodayResult(effective_date=day, path=None)
        path = index.create_daily_note(day)
        created = True

    logger.debug(
        "now = %s, cutoff = %s (%d minutes), pretending that now = %s, therefore using %s",
        now.isoformat(timespec="minutes"),
        encode(cutoff_minutes),
        cutoff_minutes,
        offset_now.isoformat(timespec="minutes"),
        path,
    )
    return TodayResult(effective_date=day, path=path, created=created)


def needs_confirmation(result: TodayResult, settings: BedtimeSettings) -> bool:
    """Whether the caller should ask before creating the missing note."""
    return not result.found and settings.confirm_before_creating_nonexistent_daily_note


def open_with_preferences(
    index: DailyNoteIndex, settings: BedtimeSettings, *, now: datetime | None = None
) -> TodayResult:
    """First attempt of the open-today command.

    Creates the note straight away unless the preferences ask for
    confirmation, in which case a missing note comes back with no path.
    """
    return open_todays_daily_note(
        index,
        settings.minutes_after_midnight_cutoff,
        create_if_missing=not settings.confirm_before_creating_nonexistent_daily_note,
        now=now,
    )


def stop_confirming(data_path: Path, settings: BedtimeSettings) -> None:
    """Remember "create and don't ask again": turn the confirm flag off and save."""
    settings.confirm_before_creating_nonexistent_daily_note = False
    save_settings(data_path, settings)
    logger.info("Will create missing daily notes without asking from now on")
