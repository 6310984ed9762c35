"""Tests for the open-today flow."""

from datetime import date, datetime
from pathlib import Path

from bedtime.models import BedtimeSettings
from bedtime.settings import load_settings
from bedtime.today import (
    TodayResult,
    needs_confirmation,
    open_todays_daily_note,
    open_with_preferences,
    stop_confirming,
)

LATE_NIGHT = datetime(2026, 1, 2, 3, 45)


class FakeIndex:
    """In-memory daily note index."""

    def __init__(self, existing: dict[date, Path] | None = None) -> None:
        self.notes = dict(existing or {})
        self.created: list[date] = []

    def get_daily_note(self, day: date) -> Path | None:
        return self.notes.get(day)

    def create_daily_note(self, day: date) -> Path:
        path = Path(f"Daily/{day.isoformat()}.md")
        self.notes[day] = path
        self.created.append(day)
        return path


class TestOpenTodaysDailyNote:
    def test_uses_previous_date_before_cutoff(self):
        index = FakeIndex({date(2026, 1, 1): Path("Daily/2026-01-01.md")})
        result = open_todays_daily_note(index, 240, create_if_missing=False, now=LATE_NIGHT)
        assert result == TodayResult(
            effective_date=date(2026, 1, 1), path=Path("Daily/2026-01-01.md"), created=False
        )

    def test_uses_same_date_with_zero_cutoff(self):
        index = FakeIndex()
        result = open_todays_daily_note(index, 0, create_if_missing=True, now=LATE_NIGHT)
        assert result.effective_date == date(2026, 1, 2)
        assert index.created == [date(2026, 1, 2)]

    def test_missing_without_creation(self):
        index = FakeIndex()
        result = open_todays_daily_note(index, 240, create_if_missing=False, now=LATE_NIGHT)
        assert result.path is None
        assert not result.found
        assert index.created == []

    def test_creates_when_allowed(self):
        index = FakeIndex()
        result = open_todays_daily_note(index, 240, create_if_missing=True, now=LATE_NIGHT)
        assert result.created
        assert result.path == Path("Daily/2026-01-01.md")

    def test_does_not_create_when_note_exists(self):
        index = FakeIndex({date(2026, 1, 1): Path("Daily/2026-01-01.md")})
        result = open_todays_daily_note(index, 240, create_if_missing=True, now=LATE_NIGHT)
        assert not result.created
        assert index.created == []


class TestPreferences:
    def test_confirmation_needed_when_missing(self):
        prefs = BedtimeSettings()
        result = open_with_preferences(FakeIndex(), prefs, now=LATE_NIGHT)
        assert result.path is None
        assert needs_confirmation(result, prefs)

    def test_creates_straight_away_without_confirm_flag(self):
        prefs = BedtimeSettings(confirm_before_creating_nonexistent_daily_note=False)
        index = FakeIndex()
        result = open_with_preferences(index, prefs, now=LATE_NIGHT)
        assert result.created
        assert not needs_confirmation(result, prefs)

    def test_no_confirmation_when_found(self):
        prefs = BedtimeSettings()
        index = FakeIndex({date(2026, 1, 1): Path("Daily/2026-01-01.md")})
        result = open_with_preferences(index, prefs, now=LATE_NIGHT)
        assert not needs_confirmation(result, prefs)

    def test_cutoff_from_preferences(self):
        prefs = BedtimeSettings(minutes_after_midnight_cutoff=180)
        result = open_with_preferences(FakeIndex(), prefs, now=LATE_NIGHT)
        assert result.effective_date == date(2026, 1, 2)


class TestStopConfirming:
    def test_turns_flag_off_and_saves(self, tmp_path):
        prefs = BedtimeSettings(minutes_after_midnight_cutoff=180)
        stop_confirming(tmp_path, prefs)
        assert prefs.confirm_before_creating_nonexistent_daily_note is False
        saved = load_settings(tmp_path)
        assert saved.confirm_before_creating_nonexistent_daily_note is False
        assert saved.minutes_after_midnight_cutoff == 180
