"""Data models for bedtime-aware daily notes."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, field_validator

from bedtime.core.date_pattern import DatePattern
from bedtime.core.sexagesimal import clamp_to_valid_minutes

DEFAULT_CUTOFF_MINUTES = 4 * 60
DEFAULT_DAILY_NOTE_FORMAT = "YYYY-MM-DD"

TODAY_ANNOTATION = "(This is today's daily note.)"
NOT_TODAY_ANNOTATION = "(This is not today's daily note.)"


class DayStatus(StrEnum):
    """Where a daily note's day lies relative to an instant."""

    CURRENT = "current"
    PAST = "past"
    FUTURE = "future"


@dataclass(frozen=True)
class DayWindow:
    """The half-open 24 hour interval [start, end) belonging to one date."""

    start: datetime
    end: datetime

    def __contains__(self, instant: object) -> bool:
        return isinstance(instant, datetime) and self.start <= instant < self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class DailyNoteConfig:
    """Where daily notes live and how they are named."""

    folder: str = ""
    format: str = DEFAULT_DAILY_NOTE_FORMAT
    template: str = ""
    pattern: DatePattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", DatePattern(self.format or DEFAULT_DAILY_NOTE_FORMAT))


class BedtimeSettings(BaseModel):
    """User preferences persisted in data/settings.json."""

    minutes_after_midnight_cutoff: int = DEFAULT_CUTOFF_MINUTES
    confirm_before_creating_nonexistent_daily_note: bool = True

    @field_validator("minutes_after_midnight_cutoff")
    @classmethod
    def _clamp_cutoff(cls, value: int) -> int:
        return clamp_to_valid_minutes(value)


# ── API models ──


class WindowResponse(BaseModel):
    start: datetime
    end: datetime


class TodayResponse(BaseModel):
    """State of today's daily note, as seen through the cutoff."""

    now: datetime
    effective_instant: datetime
    effective_date: date
    cutoff: str
    window: WindowResponse
    note_path: str
    exists: bool
    needs_confirmation: bool


class OpenTodayRequest(BaseModel):
    create: bool = False
    # Create and don't ask again
    remember: bool = False


class OpenTodayResponse(BaseModel):
    effective_date: date
    note_path: str
    created: bool


class NoteStatusResponse(BaseModel):
    path: str
    is_daily_note: bool
    window: WindowResponse | None = None
    status: DayStatus | None = None
    annotation: str | None = None


class SettingsResponse(BaseModel):
    minutes_after_midnight_cutoff: int
    cutoff: str
    confirm_before_creating_nonexistent_daily_note: bool


class SettingsUpdate(BaseModel):
    """Partial update; cutoff may be loosely typed text or a minute count."""

    cutoff: str | int | None = None
    confirm_before_creating_nonexistent_daily_note: bool | None = None


class SuggestionResponse(BaseModel):
    content: str
    annotation: str = ""
