"""Today's daily note, shifted by the configured cutoff."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from bedtime.api.dependencies import (
    Clock,
    get_clock,
    get_daily_notes,
    get_data_path,
    get_preferences,
)
from bedtime.core.resolver import resolve_effective_instant, window_for_date
from bedtime.core.sexagesimal import encode
from bedtime.models import (
    BedtimeSettings,
    OpenTodayRequest,
    OpenTodayResponse,
    TodayResponse,
    WindowResponse,
)
from bedtime.today import needs_confirmation, open_todays_daily_note, stop_confirming
from bedtime.vault.daily_notes import VaultDailyNotes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["today"])


@router.get("/today", response_model=TodayResponse)
async def get_today(
    daily_notes: Annotated[VaultDailyNotes, Depends(get_daily_notes)],
    preferences: Annotated[BedtimeSettings, Depends(get_preferences)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> TodayResponse:
    """Describe which daily note counts as today's right now, without creating it."""
    cutoff = preferences.minutes_after_midnight_cutoff
    now = clock()
    effective_instant = resolve_effective_instant(now, cutoff)
    day = effective_instant.date()
    window = window_for_date(day, cutoff, now.tzinfo)

    existing = daily_notes.get_daily_note(day)
    path = existing if existing is not None else daily_notes.note_path(day)
    return TodayResponse(
        now=now,
        effective_instant=effective_instant,
        effective_date=day,
        cutoff=encode(cutoff),
        window=WindowResponse(start=window.start, end=window.end),
        note_path=path.as_posix(),
        exists=existing is not None,
        needs_confirmation=(
            existing is None and preferences.confirm_before_creating_nonexistent_daily_note
        ),
    )


@router.post("/today", response_model=OpenTodayResponse)
async def open_today(
    body: OpenTodayRequest,
    daily_notes: Annotated[VaultDailyNotes, Depends(get_daily_notes)],
    preferences: Annotated[BedtimeSettings, Depends(get_preferences)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> OpenTodayResponse:
    """Open today's daily note, creating it when asked to or when no confirmation is needed.

    `remember` creates the note and turns the confirmation off for next time.
    """
    create = (
        body.create
        or body.remember
        or not preferences.confirm_before_creating_nonexistent_daily_note
    )
    result = open_todays_daily_note(
        daily_notes,
        preferences.minutes_after_midnight_cutoff,
        create_if_missing=create,
        now=clock(),
    )
    if result.path is None:
        detail = f"Daily note for {result.effective_date.isoformat()} does not exist"
        if needs_confirmation(result, preferences):
            detail += (
                "; resend with create=true to create it, or remember=true to create it"
                " and stop asking"
            )
        raise HTTPException(status_code=404, detail=detail)
    asked = preferences.confirm_before_creating_nonexistent_daily_note
    if result.created and body.remember and asked:
        stop_confirming(get_data_path(), preferences)
    return OpenTodayResponse(
        effective_date=result.effective_date,
        note_path=result.path.as_posix(),
        created=result.created,
    )
