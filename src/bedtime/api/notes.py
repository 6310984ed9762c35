"""Daily note status endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from bedtime.api.dependencies import Clock, get_clock, get_daily_note_config, get_preferences
from bedtime.core.resolver import annotation_text, classify, daily_note_window
from bedtime.models import BedtimeSettings, DailyNoteConfig, NoteStatusResponse, WindowResponse

router = APIRouter(prefix="/api/v1/notes", tags=["notes"])


@router.get("/status", response_model=NoteStatusResponse)
async def note_status(
    config: Annotated[DailyNoteConfig, Depends(get_daily_note_config)],
    preferences: Annotated[BedtimeSettings, Depends(get_preferences)],
    clock: Annotated[Clock, Depends(get_clock)],
    path: str = Query(description="Vault-relative note path"),
) -> NoteStatusResponse:
    """Say whether a note is a daily note and, if so, whether it is today's."""
    now = clock()
    window = daily_note_window(
        path, config, preferences.minutes_after_midnight_cutoff, now.tzinfo
    )
    if window is None:
        return NoteStatusResponse(path=path, is_daily_note=False)

    status = classify(now, window)
    return NoteStatusResponse(
        path=path,
        is_daily_note=True,
        window=WindowResponse(start=window.start, end=window.end),
        status=status,
        annotation=annotation_text(status),
    )
