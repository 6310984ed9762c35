"""Settings API endpoints for the cutoff and confirmation preferences."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from bedtime.api.dependencies import get_data_path
from bedtime.core.sexagesimal import clamp_to_valid_minutes, decode, encode, suggest
from bedtime.models import BedtimeSettings, SettingsResponse, SettingsUpdate, SuggestionResponse
from bedtime.settings import load_settings, save_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


def _to_response(settings: BedtimeSettings) -> SettingsResponse:
    return SettingsResponse(
        minutes_after_midnight_cutoff=settings.minutes_after_midnight_cutoff,
        cutoff=encode(settings.minutes_after_midnight_cutoff),
        confirm_before_creating_nonexistent_daily_note=(
            settings.confirm_before_creating_nonexistent_daily_note
        ),
    )


@router.get("", response_model=SettingsResponse)
async def read_preferences() -> SettingsResponse:
    """Return the current preferences."""
    return _to_response(load_settings(get_data_path()))


@router.put("", response_model=SettingsResponse)
async def update_preferences(body: SettingsUpdate) -> SettingsResponse:
    """Update the cutoff and/or the confirmation flag.

    A text cutoff is read leniently ("4:30", "430" and "04h30" are all 04:30);
    an integer cutoff is a minute count. Both are clamped to 00:00-23:59.
    """
    data_path = get_data_path()
    settings = load_settings(data_path)

    if body.cutoff is not None:
        if isinstance(body.cutoff, int):
            minutes = clamp_to_valid_minutes(body.cutoff)
        else:
            minutes = decode(body.cutoff)
        settings.minutes_after_midnight_cutoff = minutes
        logger.info("Cutoff set to %s", encode(minutes))
    if body.confirm_before_creating_nonexistent_daily_note is not None:
        settings.confirm_before_creating_nonexistent_daily_note = (
            body.confirm_before_creating_nonexistent_daily_note
        )

    save_settings(data_path, settings)
    return _to_response(settings)


@router.get("/cutoff/suggestions", response_model=list[SuggestionResponse])
async def cutoff_suggestions(
    q: str = Query(default="", description="What has been typed so far"),
) -> list[SuggestionResponse]:
    """Suggest normalized cutoff values for a partially typed input."""
    return [SuggestionResponse(content=s.content, annotation=s.annotation) for s in suggest(q)]
