"""FastAPI dependency injection for shared resources."""

import logging
from collections.abc import Callable
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException

from bedtime.config import Settings
from bedtime.models import BedtimeSettings, DailyNoteConfig
from bedtime.settings import load_settings
from bedtime.vault.daily_notes import VaultDailyNotes

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_data_path() -> Path:
    """Get the data directory path."""
    settings = get_settings()
    data_path = Path(settings.data_path) if settings.data_path else Path("data")
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def get_preferences() -> BedtimeSettings:
    """Read the user's preferences fresh on every request."""
    return load_settings(get_data_path())


def get_clock() -> Clock:
    """Source of the current time; overridden in tests."""
    return datetime.now


def get_daily_note_config(
    settings: Annotated[Settings, Depends(get_settings)],
) -> DailyNoteConfig:
    try:
        return settings.daily_note_config()
    except ValueError as e:
        logger.error("Invalid daily note format %r: %s", settings.daily_note_format, e)
        raise HTTPException(status_code=500, detail=str(e)) from e


def get_vault_path(settings: Annotated[Settings, Depends(get_settings)]) -> Path:
    vault_path = settings.vault_path
    if not vault_path or not vault_path.exists():
        raise HTTPException(status_code=503, detail="Vault path not configured or missing")
    return vault_path


def get_daily_notes(
    vault_path: Annotated[Path, Depends(get_vault_path)],
    config: Annotated[DailyNoteConfig, Depends(get_daily_note_config)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> VaultDailyNotes:
    return VaultDailyNotes(vault_path, config, clock=clock)
