"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bedtime import __version__
from bedtime.api.dependencies import get_data_path, get_settings
from bedtime.api.notes import router as notes_router
from bedtime.api.settings import router as settings_router
from bedtime.api.today import router as today_router
from bedtime.settings import load_settings

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Log resolved configuration at startup for debugging."""
    s = get_settings()
    logger.info(
        "Bedtime starting: vault_path=%s, data_path=%s, daily notes in %r as %r",
        s.vault_path,
        s.data_path,
        s.daily_note_folder,
        s.daily_note_format,
    )
    if not s.vault_path or not s.vault_path.exists():
        logger.error("VAULT PATH NOT CONFIGURED OR MISSING, daily note APIs will return 503 errors")
    yield


app = FastAPI(
    title="Bedtime",
    description="Daily notes that respect a late bedtime",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["app://obsidian.md", "http://localhost", "http://127.0.0.1"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(notes_router)
app.include_router(settings_router)
app.include_router(today_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Return project information."""
    return {
        "name": "Bedtime",
        "version": __version__,
        "description": "Daily notes that respect a late bedtime",
    }


@app.get("/health")
@app.get("/api/v1/health")
async def health() -> dict[str, Any]:
    """Health check endpoint with vault, daily note format and settings status."""
    s = get_settings()

    checks: dict[str, Any] = {"status": "ok"}

    # Vault check
    if not s.vault_path or not s.vault_path.exists():
        checks["status"] = "error"
        checks["vault"] = "not configured or missing"
    else:
        checks["vault"] = "ok"

    # Daily note format
    try:
        s.daily_note_config()
        checks["daily_note_format"] = "ok"
    except ValueError as e:
        checks["status"] = "error"
        checks["daily_note_format"] = str(e)

    prefs = load_settings(get_data_path())
    checks["cutoff_minutes"] = prefs.minutes_after_midnight_cutoff

    return checks
