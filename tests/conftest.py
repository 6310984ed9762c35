"""Shared test fixtures."""

from contextlib import contextmanager
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from bedtime.api.dependencies import get_clock, get_settings
from bedtime.main import app

# 2026-01-02 03:45, a quarter of an hour before the default 04:00 cutoff
LATE_NIGHT = datetime(2026, 1, 2, 3, 45)


@pytest.fixture
def client():
    return TestClient(app)


@contextmanager
def override_settings(**values):
    """Temporarily override fields on the cached settings, restoring them on exit."""
    settings = get_settings()
    originals = {name: getattr(settings, name) for name in values}
    for name, value in values.items():
        setattr(settings, name, value)
    try:
        yield settings
    finally:
        for name, value in originals.items():
            setattr(settings, name, value)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """A temp data dir standing in for the cached get_data_path()."""
    path = tmp_path / "data"
    path.mkdir()
    monkeypatch.setattr("bedtime.api.dependencies.get_data_path", lambda: path)
    monkeypatch.setattr("bedtime.api.settings.get_data_path", lambda: path)
    monkeypatch.setattr("bedtime.api.today.get_data_path", lambda: path)
    monkeypatch.setattr("bedtime.main.get_data_path", lambda: path)
    return path


@pytest.fixture
def vault(tmp_path, data_dir):
    """A temp vault with a Daily folder, configured as the app's vault."""
    vault_path = tmp_path / "vault"
    (vault_path / "Daily").mkdir(parents=True)
    with override_settings(
        vault_path=vault_path, daily_note_folder="Daily", daily_note_format="YYYY-MM-DD"
    ):
        yield vault_path


@pytest.fixture
def frozen_clock():
    """Pin the API's notion of now to LATE_NIGHT."""
    app.dependency_overrides[get_clock] = lambda: lambda: LATE_NIGHT
    yield LATE_NIGHT
    app.dependency_overrides.pop(get_clock, None)

