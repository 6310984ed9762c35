"""Tests for health endpoint."""

from unittest.mock import MagicMock, patch

from httpx import ASGITransport, AsyncClient

from bedtime.config import Settings
from bedtime.main import app


def _mock_settings(vault_path, daily_note_format="YYYY-MM-DD"):
    return Settings(
        vault_path=vault_path, data_path=vault_path, daily_note_format=daily_note_format
    )


async def test_health_returns_ok(tmp_path, data_dir):
    """Test that /health returns status ok when vault exists."""
    with patch("bedtime.main.get_settings", return_value=_mock_settings(tmp_path)):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["vault"] == "ok"
    assert data["daily_note_format"] == "ok"
    assert data["cutoff_minutes"] == 240


async def test_health_reports_missing_vault(tmp_path, data_dir):
    mock_s = MagicMock()
    mock_s.vault_path = None
    with patch("bedtime.main.get_settings", return_value=mock_s):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/health")

    data = response.json()
    assert data["status"] == "error"
    assert data["vault"] == "not configured or missing"


async def test_health_reports_bad_format(tmp_path, data_dir):
    settings = _mock_settings(tmp_path, daily_note_format="gggg-[W]ww")
    with patch("bedtime.main.get_settings", return_value=settings):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

    data = response.json()
    assert data["status"] == "error"
    assert "Unsupported token" in data["daily_note_format"]


async def test_root_returns_project_info():
    """Test that / returns project information."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Bedtime"
    assert "version" in data
    assert "description" in data
