"""Configuration management using pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from bedtime.models import DEFAULT_DAILY_NOTE_FORMAT, DailyNoteConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BEDTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Vault settings
    vault_path: Path | None = None

    # Data storage (holds settings.json)
    data_path: Path = Path("data")

    # Daily notes, mirroring the vault's Daily notes core plugin options
    daily_note_folder: str = ""
    daily_note_format: str = DEFAULT_DAILY_NOTE_FORMAT
    daily_note_template: str = ""

    def daily_note_config(self) -> DailyNoteConfig:
        """Build the daily note config; raises ValueError for a bad format."""
        return DailyNoteConfig(
            folder=self.daily_note_folder,
            format=self.daily_note_format,
            template=self.daily_note_template,
        )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
