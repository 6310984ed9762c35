"""Vault connector and daily-note index."""

from bedtime.vault.connector import VaultConnector
from bedtime.vault.daily_notes import DailyNoteIndex, VaultDailyNotes

__all__ = ["DailyNoteIndex", "VaultConnector", "VaultDailyNotes"]
