"""Vault connector for finding Obsidian vault files."""

import fnmatch
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class VaultConnector:
    """Connects to an Obsidian vault and lists notes."""

    DEFAULT_EXCLUDES = [
        ".obsidian/*",
        ".trash/*",
        "node_modules/*",
        ".git/*",
        "*.excalidraw.md",
    ]

    def __init__(
        self,
        vault_path: Path,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        """Initialize the vault connector.

        Args:
            vault_path: Path to the Obsidian vault root.
            include_patterns: Glob patterns for files to include. Defaults to ["**/*.md"].
            exclude_patterns: Glob patterns for files to exclude.
        """
        self.vault_path = vault_path
        self.include_patterns = include_patterns or ["**/*.md"]
        self.exclude_patterns = exclude_patterns or self.DEFAULT_EXCLUDES

    def _should_exclude(self, relative_path: str) -> bool:
        """Check if a file should be excluded based on patterns."""
        return any(fnmatch.fnmatch(relative_path, pattern) for pattern in self.exclude_patterns)

    def list_notes(self) -> list[Path]:
        """List all note files in the vault.

        Returns:
            List of paths to note files, relative to vault root.
        """
        notes: list[Path] = []
        for pattern in self.include_patterns:
            for file_path in self.vault_path.glob(pattern):
                if file_path.is_file():
                    relative = file_path.relative_to(self.vault_path)
                    if not self._should_exclude(relative.as_posix()):
                        notes.append(relative)
        logger.debug("Found %d notes matching %s", len(notes), self.include_patterns)
        return sorted(set(notes))
