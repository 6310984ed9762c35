"""CLI entry point for bedtime-aware daily note operations."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from bedtime.config import get_settings
from bedtime.core.resolver import annotation_text, classify, daily_note_window
from bedtime.core.sexagesimal import decode, encode, suggest
from bedtime.models import DailyNoteConfig
from bedtime.settings import load_settings, save_settings
from bedtime.today import (
    needs_confirmation,
    open_todays_daily_note,
    open_with_preferences,
    stop_confirming,
)
from bedtime.vault.daily_notes import VaultDailyNotes

logger = logging.getLogger("bedtime.scripts")


def _ask(prompt: str) -> str:
    """Ask the create question; returns "yes", "always" or "no"."""
    try:
        answer = input(f"{prompt} [y/N/a(lways)] ")
    except EOFError:
        return "no"
    answer = answer.strip().lower()
    if answer in ("a", "always"):
        return "always"
    return "yes" if answer in ("y", "yes") else "no"


def cmd_open(
    vault_path: Path,
    config: DailyNoteConfig,
    data_path: Path,
    yes: bool,
    always: bool = False,
) -> int:
    prefs = load_settings(data_path)
    index = VaultDailyNotes(vault_path, config)

    result = open_with_preferences(index, prefs)
    if needs_confirmation(result, prefs):
        if always:
            answer = "always"
        elif yes:
            answer = "yes"
        else:
            answer = _ask("Today's daily note doesn't exist yet. Do you want to create it?")
        if answer == "no":
            logger.info("Not creating daily note for %s", result.effective_date)
            return 1
        result = open_todays_daily_note(
            index, prefs.minutes_after_midnight_cutoff, create_if_missing=True
        )
        if answer == "always":
            stop_confirming(data_path, prefs)

    if result.path is None:
        logger.warning("Failed to retrieve or create daily note.")
        return 1

    print(vault_path / result.path)
    return 0


def cmd_status(
    config: DailyNoteConfig, data_path: Path, note: str, now: datetime | None = None
) -> int:
    prefs = load_settings(data_path)
    now = now or datetime.now()
    window = daily_note_window(note, config, prefs.minutes_after_midnight_cutoff, now.tzinfo)
    if window is None:
        print(f"{note}: not a daily note")
        return 1

    status = classify(now, window)
    print(f"{note}: {annotation_text(status)}")
    start = window.start.isoformat(timespec="minutes")
    end = window.end.isoformat(timespec="minutes")
    print(f"  window: {start} to {end}")
    return 0


def cmd_cutoff(data_path: Path, value: str | None) -> int:
    prefs = load_settings(data_path)
    if value is not None:
        prefs.minutes_after_midnight_cutoff = decode(value)
        save_settings(data_path, prefs)
        logger.info("Cutoff set to %s", encode(prefs.minutes_after_midnight_cutoff))
    print(encode(prefs.minutes_after_midnight_cutoff))
    return 0


def cmd_suggest(query: str) -> int:
    for suggestion in suggest(query):
        print(f"{suggestion.content} {suggestion.annotation}".rstrip())
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Bedtime-aware daily notes")
    parser.add_argument(
        "--vault-path",
        type=Path,
        default=None,
        help="Override vault path (default: from config/env)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    open_parser = sub.add_parser("open", help="Print the path of today's daily note")
    open_parser.add_argument(
        "--yes", "-y", action="store_true", help="Create the note without asking"
    )
    open_parser.add_argument(
        "--always",
        action="store_true",
        help="Create the note and stop asking before creating missing notes",
    )
    status_parser = sub.add_parser("status", help="Is this note today's daily note?")
    status_parser.add_argument("path", help="Vault-relative note path")
    cutoff_parser = sub.add_parser("cutoff", help="Show or set the cutoff time")
    cutoff_parser.add_argument("value", nargs="?", default=None, help="New cutoff, e.g. 04:00")
    suggest_parser = sub.add_parser("suggest", help="Show how a cutoff input is interpreted")
    suggest_parser.add_argument("query")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    settings = get_settings()
    data_path = Path(settings.data_path)

    if args.command == "suggest":
        sys.exit(cmd_suggest(args.query))
    if args.command == "cutoff":
        sys.exit(cmd_cutoff(data_path, args.value))

    try:
        config = settings.daily_note_config()
    except ValueError as e:
        logger.error("Invalid daily note format: %s", e)
        sys.exit(2)

    if args.command == "status":
        sys.exit(cmd_status(config, data_path, args.path))

    vault_path = args.vault_path or settings.vault_path
    if vault_path is None:
        logger.error("No vault path configured. Set BEDTIME_VAULT_PATH or use --vault-path")
        sys.exit(1)

    vault_path = Path(vault_path)
    if not vault_path.exists():
        logger.error("Vault path does not exist: %s", vault_path)
        sys.exit(1)

    logger.debug("Vault path: %s", vault_path)
    sys.exit(cmd_open(vault_path, config, data_path, args.yes, args.always))


if __name__ == "__main__":
    main()
