"""Daily note lookup and creation inside an Obsidian vault."""

import calendar
import logging
import re
from collections.abc import Callable
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Protocol

import frontmatter

from bedtime.core.date_pattern import DatePattern
from bedtime.core.resolver import normalize_path
from bedtime.models import DailyNoteConfig
from bedtime.vault.connector import VaultConnector

logger = logging.getLogger(__name__)

# {{date}}, {{date:YYYY-MM-DD}}, {{date+1d:YYYY-MM-DD}}, {{time}}, {{title}},
# {{yesterday}}, {{tomorrow}}
_PLACEHOLDER_RE = re.compile(
    r"\{\{\s*(date|time|title|yesterday|tomorrow)"
    r"\s*(?:([+-][0-9]{1,6})([dwMy]))?"
    r"\s*(?::([^}]*))?\}\}"
)


class DailyNoteIndex(Protocol):
    """Where the open-today flow looks up and creates daily notes."""

    def get_daily_note(self, day: date) -> Path | None: ...

    def create_daily_note(self, day: date) -> Path: ...


class VaultDailyNotes:
    """Daily notes kept in one folder of a vault, named by a date format."""

    def __init__(
        self,
        vault_path: Path,
        config: DailyNoteConfig,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.vault_path = vault_path
        self.config = config
        self.clock = clock
        folder = normalize_path(config.folder)
        self._folder = "" if folder == "/" else folder

    def _include_pattern(self) -> str:
        return f"{self._folder}/**/*.md" if self._folder else "**/*.md"

    def all_daily_notes(self) -> dict[date, Path]:
        """Map each date to its note, for every note under the folder whose name parses."""
        connector = VaultConnector(self.vault_path, include_patterns=[self._include_pattern()])
        notes: dict[date, Path] = {}
        for relative in connector.list_notes():
            day = self.config.pattern.parse(relative.stem)
            if day is None:
                continue
            if day in notes:
                logger.debug("Ignoring duplicate daily note %s for %s", relative, day)
                continue
            notes[day] = relative
        return notes

    def get_daily_note(self, day: date) -> Path | None:
        """Return the vault-relative path of the note for `day`, if there is one."""
        return self.all_daily_notes().get(day)

    def note_path(self, day: date) -> Path:
        """Vault-relative path a new note for `day` gets."""
        return Path(normalize_path(f"{self._folder}/{self.config.pattern.format(day)}.md"))

    def create_daily_note(self, day: date) -> Path:
        """Create the note for `day` and return its vault-relative path.

        An existing file at that path is left untouched.
        """
        relative = self.note_path(day)
        full_path = self.vault_path / relative
        full_path.parent.mkdir(parents=True, exist_ok=True)
        content = self._initial_content(day)
        try:
            with open(full_path, "x", encoding="utf-8") as f:
                f.write(content)
        except FileExistsError:
            logger.info("Daily note %s already exists, not overwriting", relative)
            return relative
        logger.info("Created daily note %s", relative)
        return relative

    def _initial_content(self, day: date) -> str:
        if not self.config.template:
            post = frontmatter.Post("", type="daily", date=day)
            return frontmatter.dumps(post) + "\n"

        template_path = self.vault_path / normalize_path(self.config.template)
        if template_path.suffix != ".md":
            template_path = template_path.with_name(template_path.name + ".md")
        try:
            template = template_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to read daily note template %s: %s", template_path, e)
            return ""
        return render_template(template, day, self.config.pattern, self.clock())


def shift_date(day: date, amount: int, unit: str) -> date:
    """Move `day` by `amount` days (d), weeks (w), months (M) or years (y).

    Month and year steps keep the day of month where they can and otherwise
    land on the last day of the month.
    """
    if unit == "d":
        return day + timedelta(days=amount)
    if unit == "w":
        return day + timedelta(weeks=amount)
    months = amount * 12 if unit == "y" else amount
    year, month = divmod(day.month - 1 + months, 12)
    year += day.year
    month += 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def render_template(template: str, day: date, pattern: DatePattern, now: datetime) -> str:
    """Fill in the placeholders Obsidian's daily notes understand.

    A {{date:FORMAT}} with an unsupported format, or a date offset that runs
    off the calendar, is left as written.
    """

    def _replace(match: re.Match[str]) -> str:
        name, amount, unit, fmt = match.groups()
        if amount is not None and name != "date":
            return match.group(0)
        if name == "title":
            return pattern.format(day)
        if name == "time":
            return now.strftime("%H:%M")
        target = {
            "date": day,
            "yesterday": day - timedelta(days=1),
            "tomorrow": day + timedelta(days=1),
        }[name]
        if amount is not None:
            try:
                target = shift_date(target, int(amount), unit)
            except (ValueError, OverflowError):
                logger.warning("Date offset out of range in placeholder: %s", match.group(0))
                return match.group(0)
        if not fmt:
            return pattern.format(target)
        try:
            return DatePattern(fmt.strip(), partial=True).format(target)
        except ValueError:
            logger.warning("Unsupported date format in template placeholder: %s", match.group(0))
            return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)
