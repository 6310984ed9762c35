"""Strict parsing and formatting of moment.js-style daily note date formats.

Obsidian stores the daily note format as a moment.js pattern such as
``YYYY-MM-DD`` or ``dddd, MMMM Do YYYY``. Only the date tokens that make sense
in a file name are supported.
"""

import calendar
import re
from collections.abc import Callable
from datetime import date

# Longest tokens first so "MMMM" is not read as "MM" + "MM"
_TOKENS = ("YYYY", "MMMM", "dddd", "MMM", "ddd", "YY", "MM", "Do", "DD", "M", "D")

# Letters moment.js treats as tokens; an unsupported one is a config error
_MOMENT_TOKEN_LETTERS = set("YMDdQWwEeGgHhkmsSaAXxZzN")

_MONTH_NAMES = [calendar.month_name[i] for i in range(1, 13)]
_MONTH_ABBRS = [calendar.month_abbr[i] for i in range(1, 13)]
_DAY_NAMES = list(calendar.day_name)
_DAY_ABBRS = list(calendar.day_abbr)


def _alternation(names: list[str]) -> str:
    return "(" + "|".join(re.escape(n) for n in names) + ")"


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _two_digit_year(value: int) -> int:
    return value + (1900 if value > 68 else 2000)


def _index_of(names: list[str], value: str) -> int:
    lowered = value.lower()
    return next(i for i, n in enumerate(names) if n.lower() == lowered)


# token -> (field, regex, converter from matched text, formatter)
_TOKEN_SPECS: dict[str, tuple[str, str, Callable[[str], int], Callable[[date], str]]] = {
    "YYYY": ("year", r"([0-9]{4})", int, lambda d: f"{d.year:04d}"),
    "YY": (
        "year",
        r"([0-9]{2})",
        lambda s: _two_digit_year(int(s)),
        lambda d: f"{d.year % 100:02d}",
    ),
    "MMMM": (
        "month",
        _alternation(_MONTH_NAMES),
        lambda s: _index_of(_MONTH_NAMES, s) + 1,
        lambda d: _MONTH_NAMES[d.month - 1],
    ),
    "MMM": (
        "month",
        _alternation(_MONTH_ABBRS),
        lambda s: _index_of(_MONTH_ABBRS, s) + 1,
        lambda d: _MONTH_ABBRS[d.month - 1],
    ),
    "MM": ("month", r"([0-9]{2})", int, lambda d: f"{d.month:02d}"),
    "M": ("month", r"([0-9]{1,2})", int, lambda d: str(d.month)),
    "DD": ("day", r"([0-9]{2})", int, lambda d: f"{d.day:02d}"),
    "Do": ("day", r"([0-9]{1,2})(?:st|nd|rd|th)", int, lambda d: _ordinal(d.day)),
    "D": ("day", r"([0-9]{1,2})", int, lambda d: str(d.day)),
    "dddd": (
        "weekday",
        _alternation(_DAY_NAMES),
        lambda s: _index_of(_DAY_NAMES, s),
        lambda d: _DAY_NAMES[d.weekday()],
    ),
    "ddd": (
        "weekday",
        _alternation(_DAY_ABBRS),
        lambda s: _index_of(_DAY_ABBRS, s),
        lambda d: _DAY_ABBRS[d.weekday()],
    ),
}


class DatePattern:
    """A compiled daily note date format.

    Raises ValueError for patterns using moment.js tokens other than the
    supported date tokens. Unless `partial` is set, the pattern must also name
    a year, month and day; partial patterns can only format.
    """

    def __init__(self, pattern: str, *, partial: bool = False) -> None:
        self.pattern = pattern
        self._parts: list[tuple[bool, str]] = []  # (is_token, token or literal)
        self._tokenize(pattern)

        fields = {_TOKEN_SPECS[p][0] for is_token, p in self._parts if is_token}
        missing = {"year", "month", "day"} - fields
        self.partial = bool(missing)
        if missing and not partial:
            raise ValueError(
                f"Date format {pattern!r} does not identify a single day "
                f"(missing {', '.join(sorted(missing))})"
            )

        regex = "".join(
            _TOKEN_SPECS[p][1] if is_token else re.escape(p) for is_token, p in self._parts
        )
        self._regex = re.compile(regex, re.IGNORECASE)

    def _tokenize(self, pattern: str) -> None:
        i = 0
        while i < len(pattern):
            if pattern[i] == "[":
                end = pattern.find("]", i + 1)
                if end != -1:
                    self._append_literal(pattern[i + 1 : end])
                    i = end + 1
                    continue
            token = next((t for t in _TOKENS if pattern.startswith(t, i)), None)
            if token is not None:
                self._parts.append((True, token))
                i += len(token)
                continue
            if pattern[i] in _MOMENT_TOKEN_LETTERS:
                raise ValueError(
                    f"Unsupported token {pattern[i]!r} in date format {pattern!r}"
                )
            self._append_literal(pattern[i])
            i += 1

    def _append_literal(self, text: str) -> None:
        if self._parts and not self._parts[-1][0]:
            self._parts[-1] = (False, self._parts[-1][1] + text)
        else:
            self._parts.append((False, text))

    def parse(self, text: str) -> date | None:
        """Strictly parse text as a date in this format.

        Returns None when the text does not match, names an impossible date,
        repeats a field inconsistently or carries the wrong weekday.
        """
        match = self._regex.fullmatch(text)
        if match is None or self.partial:
            return None

        values: dict[str, int] = {}
        tokens = [p for is_token, p in self._parts if is_token]
        for token, raw in zip(tokens, match.groups(), strict=True):
            field, _regex, convert, _fmt = _TOKEN_SPECS[token]
            value = convert(raw)
            if values.setdefault(field, value) != value:
                return None

        try:
            parsed = date(values["year"], values["month"], values["day"])
        except ValueError:
            return None

        if "weekday" in values and values["weekday"] != parsed.weekday():
            return None
        return parsed

    def format(self, day: date) -> str:
        """Render a date in this format."""
        return "".join(_TOKEN_SPECS[p][3](day) if is_token else p for is_token, p in self._parts)

    def __repr__(self) -> str:
        return f"DatePattern({self.pattern!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DatePattern) and other.pattern == self.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)
