"""Conversion between minute counts and "HH:MM" notation.

Parsing is deliberately lenient, sort of like a microwave oven keypad: only
the digits count, the last two are minutes and everything before them is
hours. ``"12:30"``, ``"1230"`` and ``"h1i2j3k0"`` all mean the same thing.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

MAX_MINUTES = 24 * 60 - 1

_NON_DIGIT_RE = re.compile(r"[^0-9]")
# Leading integer, the way a host-side parseInt reads it
_LEADING_INT_RE = re.compile(r"^\s*([+-]?)([0-9]+)")


@dataclass(frozen=True)
class Suggestion:
    """A candidate value offered to a time input widget."""

    content: str
    annotation: str = ""


def clamp_to_valid_minutes(minutes: int) -> int:
    """Clamp a minute count to 00:00 through 23:59."""
    return max(0, min(minutes, MAX_MINUTES))


def encode(minutes: int) -> str:
    """Notate a nonnegative minute count as "HH:MM".

    The hour part is padded to two digits but never truncated.

    >>> encode(125)
    '02:05'
    """
    hours, remaining = divmod(minutes, 60)
    return f"{hours:02d}:{remaining:02d}"


def decode(text: str) -> int:
    """Interpret a loosely typed time of day as a number of minutes.

    Returns 0 when the text holds no digits. The result is clamped to
    00:00 through 23:59.

    >>> decode("130")
    90
    >>> decode("1230")
    750
    """
    digits = _NON_DIGIT_RE.sub("", text)
    hour_digits, minute_digits = digits[:-2].lstrip("0"), digits[-2:]
    # 100 hours or more is past the end of the day whatever the minutes are
    if len(hour_digits) > 2:
        return MAX_MINUTES
    hours = int(hour_digits) if hour_digits else 0
    minutes = int(minute_digits) if minute_digits else 0
    return clamp_to_valid_minutes(hours * 60 + minutes)


def normalize(text: str) -> str:
    """Canonical "HH:MM" form of whatever was typed."""
    return encode(decode(text))


def _leading_int(text: str) -> int | None:
    """Leading integer of `text`, with magnitudes past a day capped at MAX_MINUTES + 1."""
    match = _LEADING_INT_RE.match(text)
    if match is None:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0")
    value = MAX_MINUTES + 1 if len(digits) > 4 else int(digits or "0")
    return -value if sign == "-" else value


class CutoffSuggestions:
    """Suggestions for a query typed into the cutoff input.

    Iterating is lazy and can be repeated; every pass yields the same items.
    """

    def __init__(self, query: str) -> None:
        self.query = query

    def __iter__(self) -> Iterator[Suggestion]:
        # Always show how the input is being interpreted
        first = Suggestion(content=normalize(self.query))
        yield first

        # Offer the input as a plain minute count too
        if ":" in self.query:
            return
        raw = _leading_int(self.query)
        if raw is None:
            return
        minutes = clamp_to_valid_minutes(raw)
        candidate = Suggestion(content=encode(minutes), annotation=f"= {minutes} minutes")
        if minutes and candidate.content != first.content:
            yield candidate

    def __repr__(self) -> str:
        return f"CutoffSuggestions({self.query!r})"


def suggest(query: str) -> CutoffSuggestions:
    """Return the suggestions for a cutoff input query."""
    return CutoffSuggestions(query)
