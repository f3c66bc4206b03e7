"""
Clock-time arithmetic on "HH:MM" strings.

Everything here is total: malformed input degrades to 0 / False instead of
raising, because punch exports contain hand-edited cells.
"""

from __future__ import annotations

import re
from typing import Optional

from punchclock.services.calculations import round_half_up

MINUTES_PER_DAY = 24 * 60

_COLON_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")
_COMPACT_RE = re.compile(r"^(\d{2})(\d{2})$")
_TOKEN_RE = re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?\b")


def _split(value: object) -> Optional[tuple[int, int]]:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    match = _COLON_RE.match(cleaned) or _COMPACT_RE.match(cleaned)
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def is_valid_time(value: object) -> bool:
    """True for "H:MM", "HH:MM", "HH:MM:SS" and "HHMM" within a 24h clock."""
    return _split(value) is not None


def parse_time(value: object) -> int:
    """Minutes since midnight; 0 when the value cannot be parsed."""
    parts = _split(value)
    if parts is None:
        return 0
    hours, minutes = parts
    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: object) -> Optional[str]:
    """Canonical "HH:MM" form, or None for malformed input."""
    if not is_valid_time(value):
        return None
    return format_time(parse_time(value))


def is_after(t1: str, t2: str) -> bool:
    return parse_time(t1) > parse_time(t2)


def is_before(t1: str, t2: str) -> bool:
    return parse_time(t1) < parse_time(t2)


def duration_minutes(first: Optional[str], last: Optional[str]) -> int:
    """Minutes from first to last, wrapping past midnight for overnight shifts."""
    if not first or not last:
        return 0
    delta = parse_time(last) - parse_time(first)
    if delta < 0:
        delta += MINUTES_PER_DAY
    return delta


def duration_hours(first: Optional[str], last: Optional[str]) -> float:
    return round_half_up(duration_minutes(first, last) / 60, 2)


def late_minutes(actual: str, expected: str) -> int:
    return max(0, parse_time(actual) - parse_time(expected))


def early_minutes(actual: str, expected: str) -> int:
    return max(0, parse_time(expected) - parse_time(actual))


def format_duration(hours: float) -> str:
    """8.75 -> "8h 45m"."""
    total = int(round(hours * 60))
    return f"{total // 60}h {total % 60:02d}m"


def extract_times(cell: object) -> list[str]:
    """
    Pull every clock time out of a free-form cell such as "09:41 09:43".

    Returns canonical "HH:MM" strings in the order they appear.
    """
    if cell is None:
        return []
    text = str(cell)
    result: list[str] = []
    for token in _TOKEN_RE.findall(text):
        normalized = normalize_time(token)
        if normalized is not None:
            result.append(normalized)
    return result
