"""
Time range parsing.

Course times arrive as text such as "2:00pm - 4:00pm". They are turned into
half-open [start, end) intervals measured in minutes since midnight.

Overlap rule:
    start < other_end AND other_start < end

Touching endpoints (end == start) is NOT an overlap.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from unitplan.exceptions import TimeParseError


_CLOCK_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([ap]m)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class TimeInterval:
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, other: TimeInterval) -> bool:
        return self.start < other.end and other.start < self.end


def parse_clock(text: str) -> int:
    """
    Convert '9am', '9:30am' or '12:15PM' to minutes since midnight.
    Raises TimeParseError for invalid formats.
    """
    match = _CLOCK_RE.match(text or "")
    if not match:
        raise TimeParseError(f"Invalid clock time: {text!r}")

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    suffix = match.group(3).lower()

    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        raise TimeParseError(f"Invalid clock value: {text!r}")

    # 12am is midnight, 12pm is noon
    hour = hour % 12
    if suffix == "pm":
        hour += 12
    return hour * 60 + minute


@lru_cache(maxsize=1024)
def parse_interval(text: str) -> TimeInterval:
    """
    Parse 'H:MMam - H:MMpm' into a TimeInterval.

    The separator is a single '-', spaces around it are optional.
    """
    parts = (text or "").split("-")
    if len(parts) != 2:
        raise TimeParseError(f"Invalid time range: {text!r}")

    start = parse_clock(parts[0])
    end = parse_clock(parts[1])
    if end <= start:
        raise TimeParseError(f"Time range ends before it starts: {text!r}")
    return TimeInterval(start, end)


def format_clock(minutes: int) -> str:
    hour, minute = divmod(minutes, 60)
    suffix = "am" if hour < 12 else "pm"
    hour = hour % 12 or 12
    return f"{hour}:{minute:02d}{suffix}"


def format_interval(interval: TimeInterval) -> str:
    return f"{format_clock(interval.start)} - {format_clock(interval.end)}"
