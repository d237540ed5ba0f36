"""
Canonical parser for tournament start times.

Every time that enters the schedule is normalized to a zero-padded 24-hour
"HH:MM" string so that plain string comparison orders entries correctly
("09:00" < "13:00", where "9:00" > "13:00" would not be).
"""
import re
from datetime import datetime
from typing import Tuple

_TIME_RE = re.compile(
    r"^\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?\s*(?P<ampm>[AaPp][Mm])?\s*$"
)


def normalize_time(value: str) -> str:
    """
    Normalize a time string to "HH:MM".

    - "9:00"     -> "09:00"
    - "13:00:00" -> "13:00"
    - "1:00PM"   -> "13:00"
    - "12:30 am" -> "00:30"

    Raises ValueError for anything else.
    """
    if not isinstance(value, str):
        raise ValueError(f"Time must be a string, got {type(value).__name__}")

    match = _TIME_RE.match(value)
    if not match:
        raise ValueError(f"Cannot parse time '{value}'. Expected HH:MM (24-hour) or h:MM AM/PM")

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    ampm = match.group("ampm")

    if ampm:
        if not 1 <= hour <= 12:
            raise ValueError(f"Hour out of range in 12-hour time '{value}'")
        hour = hour % 12
        if ampm.lower() == "pm":
            hour += 12
    elif hour > 23:
        raise ValueError(f"Hour out of range in time '{value}'")

    if minute > 59:
        raise ValueError(f"Minute out of range in time '{value}'")

    return f"{hour:02d}:{minute:02d}"


def parse_hhmm(value: str) -> Tuple[int, int]:
    """Split a normalized "HH:MM" string into (hour, minute)."""
    hour, minute = value.split(":")
    return int(hour), int(minute)


def format_hhmm(moment: datetime) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}"
