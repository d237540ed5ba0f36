"""
Time Filter

Splits a day's schedule around the current time. The upcoming/past split
compares "HH:MM" strings directly (an entry starting this very minute still
counts as upcoming); only the countdown parses times into numbers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional, Tuple

from rlschedule.models.schedule import DaySchedule
from rlschedule.models.tournament_entry import TournamentEntry
from rlschedule.utils.times import parse_hhmm


class NextStatus(str, Enum):
    FOUND = "found"
    NO_MORE_TODAY = "no_more_today"
    INVALID_DAY = "invalid_day"


@dataclass(frozen=True)
class TimeUntil:
    hours: int
    minutes: int
    total_minutes: int


@dataclass(frozen=True)
class NextTournament:
    status: NextStatus
    entry: Optional[TournamentEntry] = None
    time_until: Optional[TimeUntil] = None


def upcoming(entries: List[TournamentEntry], current_time: str) -> List[TournamentEntry]:
    return [e for e in entries if e.time >= current_time]


def past(entries: List[TournamentEntry], current_time: str) -> List[TournamentEntry]:
    return [e for e in entries if e.time < current_time]


def partition(entries: List[TournamentEntry], current_time: str) -> Tuple[List[TournamentEntry], List[TournamentEntry]]:
    """Return (past, upcoming), each keeping the input order."""
    return past(entries, current_time), upcoming(entries, current_time)


def time_until(tournament_time: str, now: datetime, day_offset: int = 0) -> TimeUntil:
    """
    Countdown from `now` to `tournament_time` on now's date (plus day_offset days).

    Negative when the start is already behind `now`; hours and minutes then
    carry the same sign as the total.
    """
    hour, minute = parse_hhmm(tournament_time)
    start = now.replace(hour=hour, minute=minute, second=0, microsecond=0) + timedelta(days=day_offset)
    # Same-zone subtraction is wall-clock time; go through UTC to count real elapsed minutes
    elapsed = start.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    total_minutes = math.floor(elapsed.total_seconds() / 60)

    hours, minutes = divmod(abs(total_minutes), 60)
    sign = -1 if total_minutes < 0 else 1
    return TimeUntil(hours=sign * hours, minutes=sign * minutes, total_minutes=total_minutes)


def find_next(schedule: DaySchedule, current_time: str, now: datetime) -> NextTournament:
    if not schedule.known:
        return NextTournament(status=NextStatus.INVALID_DAY)

    remaining = upcoming(schedule.entries, current_time)
    if not remaining:
        return NextTournament(status=NextStatus.NO_MORE_TODAY)

    entry = remaining[0]
    return NextTournament(status=NextStatus.FOUND, entry=entry, time_until=time_until(entry.time, now))
