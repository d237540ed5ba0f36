"""
Schedule Projector
==================
Turns the curated schedule into the concrete list for one day.

    daily-guaranteed  +  day-specific (weekday or weekend pattern)
                             |
                  rotating entries resolved for the week label
                             |
                    sorted by "HH:MM" ascending

Times are normalized to zero-padded 24-hour strings when the schedule is
loaded, so sorting on the raw string is a correct time ordering.
"""

from __future__ import annotations

from typing import List, Optional

from rlschedule.errors import ScheduleNotFoundError
from rlschedule.models.schedule import DAY_NAMES, DaySchedule, ScheduleDocument
from rlschedule.models.tournament_entry import RotatingTournamentEntry, TournamentEntry
from rlschedule.models.week import WeekLabel


def is_known_day(day: str) -> bool:
    return day.strip().lower() in DAY_NAMES


def rotation_note(label: WeekLabel) -> str:
    return f"Auto-selected for Week {label.value}"


def resolve_entry(entry: TournamentEntry, label: Optional[WeekLabel]) -> TournamentEntry:
    """Replace a rotating entry with a fixed one carrying this week's mode."""
    if not isinstance(entry, RotatingTournamentEntry):
        return entry
    if label is None:
        raise ScheduleNotFoundError(
            f"No week tracking configured to pick a mode for the rotating tournament at {entry.time}"
        )

    note = rotation_note(label)
    notes = f"{entry.notes} ({note})" if entry.notes else note
    return TournamentEntry(
        time=entry.time,
        team_size=entry.team_size,
        mode=entry.mode_for(label),
        notes=notes,
        frequency=entry.frequency,
        confidence=entry.confidence,
    )


def sort_by_time(entries: List[TournamentEntry]) -> List[TournamentEntry]:
    return sorted(entries, key=lambda e: e.time)


def project_day(document: ScheduleDocument, day: str, label: Optional[WeekLabel]) -> DaySchedule:
    """
    Build the ordered schedule for `day` (case-insensitive weekday name).

    Unknown names produce an empty schedule with known=False so callers can
    tell "no such day" apart from "nothing scheduled".
    """
    key = day.strip().lower()
    if key not in DAY_NAMES:
        return DaySchedule(day=key, entries=[], known=False)

    entries = list(document.guaranteed_daily_tournaments) + document.day_specific(key)
    resolved = [resolve_entry(entry, label) for entry in entries]
    return DaySchedule(day=key, entries=sort_by_time(resolved), known=True)
