"""
Query Service

Answers every read the API exposes by composing the store, the week
resolver, the projector and the time filter. Each public method reads the
clock exactly once and works on one snapshot of the store, so a single call
never mixes two different "now"s or two different schedules.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

from rlschedule.errors import ScheduleNotFoundError
from rlschedule.models.schedule import DAY_NAMES, DaySchedule, ScheduleDocument
from rlschedule.models.tournament_entry import TournamentEntry
from rlschedule.models.week import WeekLabel, WeekState, WeekTrackingConfig
from rlschedule.services.schedule_projector import project_day
from rlschedule.services.time_filter import NextStatus, NextTournament, TimeUntil, find_next, time_until, upcoming
from rlschedule.services.week_resolver import resolve_week
from rlschedule.store import ScheduleStore
from rlschedule.utils.times import format_hhmm

Clock = Callable[[], datetime]

NO_MORE_TODAY_MESSAGE = "No more tournaments today"
NEXT_REFRESH_MESSAGE = "Check again tomorrow"


@dataclass(frozen=True)
class ScheduleOverview:
    document: ScheduleDocument
    count: int
    last_updated: str
    week: Optional[WeekState]


@dataclass(frozen=True)
class DayResult:
    schedule: DaySchedule
    for_date: Optional[date]
    last_updated: str
    week: Optional[WeekState]


@dataclass(frozen=True)
class UpcomingResult:
    day: str
    current_time: str
    entries: List[TournamentEntry]


@dataclass(frozen=True)
class Rollover:
    day: str
    entry: TournamentEntry
    time_until: TimeUntil


@dataclass(frozen=True)
class NextResult:
    status: NextStatus
    entry: Optional[TournamentEntry] = None
    time_until: Optional[TimeUntil] = None
    message: Optional[str] = None
    next_refresh: Optional[str] = None
    tomorrow: Optional[Rollover] = None


@dataclass(frozen=True)
class ModeResult:
    mode: str
    entries: List[TournamentEntry]


def weekday_name(moment: datetime) -> str:
    return DAY_NAMES[moment.weekday()]


class TournamentQueryService:
    def __init__(self, store: ScheduleStore, clock: Clock, default_tracking: Optional[WeekTrackingConfig] = None):
        self.store = store
        self.clock = clock
        self.default_tracking = default_tracking

    # ── Week ──────────────────────────────────────────────────────────────

    def _tracking(self, document: ScheduleDocument) -> Optional[WeekTrackingConfig]:
        return document.week_tracking or self.default_tracking

    def _week_state(self, document: ScheduleDocument, now: datetime) -> Optional[WeekState]:
        tracking = self._tracking(document)
        if tracking is None:
            return None
        override = self.store.override
        return resolve_week(
            now,
            tracking.reference_date,
            tracking.reference_label,
            override=override.label if override else None,
        )

    def _label(self, document: ScheduleDocument, now: datetime) -> Optional[WeekLabel]:
        state = self._week_state(document, now)
        if state is not None:
            return state.label
        override = self.store.override
        return override.label if override else None

    def week(self) -> WeekState:
        state = self._week_state(self.store.document, self.clock())
        if state is None:
            raise ScheduleNotFoundError("No week tracking configured")
        return state

    # ── Reads ─────────────────────────────────────────────────────────────

    def all(self) -> ScheduleOverview:
        document = self.store.document
        return ScheduleOverview(
            document=document,
            count=document.entry_count(),
            last_updated=self.store.last_updated,
            week=self._week_state(document, self.clock()),
        )

    def _day(self, document: ScheduleDocument, day: str, now: datetime) -> DaySchedule:
        return project_day(document, day, self._label(document, now))

    def today(self) -> DayResult:
        now = self.clock()
        document = self.store.document
        return DayResult(
            schedule=self._day(document, weekday_name(now), now),
            for_date=now.date(),
            last_updated=self.store.last_updated,
            week=self._week_state(document, now),
        )

    def upcoming(self) -> UpcomingResult:
        now = self.clock()
        current_time = format_hhmm(now)
        schedule = self._day(self.store.document, weekday_name(now), now)
        return UpcomingResult(day=schedule.day, current_time=current_time, entries=upcoming(schedule.entries, current_time))

    def next(self) -> NextResult:
        """
        The next tournament still to start today.

        When today is done, the first tournament of tomorrow is attached as a
        rollover, with its countdown running across midnight.
        """
        now = self.clock()
        document = self.store.document
        schedule = self._day(document, weekday_name(now), now)
        found: NextTournament = find_next(schedule, format_hhmm(now), now)

        if found.status == NextStatus.FOUND:
            return NextResult(status=found.status, entry=found.entry, time_until=found.time_until)

        tomorrow_date = now + timedelta(days=1)
        tomorrow = self._day(document, weekday_name(tomorrow_date), tomorrow_date)
        rollover = None
        if tomorrow.entries:
            first = tomorrow.entries[0]
            rollover = Rollover(day=tomorrow.day, entry=first, time_until=time_until(first.time, now, day_offset=1))

        return NextResult(
            status=found.status,
            message=NO_MORE_TODAY_MESSAGE,
            next_refresh=NEXT_REFRESH_MESSAGE,
            tomorrow=rollover,
        )

    def by_day(self, day: str) -> DayResult:
        now = self.clock()
        document = self.store.document
        schedule = self._day(document, day, now)
        if not schedule.known:
            raise ScheduleNotFoundError(f"Unknown day '{day}'. Expected one of: {', '.join(DAY_NAMES)}")
        return DayResult(
            schedule=schedule,
            for_date=None,
            last_updated=self.store.last_updated,
            week=self._week_state(document, now),
        )

    def by_mode(self, mode: str) -> ModeResult:
        """Today's tournaments (rotations already resolved) whose mode matches, ignoring case"""
        now = self.clock()
        wanted = mode.strip().lower()
        schedule = self._day(self.store.document, weekday_name(now), now)
        return ModeResult(mode=wanted, entries=[e for e in schedule.entries if e.mode.lower() == wanted])

    def daily_only(self) -> List[TournamentEntry]:
        return list(self.store.document.guaranteed_daily_tournaments)

    # ── Writes ────────────────────────────────────────────────────────────

    def replace_schedule(self, document: ScheduleDocument) -> ScheduleDocument:
        return self.store.replace(document)

    def set_week_override(self, label: WeekLabel) -> WeekState:
        if self._tracking(self.store.document) is None:
            raise ScheduleNotFoundError("No week tracking configured")
        self.store.set_week_override(label)
        return self.week()

    def clear_week_override(self) -> WeekState:
        self.store.clear_week_override()
        return self.week()
