from rlschedule.models.schedule import DAY_NAMES, WEEKDAY_NAMES, WEEKEND_NAMES, DaySchedule, ScheduleDocument
from rlschedule.models.tournament_entry import (
    ROTATING_MODE,
    RotatingTournamentEntry,
    ScheduleEntry,
    TournamentEntry,
)
from rlschedule.models.week import WeekLabel, WeekState, WeekTrackingConfig

__all__ = [
    "DAY_NAMES",
    "WEEKDAY_NAMES",
    "WEEKEND_NAMES",
    "DaySchedule",
    "ScheduleDocument",
    "ROTATING_MODE",
    "RotatingTournamentEntry",
    "ScheduleEntry",
    "TournamentEntry",
    "WeekLabel",
    "WeekState",
    "WeekTrackingConfig",
]
