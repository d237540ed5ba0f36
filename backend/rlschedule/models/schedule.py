from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from rlschedule.models.tournament_entry import ScheduleEntry, TournamentEntry
from rlschedule.models.week import WeekTrackingConfig

# Ordered to match datetime.weekday() (Monday == 0)
WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday")
WEEKEND_NAMES = ("saturday", "sunday")
DAY_NAMES = WEEKDAY_NAMES + WEEKEND_NAMES


def _normalize_day_keys(patterns: Dict[str, list], allowed: tuple, bucket: str) -> Dict[str, list]:
    normalized: Dict[str, list] = {}
    for day, entries in patterns.items():
        key = day.strip().lower()
        if key not in allowed:
            raise ValueError(f"'{day}' is not a valid {bucket} day (expected one of: {', '.join(allowed)})")
        if key in normalized:
            raise ValueError(f"day '{key}' appears more than once")
        normalized[key] = entries
    return normalized


class ScheduleDocument(BaseModel):
    """The whole curated schedule, as loaded from disk or received on the update endpoint"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="forbid")

    guaranteed_daily_tournaments: List[ScheduleEntry] = Field(default_factory=list)
    stable_weekday_patterns: Dict[str, List[ScheduleEntry]] = Field(default_factory=dict)
    weekend_stable_patterns: Dict[str, List[ScheduleEntry]] = Field(default_factory=dict)
    week_tracking: Optional[WeekTrackingConfig] = None
    last_update: Optional[str] = None

    @field_validator("stable_weekday_patterns")
    @classmethod
    def _weekday_keys(cls, value: Dict[str, list]) -> Dict[str, list]:
        return _normalize_day_keys(value, WEEKDAY_NAMES, "weekday")

    @field_validator("weekend_stable_patterns")
    @classmethod
    def _weekend_keys(cls, value: Dict[str, list]) -> Dict[str, list]:
        return _normalize_day_keys(value, WEEKEND_NAMES, "weekend")

    def day_specific(self, day: str) -> List[TournamentEntry]:
        if day in WEEKEND_NAMES:
            return list(self.weekend_stable_patterns.get(day, []))
        return list(self.stable_weekday_patterns.get(day, []))

    def entry_count(self) -> int:
        total = len(self.guaranteed_daily_tournaments)
        total += sum(len(entries) for entries in self.stable_weekday_patterns.values())
        total += sum(len(entries) for entries in self.weekend_stable_patterns.values())
        return total


@dataclass(frozen=True)
class DaySchedule:
    day: str
    entries: List[TournamentEntry] = field(default_factory=list)
    known: bool = True
