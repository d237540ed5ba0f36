"""
Query Service tests

Clock is frozen at Wednesday 2025-11-26 14:30 UTC (week B) unless a test
moves it.
"""

from datetime import date, datetime, timezone

import pytest

from rlschedule.errors import ScheduleNotFoundError
from rlschedule.models.schedule import ScheduleDocument
from rlschedule.models.week import WeekLabel
from rlschedule.services.query_service import TournamentQueryService
from rlschedule.services.time_filter import NextStatus
from rlschedule.store import ScheduleStore


def test_today_projects_current_weekday(service):
    result = service.today()
    assert result.schedule.day == "wednesday"
    assert result.for_date == date(2025, 11, 26)
    assert [e.time for e in result.schedule.entries] == ["09:30", "13:00", "15:00", "19:00"]
    assert result.week.label == WeekLabel.B


def test_today_is_idempotent_within_a_minute(service, clock):
    first = service.today()
    clock.now = clock.now.replace(second=59)
    second = service.today()
    assert first.schedule == second.schedule


def test_upcoming_uses_current_time(service):
    result = service.upcoming()
    assert result.current_time == "14:30"
    assert [e.time for e in result.entries] == ["15:00", "19:00"]


def test_next_found_with_positive_countdown(service):
    result = service.next()
    assert result.status == NextStatus.FOUND
    assert result.entry.time == "15:00"
    assert result.entry.mode == "Rumble"
    assert result.time_until.total_minutes == 30
    assert result.tomorrow is None


def test_next_rolls_over_to_tomorrow(service, clock):
    clock.now = datetime(2025, 11, 26, 23, 30, tzinfo=timezone.utc)
    result = service.next()
    assert result.status == NextStatus.NO_MORE_TODAY
    assert result.entry is None
    assert result.message == "No more tournaments today"
    assert result.tomorrow.day == "thursday"
    assert result.tomorrow.entry.time == "13:00"
    assert result.tomorrow.time_until.total_minutes == 13 * 60 + 30


def test_next_rolls_over_from_sunday_to_monday(service, clock):
    clock.now = datetime(2025, 11, 30, 23, 0, tzinfo=timezone.utc)
    result = service.next()
    assert result.tomorrow.day == "monday"
    assert result.tomorrow.entry.time == "13:00"


def test_by_day_returns_schedule(service):
    result = service.by_day("Monday")
    assert result.schedule.day == "monday"
    assert [e.mode for e in result.schedule.entries] == ["Soccar", "Heatseeker", "Soccar"]
    assert result.for_date is None


def test_by_day_unknown_is_not_found(service):
    with pytest.raises(ScheduleNotFoundError):
        service.by_day("funday")


def test_by_day_valid_but_empty_pattern_is_not_an_error(service):
    result = service.by_day("tuesday")
    assert result.schedule.known is True
    assert len(result.schedule.entries) == 2


def test_by_mode_matches_case_insensitively(service):
    result = service.by_mode("SOCCAR")
    assert result.mode == "soccar"
    assert [e.time for e in result.entries] == ["13:00", "19:00"]


def test_by_mode_matches_resolved_rotation(service, clock):
    assert [e.time for e in service.by_mode("rumble").entries] == ["15:00"]
    assert service.by_mode("hoops").entries == []

    clock.now = datetime(2025, 12, 3, 14, 30, tzinfo=timezone.utc)
    assert [e.time for e in service.by_mode("hoops").entries] == ["15:00"]


def test_daily_only_is_verbatim(service, document):
    assert service.daily_only() == list(document.guaranteed_daily_tournaments)


def test_all_counts_every_entry(service):
    overview = service.all()
    assert overview.count == 6
    assert overview.week.label == WeekLabel.B


def test_week_override_changes_projection(service):
    state = service.set_week_override(WeekLabel.A)
    assert state.label == WeekLabel.A
    assert state.calculated_automatically is False
    assert [e.mode for e in service.today().schedule.entries if e.time == "15:00"] == ["Hoops"]

    state = service.clear_week_override()
    assert state.label == WeekLabel.B
    assert state.calculated_automatically is True


def test_replace_schedule_swaps_whole_document(service):
    replacement = ScheduleDocument.model_validate(
        {"guaranteedDailyTournaments": [{"time": "08:00", "teamSize": "1v1", "mode": "Hoops"}]}
    )
    service.replace_schedule(replacement)
    assert [e.time for e in service.today().schedule.entries] == ["08:00"]
    assert service.by_day("monday").schedule.entries[0].mode == "Hoops"
    assert len(service.by_day("monday").schedule.entries) == 1


def test_no_week_tracking_is_fine_without_rotations(clock):
    document = ScheduleDocument.model_validate(
        {"guaranteedDailyTournaments": [{"time": "13:00", "teamSize": "3v3", "mode": "Soccar"}]}
    )
    service = TournamentQueryService(ScheduleStore(document), clock)
    with pytest.raises(ScheduleNotFoundError):
        service.week()
    # nothing rotates, so projection still works without tracking
    assert len(service.today().schedule.entries) == 1


def test_rotating_schedule_without_tracking_is_not_found(store, clock):
    document = store.document.model_copy(update={"week_tracking": None})
    service = TournamentQueryService(ScheduleStore(document), clock)
    with pytest.raises(ScheduleNotFoundError):
        service.today()
    with pytest.raises(ScheduleNotFoundError):
        service.set_week_override(WeekLabel.A)
    assert service.store.override is None
