"""Projector: daily + day-specific, rotations resolved, sorted by time."""
import pytest

from rlschedule.errors import ScheduleNotFoundError
from rlschedule.models.schedule import DAY_NAMES, ScheduleDocument
from rlschedule.models.tournament_entry import RotatingTournamentEntry, TournamentEntry
from rlschedule.models.week import WeekLabel
from rlschedule.services.schedule_projector import is_known_day, project_day, resolve_entry


def test_wednesday_with_only_daily_entry():
    """Daily [13:00 Soccar] and no weekday entries -> exactly that entry."""
    document = ScheduleDocument.model_validate(
        {"guaranteedDailyTournaments": [{"time": "13:00", "teamSize": "3v3", "mode": "Soccar"}]}
    )
    schedule = project_day(document, "wednesday", WeekLabel.A)
    assert schedule.known is True
    assert [(e.time, e.mode) for e in schedule.entries] == [("13:00", "Soccar")]


def test_day_merges_daily_and_day_specific_sorted(document):
    schedule = project_day(document, "wednesday", WeekLabel.B)
    assert [e.time for e in schedule.entries] == ["09:30", "13:00", "15:00", "19:00"]
    assert [e.mode for e in schedule.entries] == ["Dropshot", "Soccar", "Rumble", "Soccar"]


@pytest.mark.parametrize("day", DAY_NAMES)
@pytest.mark.parametrize("label", list(WeekLabel))
def test_every_day_is_sorted_and_fully_resolved(document, day, label):
    entries = project_day(document, day, label).entries
    times = [e.time for e in entries]
    assert times == sorted(times)
    assert not any(isinstance(e, RotatingTournamentEntry) for e in entries)
    assert all(e.mode != "varies" for e in entries)


def test_rotating_entry_follows_week_label(document):
    week_a = project_day(document, "wednesday", WeekLabel.A).entries
    week_b = project_day(document, "wednesday", WeekLabel.B).entries
    assert [e.mode for e in week_a if e.time == "15:00"] == ["Hoops"]
    assert [e.mode for e in week_b if e.time == "15:00"] == ["Rumble"]


def test_resolved_entry_gets_rotation_note():
    entry = RotatingTournamentEntry(time="20:00", team_size="2v2", variants={"A": "Snow Day", "B": "Hoops"})
    resolved = resolve_entry(entry, WeekLabel.A)
    assert type(resolved) is TournamentEntry
    assert resolved.mode == "Snow Day"
    assert resolved.notes == "Auto-selected for Week A"


def test_resolved_entry_keeps_existing_notes():
    entry = RotatingTournamentEntry(
        time="20:00", team_size="2v2", variants={"A": "Snow Day", "B": "Hoops"}, notes="Finals night"
    )
    assert resolve_entry(entry, WeekLabel.B).notes == "Finals night (Auto-selected for Week B)"


def test_fixed_entry_passes_through_unchanged():
    entry = TournamentEntry(time="13:00", team_size="3v3", mode="Soccar", notes="Open")
    assert resolve_entry(entry, WeekLabel.A) is entry


def test_rotating_entry_without_label_is_not_found():
    entry = RotatingTournamentEntry(time="20:00", team_size="2v2", variants={"A": "Snow Day", "B": "Hoops"})
    with pytest.raises(ScheduleNotFoundError):
        resolve_entry(entry, None)


def test_fixed_days_project_without_label(document):
    schedule = project_day(document, "monday", None)
    assert [e.time for e in schedule.entries] == ["13:00", "18:00", "19:00"]


def test_day_name_is_case_insensitive(document):
    assert project_day(document, "  SATURDAY ", WeekLabel.A).day == "saturday"
    assert [e.mode for e in project_day(document, "Saturday", WeekLabel.A).entries] == ["Snow Day", "Soccar", "Soccar"]


def test_unknown_day_is_empty_and_flagged(document):
    schedule = project_day(document, "funday", WeekLabel.A)
    assert schedule.known is False
    assert schedule.entries == []
    assert not is_known_day("funday")


def test_valid_day_without_patterns_is_known(document):
    schedule = project_day(document, "tuesday", WeekLabel.A)
    assert schedule.known is True
    assert len(schedule.entries) == 2


def test_projection_does_not_mutate_document(document):
    before = document.model_dump()
    project_day(document, "wednesday", WeekLabel.A)
    project_day(document, "wednesday", WeekLabel.B)
    assert document.model_dump() == before
