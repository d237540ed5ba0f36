from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from rlschedule.dependencies import get_clock
from rlschedule.main import app
from rlschedule.models.schedule import ScheduleDocument
from rlschedule.models.week import WeekLabel, WeekTrackingConfig
from rlschedule.services.query_service import TournamentQueryService
from rlschedule.store import ScheduleStore, get_store

# Reference week starts Friday 2025-11-21 and is labeled B.
# WEDNESDAY_AFTERNOON falls in that same week (label B); a week later is A.
WEDNESDAY_AFTERNOON = datetime(2025, 11, 26, 14, 30, tzinfo=timezone.utc)

TEST_SCHEDULE = {
    "weekTracking": {"referenceDate": "2025-11-21", "referenceLabel": "B"},
    "guaranteedDailyTournaments": [
        {"time": "13:00", "teamSize": "3v3", "mode": "Soccar"},
        {"time": "19:00", "teamSize": "2v2", "mode": "Soccar"},
    ],
    "stableWeekdayPatterns": {
        "monday": [{"time": "18:00", "teamSize": "2v2", "mode": "Heatseeker"}],
        "Wednesday": [
            {"time": "15:00", "teamSize": "3v3", "mode": "varies", "weekA": "Hoops", "weekB": "Rumble"},
            {"time": "9:30", "teamSize": "1v1", "mode": "Dropshot", "notes": "Bring a friend"},
        ],
    },
    "weekendStablePatterns": {
        "saturday": [{"time": "11:00", "teamSize": "3v3", "mode": "Snow Day"}],
    },
}


class FrozenClock:
    """Callable clock whose time tests can move by assigning .now"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(name="document")
def document_fixture() -> ScheduleDocument:
    return ScheduleDocument.model_validate(TEST_SCHEDULE)


@pytest.fixture(name="store")
def store_fixture(document: ScheduleDocument) -> ScheduleStore:
    return ScheduleStore(document)


@pytest.fixture(name="clock")
def clock_fixture() -> FrozenClock:
    return FrozenClock(WEDNESDAY_AFTERNOON)


@pytest.fixture(name="service")
def service_fixture(store: ScheduleStore, clock: FrozenClock) -> TournamentQueryService:
    fallback = WeekTrackingConfig(reference_date="2025-11-21", reference_label=WeekLabel.B)
    return TournamentQueryService(store, clock, default_tracking=fallback)


@pytest.fixture(name="client")
def client_fixture(store: ScheduleStore, clock: FrozenClock):
    """Test client wired to the in-memory test store and the frozen clock

    Overrides are installed BEFORE TestClient() and cleared only after it
    exits, so no request ever reaches the packaged schedule or the wall clock.
    """
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
