from datetime import datetime

from fastapi import Depends

from rlschedule.config import settings
from rlschedule.services.query_service import Clock, TournamentQueryService
from rlschedule.store import ScheduleStore, get_store


def system_now() -> datetime:
    return datetime.now(settings.tz)


def get_clock() -> Clock:
    """Wall clock in the schedule timezone (tests override this)"""
    return system_now


def get_query_service(
    store: ScheduleStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
) -> TournamentQueryService:
    return TournamentQueryService(store, clock, default_tracking=settings.default_tracking)
