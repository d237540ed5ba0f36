"""
Tournament schedule endpoints.

Read-only views over the curated schedule (all / today / upcoming / next /
by day / by mode / daily), plus the update endpoint that swaps in a whole
new schedule document.
"""
import logging
import datetime as dt
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rlschedule.dependencies import get_query_service
from rlschedule.errors import ScheduleNotFoundError
from rlschedule.models.schedule import ScheduleDocument
from rlschedule.models.tournament_entry import ScheduleEntry, TournamentEntry
from rlschedule.routes.week import WeekTrackingResponse
from rlschedule.services.query_service import DayResult, TournamentQueryService
from rlschedule.services.time_filter import NextStatus, TimeUntil

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Response models ──────────────────────────────────────────────────────

class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScheduleOverviewResponse(ApiModel):
    count: int
    last_updated: str
    week_tracking: Optional[WeekTrackingResponse] = None
    guaranteed_daily_tournaments: List[ScheduleEntry]
    stable_weekday_patterns: Dict[str, List[ScheduleEntry]]
    weekend_stable_patterns: Dict[str, List[ScheduleEntry]]


class DayScheduleResponse(ApiModel):
    day: str
    date: Optional[dt.date] = None
    last_updated: str
    tournaments: List[TournamentEntry]
    count: int
    week_tracking: Optional[WeekTrackingResponse] = None


class UpcomingResponse(ApiModel):
    day: str
    current_time: str
    upcoming: List[TournamentEntry]
    count: int


class TimeUntilResponse(ApiModel):
    hours: int
    minutes: int
    total_minutes: int


class RolloverResponse(ApiModel):
    day: str
    tournament: TournamentEntry
    time_until: TimeUntilResponse


class NextTournamentResponse(ApiModel):
    status: NextStatus
    tournament: Optional[TournamentEntry] = None
    time_until: Optional[TimeUntilResponse] = None
    message: Optional[str] = None
    next_refresh: Optional[str] = None
    tomorrow: Optional[RolloverResponse] = None


class ModeResponse(ApiModel):
    mode: str
    tournaments: List[TournamentEntry]
    count: int


class DailyResponse(ApiModel):
    tournaments: List[ScheduleEntry]
    count: int


class UpdateResponse(ApiModel):
    message: str
    count: int
    timestamp: dt.datetime


# ── Helpers ──────────────────────────────────────────────────────────────

def _time_until(value: Optional[TimeUntil]) -> Optional[TimeUntilResponse]:
    if value is None:
        return None
    return TimeUntilResponse(hours=value.hours, minutes=value.minutes, total_minutes=value.total_minutes)


def _day_response(result: DayResult) -> DayScheduleResponse:
    entries = result.schedule.entries
    return DayScheduleResponse(
        day=result.schedule.day,
        date=result.for_date,
        last_updated=result.last_updated,
        tournaments=entries,
        count=len(entries),
        week_tracking=WeekTrackingResponse.from_state(result.week) if result.week else None,
    )


# ── Routes ───────────────────────────────────────────────────────────────

@router.get("/tournaments", response_model=ScheduleOverviewResponse)
def get_all_tournaments(service: TournamentQueryService = Depends(get_query_service)):
    """The whole curated schedule, rotations unresolved"""
    try:
        overview = service.all()
        document = overview.document
        return ScheduleOverviewResponse(
            count=overview.count,
            last_updated=overview.last_updated,
            week_tracking=WeekTrackingResponse.from_state(overview.week) if overview.week else None,
            guaranteed_daily_tournaments=document.guaranteed_daily_tournaments,
            stable_weekday_patterns=document.stable_weekday_patterns,
            weekend_stable_patterns=document.weekend_stable_patterns,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to load schedule overview")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/tournaments/today", response_model=DayScheduleResponse)
def get_today_tournaments(service: TournamentQueryService = Depends(get_query_service)):
    """Today's tournaments, sorted by start time"""
    try:
        return _day_response(service.today())
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to project today's schedule")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/tournaments/upcoming", response_model=UpcomingResponse)
def get_upcoming_tournaments(service: TournamentQueryService = Depends(get_query_service)):
    """Today's tournaments that have not started yet"""
    try:
        result = service.upcoming()
        return UpcomingResponse(
            day=result.day,
            current_time=result.current_time,
            upcoming=result.entries,
            count=len(result.entries),
        )
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to filter upcoming tournaments")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/tournaments/next", response_model=NextTournamentResponse)
def get_next_tournament(service: TournamentQueryService = Depends(get_query_service)):
    """The next tournament to start, or tomorrow's first once today is done"""
    try:
        result = service.next()
        tomorrow = None
        if result.tomorrow:
            tomorrow = RolloverResponse(
                day=result.tomorrow.day,
                tournament=result.tomorrow.entry,
                time_until=_time_until(result.tomorrow.time_until),
            )
        return NextTournamentResponse(
            status=result.status,
            tournament=result.entry,
            time_until=_time_until(result.time_until),
            message=result.message,
            next_refresh=result.next_refresh,
            tomorrow=tomorrow,
        )
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to find next tournament")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/tournaments/day/{day}", response_model=DayScheduleResponse)
def get_tournaments_by_day(day: str, service: TournamentQueryService = Depends(get_query_service)):
    """Schedule for a named day (monday..sunday) in the current rotation week"""
    try:
        return _day_response(service.by_day(day))
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to project schedule for %s", day)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/tournaments/mode/{mode}", response_model=ModeResponse)
def get_tournaments_by_mode(mode: str, service: TournamentQueryService = Depends(get_query_service)):
    """Today's tournaments for one game mode (case-insensitive)"""
    try:
        result = service.by_mode(mode)
        return ModeResponse(mode=result.mode, tournaments=result.entries, count=len(result.entries))
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to filter tournaments by mode %s", mode)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/tournaments/daily", response_model=DailyResponse)
def get_daily_tournaments(service: TournamentQueryService = Depends(get_query_service)):
    """Tournaments guaranteed every day"""
    try:
        entries = service.daily_only()
        return DailyResponse(tournaments=entries, count=len(entries))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to list daily tournaments")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/tournaments/update", response_model=UpdateResponse)
def update_tournaments(document: ScheduleDocument, service: TournamentQueryService = Depends(get_query_service)):
    """Replace the entire schedule. The body is validated before anything changes."""
    try:
        service.replace_schedule(document)
        return UpdateResponse(
            message="Success",
            count=document.entry_count(),
            timestamp=dt.datetime.now(dt.timezone.utc),
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to update tournament data")
        raise HTTPException(status_code=500, detail="Failed to update tournament data")
