import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rlschedule.dependencies import get_query_service
from rlschedule.errors import ScheduleNotFoundError
from rlschedule.models.week import WeekLabel, WeekState
from rlschedule.services.query_service import TournamentQueryService

logger = logging.getLogger(__name__)

router = APIRouter()


class WeekTrackingResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_week: WeekLabel
    last_update: date
    next_update: date
    calculated_automatically: bool
    week_number: int
    reference_date: date
    reference_week: WeekLabel

    @classmethod
    def from_state(cls, state: WeekState) -> "WeekTrackingResponse":
        return cls(
            current_week=state.label,
            last_update=state.last_update,
            next_update=state.next_update,
            calculated_automatically=state.calculated_automatically,
            week_number=state.week_number,
            reference_date=state.reference_date,
            reference_week=state.reference_label,
        )


class WeekOverrideRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_week: WeekLabel


@router.get("/week", response_model=WeekTrackingResponse)
def get_week(service: TournamentQueryService = Depends(get_query_service)):
    """Current A/B rotation week"""
    try:
        return WeekTrackingResponse.from_state(service.week())
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to resolve week")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/week", response_model=WeekTrackingResponse)
def override_week(data: WeekOverrideRequest, service: TournamentQueryService = Depends(get_query_service)):
    """Pin the rotation label until cleared or the process restarts"""
    try:
        return WeekTrackingResponse.from_state(service.set_week_override(data.current_week))
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to override week")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/week", response_model=WeekTrackingResponse)
def clear_week_override(service: TournamentQueryService = Depends(get_query_service)):
    """Drop the override and go back to the date-based rotation"""
    try:
        return WeekTrackingResponse.from_state(service.clear_week_override())
    except ScheduleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception("Failed to clear week override")
        raise HTTPException(status_code=500, detail="Internal server error")
