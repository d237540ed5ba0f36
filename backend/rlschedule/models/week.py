from dataclasses import dataclass
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WeekLabel(str, Enum):
    A = "A"
    B = "B"

    def other(self) -> "WeekLabel":
        return WeekLabel.B if self is WeekLabel.A else WeekLabel.A


class WeekTrackingConfig(BaseModel):
    """Anchor for the A/B rotation: the label that applies in the week starting at reference_date"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    reference_date: date
    reference_label: WeekLabel


@dataclass(frozen=True)
class WeekState:
    label: WeekLabel
    reference_date: date
    reference_label: WeekLabel
    weeks_elapsed: int
    week_number: int
    last_update: date
    next_update: date
    calculated_automatically: bool = True
