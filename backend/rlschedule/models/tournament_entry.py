from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator, model_validator
from pydantic.alias_generators import to_camel

from rlschedule.models.week import WeekLabel
from rlschedule.utils.times import normalize_time

ROTATING_MODE = "varies"

# Flat per-label fields used by hand-written schedule files ({"weekA": "Hoops", "weekB": "Rumble"})
_LEGACY_VARIANT_FIELDS = {"weekA": WeekLabel.A, "weekB": WeekLabel.B}


class TournamentEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    time: str
    team_size: str
    mode: str
    notes: Optional[str] = None
    frequency: Optional[str] = None
    confidence: Optional[float] = Field(default=None, ge=0, le=1)

    @field_validator("time", mode="before")
    @classmethod
    def _normalize_time(cls, value: Any) -> str:
        return normalize_time(value)

    @field_validator("team_size", "mode")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


class RotatingTournamentEntry(TournamentEntry):
    """A tournament whose mode alternates with the A/B week rotation"""

    mode: str = ROTATING_MODE
    variants: Dict[WeekLabel, str]

    @model_validator(mode="before")
    @classmethod
    def _collect_legacy_variants(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        legacy = {label: data[key] for key, label in _LEGACY_VARIANT_FIELDS.items() if key in data}
        if not legacy:
            return data
        data = {k: v for k, v in data.items() if k not in _LEGACY_VARIANT_FIELDS}
        variants = dict(data.get("variants") or {})
        for label, mode in legacy.items():
            variants.setdefault(label, mode)
        data["variants"] = variants
        return data

    @field_validator("mode")
    @classmethod
    def _placeholder_mode(cls, value: str) -> str:
        if value.strip().lower() != ROTATING_MODE:
            raise ValueError(f"rotating tournaments use the placeholder mode '{ROTATING_MODE}', got '{value}'")
        return ROTATING_MODE

    @model_validator(mode="after")
    def _require_every_label(self):
        missing = [label.value for label in WeekLabel if not (self.variants.get(label) or "").strip()]
        if missing:
            raise ValueError(f"rotating tournament at {self.time} is missing a mode for week {', '.join(missing)}")
        return self

    def mode_for(self, label: WeekLabel) -> str:
        return self.variants[label]


def _entry_kind(value: Any) -> str:
    if isinstance(value, RotatingTournamentEntry):
        return "rotating"
    if isinstance(value, TournamentEntry):
        return "fixed"
    if isinstance(value, dict):
        if "variants" in value or any(key in value for key in _LEGACY_VARIANT_FIELDS):
            return "rotating"
        if str(value.get("mode", "")).strip().lower() == ROTATING_MODE:
            return "rotating"
    return "fixed"


ScheduleEntry = Annotated[
    Union[
        Annotated[RotatingTournamentEntry, Tag("rotating")],
        Annotated[TournamentEntry, Tag("fixed")],
    ],
    Discriminator(_entry_kind),
]
