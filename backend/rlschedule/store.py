import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from rlschedule.config import settings
from rlschedule.errors import InvalidScheduleError
from rlschedule.models.schedule import ScheduleDocument
from rlschedule.models.week import WeekLabel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeekOverride:
    label: WeekLabel
    set_at: datetime


def parse_schedule(data: Any) -> ScheduleDocument:
    """Validate a raw schedule payload, raising InvalidScheduleError on bad shape"""
    if not isinstance(data, dict):
        raise InvalidScheduleError("Schedule document must be a JSON object")
    try:
        return ScheduleDocument.model_validate(data)
    except ValidationError as e:
        raise InvalidScheduleError(str(e)) from e


def load_schedule_file(path: Union[str, Path]) -> ScheduleDocument:
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidScheduleError(f"{path} is not valid JSON: {e}") from e
    return parse_schedule(raw)


class ScheduleStore:
    """
    Owns the current schedule document and the optional week-label override.

    Readers grab the current references without locking; both are replaced
    wholesale under the write lock, never mutated in place.
    """

    def __init__(self, document: Optional[ScheduleDocument] = None):
        self._document = document or ScheduleDocument()
        self._override: Optional[WeekOverride] = None
        self._last_updated = datetime.now(timezone.utc)
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ScheduleStore":
        document = load_schedule_file(path)
        logger.info("Loaded %d tournaments from %s", document.entry_count(), path)
        return cls(document)

    @property
    def document(self) -> ScheduleDocument:
        return self._document

    @property
    def override(self) -> Optional[WeekOverride]:
        return self._override

    @property
    def last_updated(self) -> str:
        return self._document.last_update or self._last_updated.isoformat()

    def replace(self, document: ScheduleDocument) -> ScheduleDocument:
        """Swap in a complete new schedule. No merging with the previous one."""
        with self._lock:
            self._document = document
            self._last_updated = datetime.now(timezone.utc)
        logger.info("Schedule replaced: %d tournaments", document.entry_count())
        return document

    def set_week_override(self, label: WeekLabel) -> WeekOverride:
        override = WeekOverride(label=label, set_at=datetime.now(timezone.utc))
        with self._lock:
            self._override = override
        logger.info("Week label overridden to %s", label.value)
        return override

    def clear_week_override(self) -> None:
        with self._lock:
            self._override = None
        logger.info("Week label override cleared")


_store: Optional[ScheduleStore] = None
_store_lock = threading.Lock()


def get_store() -> ScheduleStore:
    """Process-wide store, loaded from SCHEDULE_PATH on first use"""
    global _store
    with _store_lock:
        if _store is None:
            _store = ScheduleStore.from_file(settings.schedule_path)
        return _store
