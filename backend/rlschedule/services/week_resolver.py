"""
Week Resolver
=============
Computes the A/B rotation label for a moment in time.

The rotation is anchored at midnight of a reference date: the week that
starts there carries the reference label, and the label flips every seven
days in both directions. Elapsed time is measured in whole milliseconds and
divided with floor division, so instants before the reference date land in
week -1, -2, ... and keep the same alternation.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from rlschedule.models.week import WeekLabel, WeekState

MS_PER_WEEK = 7 * 24 * 60 * 60 * 1000


def weeks_since(now: datetime, reference_date: date) -> int:
    """Whole weeks between midnight of reference_date and now (negative before it)."""
    reference = datetime.combine(reference_date, time.min, tzinfo=now.tzinfo or timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    elapsed_ms = (now - reference) // timedelta(milliseconds=1)
    return elapsed_ms // MS_PER_WEEK


def label_for_offset(weeks_elapsed: int, reference_label: WeekLabel) -> WeekLabel:
    return reference_label if weeks_elapsed % 2 == 0 else reference_label.other()


def next_monday(now: datetime) -> date:
    """Date of the first Monday strictly after now's date."""
    days_ahead = (7 - now.weekday()) % 7 or 7
    return now.date() + timedelta(days=days_ahead)


def resolve_week(
    now: datetime,
    reference_date: date,
    reference_label: WeekLabel,
    override: Optional[WeekLabel] = None,
) -> WeekState:
    """
    Resolve the rotation state for `now`.

    An override label (set through the week endpoint) replaces the computed
    label; everything else is still derived from the clock.
    """
    weeks_elapsed = weeks_since(now, reference_date)
    label = label_for_offset(weeks_elapsed, reference_label)
    if override is not None:
        label = override

    return WeekState(
        label=label,
        reference_date=reference_date,
        reference_label=reference_label,
        weeks_elapsed=weeks_elapsed,
        week_number=abs(weeks_elapsed),
        last_update=now.date(),
        next_update=next_monday(now),
        calculated_automatically=override is None,
    )
