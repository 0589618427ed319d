"""
Schedule selection and outage classification.

The service may publish several schedules at once (usually today's and
tomorrow's). Selection follows the order the service returns them in.
"""

from datetime import datetime
from typing import Optional, Sequence

from mk_light.core.models import (
    ActiveSchedule,
    OutageType,
    PowerStatus,
    ScheduleEntry,
)


def active_schedule_for_now(
    schedules: Sequence[ActiveSchedule], now: datetime
) -> Optional[ActiveSchedule]:
    """
    Get the schedule whose [from, to) range contains now.

    Falls back to the last schedule when none matches.

    Returns:
        Matching schedule, or None for empty input.
    """
    for schedule in schedules:
        if schedule.contains(now):
            return schedule
    if schedules:
        return schedules[-1]
    return None


def schedule_for_tomorrow(
    schedules: Sequence[ActiveSchedule], now: datetime
) -> Optional[ActiveSchedule]:
    """
    Get the schedule that covers the next day.

    That is the first schedule, other than the current one, starting at or
    after now. Falls back to the last schedule, since a lone published
    schedule may already be tomorrow's.
    """
    current = active_schedule_for_now(schedules, now)
    for schedule in schedules:
        if current is not None and schedule.id == current.id:
            continue
        if schedule.valid_from >= now:
            return schedule
    if schedules:
        return schedules[-1]
    return None


def entry_status(category: str) -> tuple[PowerStatus, bool]:
    """
    Convert an outage category to (status, probably) pair.

    Unknown categories are reported as a certain outage.
    """
    if category == OutageType.PROBABLY_OFF:
        return PowerStatus.OFF, True
    if category in (OutageType.OFF, OutageType.SURE_OFF):
        return PowerStatus.OFF, False
    return PowerStatus.OFF, False


def entries_for_queue(
    schedule: Optional[ActiveSchedule], queue_id: int
) -> dict[int, ScheduleEntry]:
    """Index a schedule's entries for one queue by time slot id."""
    if schedule is None:
        return {}
    return {
        entry.time_series_id: entry
        for entry in schedule.series
        if entry.outage_queue_id == queue_id
    }
