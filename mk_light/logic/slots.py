"""
Civil-time slotting for the half-hour outage grid.

The day is split into 48 half-hour slots numbered 1..48:
    00:00-00:30 -> 1, 00:30-01:00 -> 2, ..., 23:30-24:00 -> 48

All wall-clock math happens in one fixed timezone (Europe/Kyiv by default)
which is handed to SlotClock once and never changes.
"""

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from mk_light.core.config import settings
from mk_light.core.models import TimeSeries

logger = logging.getLogger(__name__)

SLOTS_PER_DAY = 48

# Leading "H[:M]" of a slot time like "08:30:00", at most two digits each
SLOT_TIME_PATTERN = re.compile(r"^\s*(\d{1,2})(?!\d)(?::(\d{1,2})(?!\d))?")


def parse_slot_time(text: str) -> tuple[int, int]:
    """
    Parse slot start/end text into hour and minute.

    Parsing is permissive: components that cannot be read default to zero.

    Args:
        text: Time of day, expected "HH:MM:SS"

    Returns:
        (hour, minute) tuple.
    """
    match = SLOT_TIME_PATTERN.match(text or "")
    if not match:
        logger.warning(f"Malformed slot time {text!r}, using 00:00")
        return 0, 0

    hour = int(match.group(1))
    minute_str = match.group(2)
    if minute_str is None:
        logger.warning(f"Slot time {text!r} has no minutes, using {hour:02d}:00")
        return hour, 0
    return hour, int(minute_str)


class SlotClock:
    """
    Maps instants to slot ids and slot start times to instants.

    Attributes:
        tz: Civil timezone used for every conversion
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self._tz = tz or ZoneInfo(settings.TIMEZONE)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        """Current instant in the civil timezone."""
        return datetime.now(self._tz)

    def localize(self, instant: datetime) -> datetime:
        """Convert an instant to the civil timezone (naive values are UTC)."""
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self._tz)

    def slot_index_for(self, instant: datetime) -> int:
        """
        Get slot id (1..48) containing the instant.

        Args:
            instant: Any point in time

        Returns:
            hour * 2 + 1, plus one more for the second half of the hour.
        """
        local = self.localize(instant)
        slot = local.hour * 2 + 1
        if local.minute >= 30:
            slot += 1
        return slot

    def instant_for_slot_today(self, slot: TimeSeries, reference: datetime) -> datetime:
        """
        Get the start of a slot on the civil date of the reference instant.

        Args:
            slot: Time slot whose start text is converted
            reference: Instant selecting the calendar day

        Returns:
            Aware datetime in the civil timezone.
        """
        local = self.localize(reference)
        hour, minute = parse_slot_time(slot.start)
        midnight = datetime(local.year, local.month, local.day, tzinfo=self._tz)
        return midnight + timedelta(hours=hour, minutes=minute)

    def time_until(self, target: datetime, now: datetime) -> timedelta:
        """Elapsed time from now to target, exact across DST changes."""
        return (self.localize(target).astimezone(timezone.utc)
                - self.localize(now).astimezone(timezone.utc))
