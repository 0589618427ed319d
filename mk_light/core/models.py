"""
Pydantic models for outage service records and query results.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QueueType(IntEnum):
    """Queue catalog kind. Declaration order is the lookup order."""
    CITY = 1
    DISTRICT = 2
    SUB = 3


class OutageType(str, Enum):
    """Known outage categories of a schedule entry."""
    OFF = "OFF"
    PROBABLY_OFF = "PROBABLY_OFF"
    SURE_OFF = "SURE_OFF"


class PowerStatus(str, Enum):
    ON = "ON"
    OFF = "OFF"


class OutageQueue(BaseModel):
    """Single outage queue (city, district or sub-queue)."""
    id: int
    name: str
    type_id: int
    enabled: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted: int = 0

    @property
    def is_enabled(self) -> bool:
        return self.enabled == 1


class TimeSeries(BaseModel):
    """Half-hour time slot of the day (ids 1..48)."""
    id: int
    start: str  # HH:MM:SS
    end: str    # HH:MM:SS
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ScheduleEntry(BaseModel):
    """Outage event for one queue in one time slot."""
    id: int = 0
    outage_schedule_id: int = 0
    time_series_id: int
    outage_queue_id: int
    type: str  # raw category, see OutageType
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ActiveSchedule(BaseModel):
    """Published outage plan valid for [from, to)."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    valid_from: datetime = Field(alias="from")
    valid_to: datetime = Field(alias="to")
    series: List[ScheduleEntry] = []

    @field_validator("series", mode="before")
    @classmethod
    def null_series(cls, value: Any) -> Any:
        # "series": null is a schedule without entries
        if value is None:
            return []
        return value

    @field_validator("valid_from", "valid_to")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Timestamps without an offset are UTC instants
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def contains(self, instant: datetime) -> bool:
        return self.valid_from <= instant < self.valid_to


class CurrentInfo(BaseModel):
    """Power state of a queue in the current time slot."""
    queue: OutageQueue
    status: PowerStatus
    probably: bool = False
    time_slot: TimeSeries


class DailySlot(BaseModel):
    time_slot: TimeSeries
    status: PowerStatus
    probably: bool = False


class DailyInfo(BaseModel):
    """Full-day table of a queue, one row per time slot."""
    queue: OutageQueue
    slots: List[DailySlot]


class RemainingTime(BaseModel):
    """Time left until the next shutoff of a queue today."""
    queue: OutageQueue
    status: PowerStatus
    probably: bool = False
    remaining: timedelta = timedelta(0)
    shutoff_at: Optional[datetime] = None
    shutoff_slot: Optional[TimeSeries] = None
