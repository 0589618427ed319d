"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os
from datetime import datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mk_light.core.models import (
    ActiveSchedule,
    OutageQueue,
    QueueType,
    ScheduleEntry,
    TimeSeries,
)
from mk_light.logic.client import OblenergoClient
from mk_light.logic.slots import SlotClock

KYIV_TZ = ZoneInfo("Europe/Kyiv")


def kyiv(year, month, day, hour=0, minute=0, second=0) -> datetime:
    """Aware datetime in Kyiv time."""
    return datetime(year, month, day, hour, minute, second, tzinfo=KYIV_TZ)


def build_time_series() -> list[TimeSeries]:
    """48 slots: id 1 = 00:00:00-00:30:00 ... id 48 = 23:30:00-00:00:00."""
    slots = []
    for i in range(48):
        start_h, start_m = divmod(i * 30, 60)
        end_h, end_m = divmod((i + 1) * 30 % (24 * 60), 60)
        slots.append(TimeSeries(
            id=i + 1,
            start=f"{start_h:02d}:{start_m:02d}:00",
            end=f"{end_h:02d}:{end_m:02d}:00",
        ))
    return slots


def make_schedule(schedule_id, valid_from, valid_to, entries=()) -> ActiveSchedule:
    """
    Build a schedule.

    Args:
        entries: Iterable of (queue_id, time_series_id, type) tuples
    """
    return ActiveSchedule(
        id=schedule_id,
        valid_from=valid_from,
        valid_to=valid_to,
        series=[
            ScheduleEntry(
                id=n,
                outage_schedule_id=schedule_id,
                outage_queue_id=queue_id,
                time_series_id=slot_id,
                type=kind,
            )
            for n, (queue_id, slot_id, kind) in enumerate(entries, start=1)
        ],
    )


CITY_QUEUES = [OutageQueue(id=1, name="1", type_id=1)]
DISTRICT_QUEUES = [OutageQueue(id=2, name="Заводський", type_id=2)]
SUB_QUEUES = [
    OutageQueue(id=6, name="6.1", type_id=3),
    OutageQueue(id=7, name="6.2", type_id=3),
]


@pytest.fixture
def clock():
    """Slot clock pinned to Europe/Kyiv."""
    return SlotClock(KYIV_TZ)


@pytest.fixture
def time_series():
    return build_time_series()


@pytest.fixture
def today_schedule():
    """Schedule for 2026-10-18 with queue 6.1 off in slot 17 (08:00-08:30)."""
    return make_schedule(
        100,
        kyiv(2026, 10, 18),
        kyiv(2026, 10, 19),
        entries=[(6, 17, "OFF")],
    )


@pytest.fixture
def tomorrow_schedule():
    """Schedule for 2026-10-19 with queue 6.1 off in slots 1-2 (probably) and 40."""
    return make_schedule(
        101,
        kyiv(2026, 10, 19),
        kyiv(2026, 10, 20),
        entries=[(6, 1, "PROBABLY_OFF"), (6, 2, "PROBABLY_OFF"), (6, 40, "SURE_OFF")],
    )


@pytest.fixture
def fake_client(time_series, today_schedule, tomorrow_schedule):
    """OblenergoClient mock serving fixed catalogs and schedules."""
    catalogs = {
        QueueType.CITY: CITY_QUEUES,
        QueueType.DISTRICT: DISTRICT_QUEUES,
        QueueType.SUB: SUB_QUEUES,
    }
    client = MagicMock(spec=OblenergoClient)
    client.base_url = "https://off.energy.mk.ua"
    client.get_outage_queues.side_effect = lambda queue_type: catalogs[queue_type]
    client.get_time_series.return_value = time_series
    client.get_active_schedules.return_value = [today_schedule, tomorrow_schedule]
    return client
