import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from mk_light.core.errors import QueueNotFoundError
from mk_light.core.models import (
    ActiveSchedule,
    CurrentInfo,
    DailyInfo,
    DailySlot,
    OutageQueue,
    PowerStatus,
    QueueType,
    RemainingTime,
    TimeSeries,
)
from mk_light.logic.client import OblenergoClient
from mk_light.logic.schedules import (
    active_schedule_for_now,
    entries_for_queue,
    entry_status,
    schedule_for_tomorrow,
)
from mk_light.logic.slots import SLOTS_PER_DAY, SlotClock

logger = logging.getLogger(__name__)


def _slot_or_blank(slots_by_id: dict[int, TimeSeries], slot_id: int) -> TimeSeries:
    # Slot missing from the grid: empty start text parses as midnight
    slot = slots_by_id.get(slot_id)
    if slot is None:
        return TimeSeries(id=slot_id, start="", end="")
    return slot


class OutageService:
    def __init__(
        self,
        client: Optional[OblenergoClient] = None,
        clock: Optional[SlotClock] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.client = client or OblenergoClient()
        self.clock = clock or SlotClock()
        self._now = now or self.clock.now

    def _current_time(self) -> datetime:
        # Naive values from the injected callable are UTC instants
        return self.clock.localize(self._now())

    def find_queue(self, name: str) -> OutageQueue:
        """
        Шукає чергу за назвою у каталогах міста, району та підчерг (саме в такому порядку).
        Каталоги завантажуються заново при кожному виклику.
        """
        for queue_type in QueueType:
            for queue in self.client.get_outage_queues(queue_type):
                if queue.name == name:
                    return queue
        logger.info(f"Queue {name!r} not found in any catalog")
        raise QueueNotFoundError(name)

    def _load(self, name: str) -> tuple[OutageQueue, List[TimeSeries], List[ActiveSchedule]]:
        queue = self.find_queue(name)
        time_series = self.client.get_time_series()
        schedules = self.client.get_active_schedules()
        return queue, time_series, schedules

    def get_current_info(self, name: str) -> CurrentInfo:
        """Стан живлення черги у поточному півгодинному слоті"""
        queue, time_series, schedules = self._load(name)

        now = self._current_time()
        slot_id = self.clock.slot_index_for(now)
        current_slot = _slot_or_blank({ts.id: ts for ts in time_series}, slot_id)

        info = CurrentInfo(queue=queue, status=PowerStatus.ON, probably=False, time_slot=current_slot)

        schedule = active_schedule_for_now(schedules, now)
        if schedule is not None:
            for entry in schedule.series:
                if entry.outage_queue_id == queue.id and entry.time_series_id == slot_id:
                    info.status, info.probably = entry_status(entry.type)
                    break

        return info

    def _daily(self, queue: OutageQueue, time_series: List[TimeSeries],
               schedule: Optional[ActiveSchedule]) -> DailyInfo:
        entries = entries_for_queue(schedule, queue.id)
        slots_by_id = {ts.id: ts for ts in time_series}
        slots = []
        for slot_id in range(1, SLOTS_PER_DAY + 1):
            row = DailySlot(time_slot=_slot_or_blank(slots_by_id, slot_id), status=PowerStatus.ON, probably=False)
            entry = entries.get(slot_id)
            if entry is not None:
                row.status, row.probably = entry_status(entry.type)
            slots.append(row)
        return DailyInfo(queue=queue, slots=slots)

    def get_daily_info(self, name: str) -> DailyInfo:
        """Таблиця стану на всі 48 слотів сьогодні (за активним графіком)"""
        queue, time_series, schedules = self._load(name)
        schedule = active_schedule_for_now(schedules, self._current_time())
        return self._daily(queue, time_series, schedule)

    def get_tomorrow_daily_info(self, name: str) -> DailyInfo:
        """Таблиця стану на всі 48 слотів завтра"""
        queue, time_series, schedules = self._load(name)
        schedule = schedule_for_tomorrow(schedules, self._current_time())
        return self._daily(queue, time_series, schedule)

    def get_remaining_time(self, name: str) -> RemainingTime:
        """
        Скільки часу лишилось до наступного відключення сьогодні.
        Якщо світла вже немає - remaining = 0 і час відключення не вказується.
        """
        queue, time_series, schedules = self._load(name)

        now = self._current_time()
        current_slot_id = self.clock.slot_index_for(now)
        entries = entries_for_queue(active_schedule_for_now(schedules, now), queue.id)

        result = RemainingTime(queue=queue, status=PowerStatus.ON)

        # Світла немає вже зараз
        entry = entries.get(current_slot_id)
        if entry is not None:
            result.status, result.probably = entry_status(entry.type)
            result.remaining = timedelta(0)
            return result

        slots_by_id = {ts.id: ts for ts in time_series}
        for slot_id in range(current_slot_id + 1, SLOTS_PER_DAY + 1):
            if slot_id in entries:
                slot = _slot_or_blank(slots_by_id, slot_id)
                shutoff_at = self.clock.instant_for_slot_today(slot, now)
                result.remaining = self.clock.time_until(shutoff_at, now)
                result.shutoff_at = shutoff_at
                result.shutoff_slot = slot
                return result

        # До кінця доби відключень немає
        result.remaining = timedelta(0)
        return result
