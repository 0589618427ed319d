"""
HTTP client for the Mykolaiv Oblenergo outage API (off.energy.mk.ua).

Endpoints:
    /api/outage-queue/by-type/{type}  - queue catalog (1=city, 2=district, 3=sub)
    /api/schedule/time-series         - 48 half-hour time slots
    /api/v2/schedule/active           - currently published schedules
"""

import logging
from typing import Any, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from mk_light.core.config import settings
from mk_light.core.errors import TransportError
from mk_light.core.models import ActiveSchedule, OutageQueue, QueueType, TimeSeries

logger = logging.getLogger(__name__)


class OblenergoClient:
    """
    Thin wrapper over the outage API returning decoded records.

    Every call performs one request. Failures of any kind (network,
    non-200 status, bad JSON, unexpected payload) raise TransportError.

    Attributes:
        base_url: API root URL
        timeout: Request timeout in seconds
    """

    HEADERS = {"Accept": "application/json"}

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT

    def _get(self, path: str) -> Any:
        """
        GET a path and decode the JSON body.

        Raises:
            TransportError: If the request fails or the body is not JSON.
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(url, headers=self.HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Unexpected status {response.status_code} from {url}")
            raise TransportError(f"unexpected status {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise TransportError(f"invalid JSON from {path}") from e

        logger.debug(f"Fetched {url} ({len(response.content)} bytes)")
        return data

    def _decode(self, model: Any, data: Any, path: str) -> Any:
        try:
            return TypeAdapter(model).validate_python(data)
        except ValidationError as e:
            logger.error(f"Unexpected payload from {path}: {e}")
            raise TransportError(f"unexpected payload from {path}") from e

    def get_outage_queues(self, queue_type: QueueType) -> List[OutageQueue]:
        """
        Get queue catalog of one type.

        Args:
            queue_type: QueueType.CITY, DISTRICT or SUB
        """
        path = f"/api/outage-queue/by-type/{int(queue_type)}"
        return self._decode(List[OutageQueue], self._get(path), path)

    def get_city_queues(self) -> List[OutageQueue]:
        return self.get_outage_queues(QueueType.CITY)

    def get_district_queues(self) -> List[OutageQueue]:
        return self.get_outage_queues(QueueType.DISTRICT)

    def get_sub_queues(self) -> List[OutageQueue]:
        return self.get_outage_queues(QueueType.SUB)

    def get_time_series(self) -> List[TimeSeries]:
        """Get all 48 half-hour time slots."""
        path = "/api/schedule/time-series"
        return self._decode(List[TimeSeries], self._get(path), path)

    def get_active_schedules(self) -> List[ActiveSchedule]:
        """Get currently published outage schedules, in service order."""
        path = "/api/v2/schedule/active"
        schedules = self._decode(List[ActiveSchedule], self._get(path), path)
        logger.info(f"Fetched {len(schedules)} active schedule(s)")
        return schedules
