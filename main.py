"""
Mykolaiv Outage API

FastAPI application answering "is the power on for my queue?" questions.
Data source: off.energy.mk.ua (Mykolaiv Oblenergo)

Usage:
    python main.py              # Run server on port 8000
    uvicorn main:app --reload   # Development with auto-reload
"""

import logging
from typing import List

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from mk_light.core.config import settings
from mk_light.core.errors import QueueNotFoundError, TransportError
from mk_light.core.models import (
    ActiveSchedule,
    CurrentInfo,
    DailyInfo,
    OutageQueue,
    QueueType,
    RemainingTime,
    TimeSeries,
)
from mk_light.services.outage_service import OutageService

# --- Logging Configuration ---

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# --- App Configuration ---

app = FastAPI(
    title="Mykolaiv Outage API",
    description="API для перевірки графіків відключень електроенергії у Миколаєві",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS - allow all origins for frontend/mobile integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Dependencies ---

service = OutageService()


def _call(query, name: str):
    """Run a queue query, mapping package errors to HTTP errors."""
    try:
        return query(name)
    except QueueNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Чергу {e.name} не знайдено")
    except TransportError:
        logger.exception("Error fetching data from outage API")
        raise HTTPException(status_code=502, detail="Не вдалося отримати дані з сайту")


# --- API Endpoints ---

@app.get("/")
def root() -> dict:
    """Return API info."""
    return {"name": "Mykolaiv Outage API", "version": "1.0.0", "docs": "/docs"}


@app.get("/status")
def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        Service status, upstream URL and civil timezone in use.
    """
    return {
        "status": "healthy",
        "source": service.client.base_url,
        "timezone": str(service.clock.tz),
        "now": service.clock.now().isoformat(),
    }


@app.get("/queues/{queue_type}", response_model=List[OutageQueue])
def get_queues(queue_type: int):
    """
    Get queue catalog.

    **Parameters:**
    - queue_type: 1 (city), 2 (district) or 3 (sub-queue)
    """
    try:
        kind = QueueType(queue_type)
    except ValueError:
        raise HTTPException(status_code=400, detail="Невірний тип черги. Використовуйте: 1, 2 або 3")
    try:
        return service.client.get_outage_queues(kind)
    except TransportError:
        logger.exception("Error fetching queues")
        raise HTTPException(status_code=502, detail="Не вдалося отримати дані з сайту")


@app.get("/time-series", response_model=List[TimeSeries])
def get_time_series():
    """Get the 48 half-hour time slots."""
    try:
        return service.client.get_time_series()
    except TransportError:
        logger.exception("Error fetching time series")
        raise HTTPException(status_code=502, detail="Не вдалося отримати дані з сайту")


@app.get("/schedules/active", response_model=List[ActiveSchedule])
def get_active_schedules():
    """Get currently published schedules as returned by the source."""
    try:
        return service.client.get_active_schedules()
    except TransportError:
        logger.exception("Error fetching schedules")
        raise HTTPException(status_code=502, detail="Не вдалося отримати дані з сайту")


@app.get("/queue/{name}/current", response_model=CurrentInfo)
def get_current(name: str):
    """
    Get current power state for a queue.

    **Response format:**
    ```json
    {
      "queue": {"id": 6, "name": "6.1", "type_id": 3, ...},
      "status": "OFF",
      "probably": false,
      "time_slot": {"id": 17, "start": "08:00:00", "end": "08:30:00"}
    }
    ```
    """
    return _call(service.get_current_info, name)


@app.get("/queue/{name}/daily", response_model=DailyInfo)
def get_daily(name: str):
    """Get state of a queue for every time slot today."""
    return _call(service.get_daily_info, name)


@app.get("/queue/{name}/remaining", response_model=RemainingTime)
def get_remaining(name: str):
    """
    Get time left until the next shutoff today.

    `remaining` is zero when power is already off (status OFF) or when no
    more shutoffs are scheduled today (status ON, no `shutoff_at`).
    """
    return _call(service.get_remaining_time, name)


@app.get("/queue/{name}/tomorrow", response_model=DailyInfo)
def get_tomorrow(name: str):
    """Get state of a queue for every time slot tomorrow."""
    return _call(service.get_tomorrow_daily_info, name)


# --- Entry Point ---

def run() -> None:
    """Run the API server (entry point for CLI)."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
