# ABOUTME: Loads a full weather report for one location: current, daily, and a best-effort hourly series.
# ABOUTME: Hourly data starts synthetic and is replaced by a background fetch when the API provides it.

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from weather_ingest.client import WeatherAPIClient
from weather_ingest.errors import WeatherAPIError
from weather_ingest.models import HourlyForecast, WeatherReport
from weather_ingest.synthetic import generate_hourly

logger = logging.getLogger(__name__)


class WeatherLoader:
    """Loads weather for a location and refines the hourly series in the background.

    load() returns as soon as current conditions and the daily forecast are in,
    with a synthetic hourly series. It then starts refresh_task, which asks the API
    for real hourly data and hands a non-empty result to on_hourly. Failures of the
    background fetch are logged and dropped.
    """

    def __init__(
        self,
        service: WeatherAPIClient,
        location_id: str,
        on_hourly: Callable[[list[HourlyForecast]], None] | None = None,
        days: int = 7,
        hours: int = 24,
    ):
        self.service = service
        self.location_id = location_id
        self.on_hourly = on_hourly
        self.days = days
        self.hours = hours
        self.refresh_task: asyncio.Task | None = None

    async def load(self, start: datetime | None = None) -> WeatherReport:
        """Fetch current conditions and daily forecast, both required, and start the hourly refresh."""
        logger.info("Loading weather for location %s", self.location_id)
        current, daily = await self.service.get_current_and_daily(self.location_id, days=self.days)

        hourly = generate_hourly(current, start=start) if current is not None else []
        report = WeatherReport(current=current, daily=daily, hourly=hourly, hourly_is_synthetic=bool(hourly))

        if self.refresh_task is not None and not self.refresh_task.done():
            self.refresh_task.cancel()
        self.refresh_task = asyncio.create_task(self._refresh_hourly())
        return report

    async def _refresh_hourly(self) -> list[HourlyForecast] | None:
        try:
            hourly = await self.service.get_hourly_forecast(self.location_id, hours=self.hours)
        except WeatherAPIError as e:
            logger.warning("Hourly forecast not available for %s: %s", self.location_id, e)
            return None

        if not hourly:
            return None
        logger.info("Real hourly data received: %d hours", len(hourly))
        if self.on_hourly is not None:
            try:
                self.on_hourly(hourly)
            except Exception:
                logger.exception("Hourly update handler failed for %s", self.location_id)
                return None
        return hourly
