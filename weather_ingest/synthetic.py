# ABOUTME: Synthetic 24-hour forecast built from a single current conditions snapshot.
# ABOUTME: Stand-in series used when the API provides no hourly data; diurnal sine curves plus bounded noise.

import logging
import math
import random
from datetime import datetime, timedelta

from weather_ingest.models import CurrentConditions, HourlyForecast

logger = logging.getLogger(__name__)

HOURS = 24
DEFAULT_TEMPERATURE = 20.0
DEFAULT_WIND_SPEED = 5.0
DEFAULT_SYMBOL = "cloudy"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def generate_hourly(
    current: CurrentConditions,
    start: datetime | None = None,
    rng: random.Random | None = None,
) -> list[HourlyForecast]:
    """Generate a plausible hourly forecast for the 24 hours following start.

    Temperature follows a sine curve peaking at 18:00 around the current temperature,
    wind a smaller curve around the current wind speed, and precipitation chance is
    higher at night. Pass a seeded rng for reproducible output.

    Args:
        current: Snapshot providing base temperature, wind speed and symbol.
        start: First hour of the series. Defaults to now.
        rng: Random source. Defaults to a fresh unseeded generator.
    """
    start = start or datetime.now()
    rng = rng or random.Random()
    base_temp = current.temperature if current.temperature is not None else DEFAULT_TEMPERATURE
    base_wind = current.wind_speed if current.wind_speed is not None else DEFAULT_WIND_SPEED
    symbol = current.symbol or DEFAULT_SYMBOL

    logger.debug("Generating synthetic hourly data: base temp %.1f, wind %.1f", base_temp, base_wind)

    result = []
    for i in range(HOURS):
        moment = start + timedelta(hours=i)
        hour = moment.hour
        day_curve = math.sin((hour - 6) * math.pi / 12)

        temperature = base_temp + day_curve * 8 + rng.uniform(-2, 2)
        wind_speed = max(0.0, base_wind + rng.uniform(-1, 1) + math.sin(hour * math.pi / 12) * 2)
        wind_speed = round(wind_speed, 1)
        if hour < 6 or hour > 18:
            precip_probability = rng.uniform(10, 40)
        else:
            precip_probability = rng.uniform(0, 20)

        result.append(
            HourlyForecast(
                timestamp=moment.strftime(TIMESTAMP_FORMAT),
                temperature=round(temperature, 1),
                feels_like=round(temperature + rng.uniform(-2, 2), 1),
                wind_speed=wind_speed,
                wind_gust=round(wind_speed + rng.uniform(0, 3), 1),
                wind_direction=rng.random() * 360,
                precipitation=rng.uniform(0, 0.3),
                precipitation_probability=precip_probability,
                cloudiness=rng.uniform(30, 90),
                uv_index=max(0.0, min(10.0, rng.uniform(0, 8) + day_curve * 3)),
                symbol=symbol,
            )
        )
    return result
