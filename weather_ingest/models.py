# ABOUTME: Pydantic BaseModels forming the canonical weather model.
# ABOUTME: Immutable snapshots of locations, conditions, forecasts and warnings, independent of wire field names.

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class Location(_Snapshot):
    """A location returned by the search endpoint."""

    identifier: str = ""
    name: str | None = None
    country: str | None = None
    timezone: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class CurrentConditions(_Snapshot):
    """Observed conditions at a location. Any field may be missing."""

    temperature: float | None = None
    feels_like: float | None = None
    wind_speed: float | None = None
    wind_direction: int | None = None
    humidity: int | None = None
    pressure: float | None = None
    dew_point: float | None = None
    visibility: float | None = None
    uv_index: float | None = None
    cloudiness: float | None = None
    precipitation_1h: float | None = None
    symbol: str | None = None
    symbol_phrase: str | None = None
    time: str | None = None


class DailyForecast(_Snapshot):
    """One day of forecast data, identified by its date string."""

    date: str | None = None
    max_temp: float | None = None
    min_temp: float | None = None
    symbol: str | None = None
    symbol_phrase: str | None = None
    precipitation_probability: int | None = Field(default=None, ge=0, le=100)
    wind_speed: float | None = None
    wind_direction: int | None = None
    precipitation: float | None = None
    sunrise: str | None = None
    sunset: str | None = None

    _placeholder_id: str = PrivateAttr(default_factory=lambda: uuid4().hex)

    @property
    def identifier(self) -> str:
        """The date, or a placeholder unique to this entry when the date is missing."""
        return self.date or self._placeholder_id


class HourlyForecast(_Snapshot):
    """One hour of forecast data, identified by its timestamp string."""

    timestamp: str | None = None
    temperature: float | None = None
    feels_like: float | None = None
    wind_speed: float | None = None
    wind_gust: float | None = None
    wind_direction: float | None = None
    precipitation: float | None = None
    precipitation_probability: float | None = Field(default=None, ge=0, le=100)
    cloudiness: float | None = None
    uv_index: float | None = None
    symbol: str | None = None

    _placeholder_id: str = PrivateAttr(default_factory=lambda: uuid4().hex)

    @property
    def identifier(self) -> str:
        return self.timestamp or self._placeholder_id


class WarningText(_Snapshot):
    lang: str | None = None
    text: str | None = None


class WeatherWarning(_Snapshot):
    """A weather hazard warning with its validity window and localized texts."""

    type: str | None = None
    significance: str | None = None
    valid_from: str | None = None
    valid_until: str | None = None
    description: list[WarningText] = []

    @property
    def identifier(self) -> str:
        # Display-only key: two warnings sharing type and window collide.
        return (self.type or "") + (self.valid_from or "") + (self.valid_until or "")

    def text_for(self, lang: str) -> str | None:
        """Return the warning text in the given language, else the first available text."""
        texts = [d for d in self.description if d.text]
        for item in texts:
            if item.lang == lang:
                return item.text
        return texts[0].text if texts else None


class WeatherReport(_Snapshot):
    """Current conditions with daily and hourly forecasts for one location."""

    current: CurrentConditions | None = None
    daily: list[DailyForecast] = []
    hourly: list[HourlyForecast] = []
    hourly_is_synthetic: bool = False
