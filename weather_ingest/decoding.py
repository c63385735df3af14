# ABOUTME: Schema-tolerant decoding of raw API documents into the canonical weather model.
# ABOUTME: Each logical field lists its known wire names in priority order; the first non-null value wins.

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ValidationError

from weather_ingest.models import (
    CurrentConditions,
    DailyForecast,
    HourlyForecast,
    Location,
    WarningText,
    WeatherWarning,
)

LOCATION_COLLECTION = ("locations", "data", "results", "items")
HOURLY_COLLECTION = ("forecast", "data", "hourly", "hours")
DAILY_COLLECTION = ("forecast",)
WARNING_COLLECTION = ("warnings",)

LATITUDE = ("lat", "latitude")
LONGITUDE = ("lon", "longitude")

LOCATION_FIELDS = {
    "name": ("name",),
    "country": ("country",),
    "timezone": ("timezone",),
}

CURRENT_FIELDS = {
    "temperature": ("temperature",),
    "feels_like": ("feelsLike",),
    "wind_speed": ("windSpeed",),
    "wind_direction": ("windDirection",),
    "humidity": ("humidity",),
    "pressure": ("pressure",),
    "dew_point": ("dewPoint",),
    "visibility": ("visibility",),
    "uv_index": ("uvIndex",),
    "cloudiness": ("cloudiness",),
    "precipitation_1h": ("precipitation",),
    "symbol": ("symbol",),
    "symbol_phrase": ("symbolPhrase",),
    "time": ("time",),
}

DAILY_FIELDS = {
    "date": ("date",),
    "max_temp": ("maxTemp",),
    "min_temp": ("minTemp",),
    "symbol": ("symbol",),
    "symbol_phrase": ("symbolPhrase",),
    "precipitation_probability": ("precipitationProbability",),
    "wind_speed": ("windSpeed",),
    "wind_direction": ("windDirection",),
    "precipitation": ("precipitation",),
    "sunrise": ("sunrise",),
    "sunset": ("sunset",),
}

HOURLY_FIELDS = {
    "timestamp": ("time", "timestamp"),
    "temperature": ("temperature",),
    "feels_like": ("feelsLike",),
    "wind_speed": ("windSpeed",),
    "wind_gust": ("windGust",),
    "wind_direction": ("windDir", "windDirection"),
    "precipitation": ("precipitation",),
    "precipitation_probability": ("precipProbability", "precipitationProbability"),
    "cloudiness": ("cloudiness",),
    "uv_index": ("uvIndex",),
    "symbol": ("symbol",),
}

WARNING_FIELDS = {
    "type": ("type",),
    "significance": ("significance",),
    "valid_from": ("validFrom",),
    "valid_until": ("validUntil",),
}

WARNING_TEXT_FIELDS = {
    "lang": ("lang",),
    "text": ("text",),
}


class SchemaError(ValueError):
    """A document does not have the shape of any known schema."""


def first_present(doc: Mapping, aliases: Sequence[str]):
    """Return the value of the first alias present in doc with a non-null value, else None."""
    for key in aliases:
        value = doc.get(key)
        if value is not None:
            return value
    return None


def decode_locations(doc) -> list[Location]:
    """Decode a location search response."""
    return [_decode_location(item) for item in _collection(doc, LOCATION_COLLECTION)]


def decode_current(doc) -> CurrentConditions | None:
    """Decode a current conditions response. Returns None when it carries no 'current' object."""
    raw = first_present(_require_mapping(doc), ("current",))
    if raw is None:
        return None
    return _build(CurrentConditions, CURRENT_FIELDS, _require_mapping(raw))


def decode_daily(doc) -> list[DailyForecast]:
    """Decode a daily forecast response."""
    return [_build(DailyForecast, DAILY_FIELDS, item) for item in _collection(doc, DAILY_COLLECTION)]


def decode_hourly(doc) -> list[HourlyForecast]:
    """Decode an hourly forecast response."""
    return [_build(HourlyForecast, HOURLY_FIELDS, item) for item in _collection(doc, HOURLY_COLLECTION)]


def decode_warnings(doc) -> list[WeatherWarning]:
    """Decode a warnings response, including the localized description texts."""
    result = []
    for item in _collection(doc, WARNING_COLLECTION):
        texts = first_present(item, ("description",)) or []
        if not isinstance(texts, list):
            raise SchemaError(f"Expected a list of warning texts, got {type(texts).__name__}")
        description = [_build(WarningText, WARNING_TEXT_FIELDS, _require_mapping(t)) for t in texts]
        result.append(_build(WeatherWarning, WARNING_FIELDS, item, description=description))
    return result


def _decode_location(raw: Mapping) -> Location:
    coordinates = first_present(raw, ("coordinates",))
    if coordinates is not None:
        coordinates = _require_mapping(coordinates)

    raw_id = raw.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str, type(None))):
        raise SchemaError(f"Location id must be numeric, got {raw_id!r}")

    return _build(
        Location,
        LOCATION_FIELDS,
        raw,
        identifier="" if raw_id is None else str(raw_id),
        latitude=_coordinate(raw, coordinates, LATITUDE),
        longitude=_coordinate(raw, coordinates, LONGITUDE),
    )


def _coordinate(raw: Mapping, nested: Mapping | None, aliases: tuple[str, str]):
    """Resolve one coordinate: flat short name, then nested short name, then nested long name."""
    flat_key = aliases[0]
    value = raw.get(flat_key)
    if value is None and nested is not None:
        value = first_present(nested, aliases)
    return value


def _collection(doc, aliases: Sequence[str]) -> list[Mapping]:
    items = first_present(_require_mapping(doc), aliases)
    if items is None:
        return []
    if not isinstance(items, list):
        raise SchemaError(f"Expected a list under one of {list(aliases)}, got {type(items).__name__}")
    return [_require_mapping(item) for item in items]


def _require_mapping(value) -> Mapping:
    if not isinstance(value, Mapping):
        raise SchemaError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def _build(model: type[BaseModel], fields: Mapping[str, Sequence[str]], raw: Mapping, **resolved):
    values = {name: first_present(raw, aliases) for name, aliases in fields.items()}
    values.update(resolved)
    try:
        return model(**values)
    except ValidationError as e:
        raise SchemaError(f"Invalid {model.__name__} data: {e}") from e
