# ABOUTME: Contract tests for the schema-tolerant decoder.
# ABOUTME: Validates alias priority for collections, coordinates and renamed fields, and schema failures.

import pytest

from weather_ingest.decoding import (
    SchemaError,
    decode_current,
    decode_daily,
    decode_hourly,
    decode_locations,
    decode_warnings,
    first_present,
)


class TestFirstPresent:
    def test_skips_missing_and_null(self):
        assert first_present({"a": None, "b": 0, "c": 1}, ("x", "a", "b", "c")) == 0

    def test_returns_none_when_nothing_present(self):
        assert first_present({"a": None}, ("a", "b")) is None


class TestDecodeLocations:
    @pytest.mark.parametrize("key", ["locations", "data", "results", "items"])
    def test_each_collection_alias_alone(self, key):
        """Any single collection alias populates the location list.

        Implementation: Decodes a document holding only one of the four aliases.
        Passing implies: Lower-priority aliases are still recognized.
        """
        result = decode_locations({key: [{"id": 100658225, "name": "Helsinki"}]})

        assert len(result) == 1
        assert result[0].identifier == "100658225"
        assert result[0].name == "Helsinki"

    def test_higher_priority_alias_wins(self):
        """'locations' wins over 'data', 'results' and 'items' when several are present.

        Implementation: Decodes a document containing all four aliases with different entries.
        Passing implies: Alias order is honoured, not document order.
        """
        result = decode_locations(
            {
                "items": [{"name": "Items"}],
                "results": [{"name": "Results"}],
                "data": [{"name": "Data"}],
                "locations": [{"name": "Locations"}],
            }
        )
        assert [loc.name for loc in result] == ["Locations"]

    def test_null_alias_falls_through(self):
        result = decode_locations({"locations": None, "results": [{"name": "Tampere"}]})
        assert [loc.name for loc in result] == ["Tampere"]

    def test_no_collection_gives_empty_list(self):
        assert decode_locations({}) == []
        assert decode_locations({"unrelated": 1}) == []

    def test_missing_id_gives_empty_identifier(self):
        result = decode_locations({"locations": [{"name": "Nowhere"}]})
        assert result[0].identifier == ""

    def test_flat_coordinates(self):
        result = decode_locations({"locations": [{"id": 1, "lat": 60.17, "lon": 24.94}]})
        assert result[0].latitude == 60.17
        assert result[0].longitude == 24.94

    def test_nested_short_coordinates(self):
        result = decode_locations({"locations": [{"id": 1, "coordinates": {"lat": 60.17, "lon": 24.94}}]})
        assert (result[0].latitude, result[0].longitude) == (60.17, 24.94)

    def test_nested_long_coordinates_match_flat(self):
        """Flat lat/lon and nested latitude/longitude resolve to identical coordinates.

        Implementation: Decodes the same position in both wire shapes.
        Passing implies: Consumers never see which shape the API used.
        """
        flat = decode_locations({"locations": [{"id": 1, "lat": 60.17, "lon": 24.94}]})[0]
        nested = decode_locations({"locations": [{"id": 1, "coordinates": {"latitude": 60.17, "longitude": 24.94}}]})[0]

        assert (flat.latitude, flat.longitude) == (nested.latitude, nested.longitude)
        assert flat == nested

    def test_flat_coordinates_take_precedence(self):
        """Flat lat/lon beat nested short names, which beat nested long names.

        Implementation: Provides all three coordinate shapes with different values.
        Passing implies: Coordinate resolution order is flat, nested short, nested long.
        """
        raw = {
            "lat": 1.0,
            "lon": 2.0,
            "coordinates": {"lat": 3.0, "lon": 4.0, "latitude": 5.0, "longitude": 6.0},
        }
        result = decode_locations({"locations": [raw]})[0]
        assert (result.latitude, result.longitude) == (1.0, 2.0)

        del raw["lat"], raw["lon"]
        result = decode_locations({"locations": [raw]})[0]
        assert (result.latitude, result.longitude) == (3.0, 4.0)

    def test_absent_coordinates(self):
        result = decode_locations({"locations": [{"id": 1}]})[0]
        assert result.latitude is None
        assert result.longitude is None

    def test_unknown_fields_ignored(self):
        result = decode_locations({"locations": [{"id": 7, "adminArea": "Uusimaa", "population": 650000}]})
        assert result[0].identifier == "7"

    def test_collection_must_be_list(self):
        with pytest.raises(SchemaError):
            decode_locations({"locations": {"id": 1}})

    def test_document_must_be_object(self):
        with pytest.raises(SchemaError):
            decode_locations(["not", "an", "object"])


class TestDecodeCurrent:
    def test_maps_camel_case_fields(self):
        """decode_current maps wire names onto the canonical fields.

        Implementation: Decodes a realistic current conditions document.
        Passing implies: Each wire field lands on its snake_case counterpart.
        """
        result = decode_current(
            {
                "current": {
                    "time": "2025-09-09T14:30:00Z",
                    "symbol": "d300",
                    "symbolPhrase": "cloudy",
                    "temperature": 15.4,
                    "feelsLike": 14.1,
                    "windSpeed": 4,
                    "windDirection": 230,
                    "humidity": 72,
                    "pressure": 1012.3,
                    "dewPoint": 10.2,
                    "visibility": 35000,
                    "uvIndex": 2,
                    "cloudiness": 88,
                }
            }
        )
        assert result.temperature == 15.4
        assert result.feels_like == 14.1
        assert result.wind_direction == 230
        assert result.dew_point == 10.2
        assert result.symbol_phrase == "cloudy"
        assert result.time == "2025-09-09T14:30:00Z"

    def test_precipitation_maps_to_precipitation_1h(self):
        result = decode_current({"current": {"precipitation": 0.4}})
        assert result.precipitation_1h == 0.4

    def test_missing_current_gives_none(self):
        assert decode_current({}) is None
        assert decode_current({"current": None}) is None

    def test_empty_current_is_valid(self):
        result = decode_current({"current": {}})
        assert result is not None
        assert result.temperature is None

    def test_wrong_type_raises_schema_error(self):
        """A value that cannot be coerced to its field type is a schema error.

        Implementation: Sends a non-numeric temperature.
        Passing implies: Type mismatches surface as SchemaError, not pydantic internals.
        """
        with pytest.raises(SchemaError):
            decode_current({"current": {"temperature": "warm"}})


class TestDecodeDaily:
    def test_decodes_forecast_list(self):
        result = decode_daily(
            {
                "forecast": [
                    {
                        "date": "2025-09-09",
                        "maxTemp": 18,
                        "minTemp": 9,
                        "precipitationProbability": 40,
                        "sunrise": "06:31:00",
                        "sunset": "20:02:00",
                    },
                    {"date": "2025-09-10", "maxTemp": 17},
                ]
            }
        )
        assert [d.date for d in result] == ["2025-09-09", "2025-09-10"]
        assert result[0].max_temp == 18.0
        assert result[0].precipitation_probability == 40
        assert result[0].sunset == "20:02:00"

    def test_missing_forecast_gives_empty_list(self):
        assert decode_daily({}) == []


class TestDecodeHourly:
    @pytest.mark.parametrize("key", ["forecast", "data", "hourly", "hours"])
    def test_each_collection_alias_alone(self, key):
        result = decode_hourly({key: [{"time": "2025-09-09T14:00:00", "temperature": 16.0}]})
        assert len(result) == 1
        assert result[0].timestamp == "2025-09-09T14:00:00"

    def test_higher_priority_alias_wins(self):
        """'forecast' wins over 'data', 'hourly' and 'hours'.

        Implementation: Decodes a document holding all four collection aliases.
        Passing implies: The hourly alias order is honoured.
        """
        result = decode_hourly(
            {
                "hours": [{"time": "hours"}],
                "hourly": [{"time": "hourly"}],
                "data": [{"time": "data"}],
                "forecast": [{"time": "forecast"}],
            }
        )
        assert [h.timestamp for h in result] == ["forecast"]

    def test_data_wins_over_hourly(self):
        result = decode_hourly({"hourly": [{"time": "hourly"}], "data": [{"time": "data"}]})
        assert [h.timestamp for h in result] == ["data"]

    def test_field_aliases(self):
        """Hourly entries accept both historical names for direction and probability.

        Implementation: Decodes one entry using short names and one using long names.
        Passing implies: Both spellings fill the same canonical fields, short names first.
        """
        result = decode_hourly(
            {
                "forecast": [
                    {"time": "a", "windDir": 90, "precipProbability": 30},
                    {"timestamp": "b", "windDirection": 180, "precipitationProbability": 60},
                    {"time": "c", "timestamp": "ignored", "windDir": 10, "windDirection": 20},
                ]
            }
        )
        assert (result[0].wind_direction, result[0].precipitation_probability) == (90, 30)
        assert (result[1].timestamp, result[1].wind_direction, result[1].precipitation_probability) == ("b", 180, 60)
        assert (result[2].timestamp, result[2].wind_direction) == ("c", 10)

    def test_empty_collection_is_valid(self):
        assert decode_hourly({"forecast": []}) == []

    def test_entry_must_be_object(self):
        with pytest.raises(SchemaError):
            decode_hourly({"forecast": [1, 2, 3]})


class TestDecodeWarnings:
    def test_decodes_warnings_with_texts(self):
        result = decode_warnings(
            {
                "warnings": [
                    {
                        "type": "wind",
                        "significance": "moderate",
                        "validFrom": "2025-09-09T06:00",
                        "validUntil": "2025-09-09T18:00",
                        "description": [{"lang": "en", "text": "Strong winds"}],
                    }
                ]
            }
        )
        assert len(result) == 1
        assert result[0].significance == "moderate"
        assert result[0].identifier == "wind2025-09-09T06:002025-09-09T18:00"
        assert result[0].text_for("en") == "Strong winds"

    def test_missing_description(self):
        result = decode_warnings({"warnings": [{"type": "frost"}]})
        assert result[0].description == []

    def test_description_must_be_list(self):
        with pytest.raises(SchemaError):
            decode_warnings({"warnings": [{"type": "frost", "description": "cold"}]})
