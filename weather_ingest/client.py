# ABOUTME: Async client for the weather API: location search, current conditions, daily and hourly forecasts.
# ABOUTME: Attaches the token, validates responses, maps failures to typed errors and probes hourly endpoints.

import asyncio
import logging
import os
from collections.abc import Callable
from urllib.parse import quote

import httpx

from weather_ingest.config import DEFAULT_BASE_URL, get_api_token, get_base_url
from weather_ingest.decoding import decode_current, decode_daily, decode_hourly, decode_locations
from weather_ingest.deps import create_http_client
from weather_ingest.errors import (
    AuthError,
    DecodeError,
    EndpointNotFoundError,
    HttpError,
    InvalidRequestError,
    TransportError,
    WeatherAPIError,
)
from weather_ingest.models import CurrentConditions, DailyForecast, HourlyForecast, Location

logger = logging.getLogger(__name__)

ACCEPT_JSON = {"Accept": "application/json"}

# Candidate locations of the hourly resource, tried in order.
HOURLY_ENDPOINTS = (
    "forecast/hourly/{id}",
    "forecast/hourly/{id}/hourly",
    "forecast/{id}/hourly",
    "hourly/{id}",
)


class WeatherAPIClient:
    """Client for the weather API.

    Holds only the token, base URL and a shared httpx.AsyncClient, so operations
    may run concurrently. Every failure is raised as a WeatherAPIError subclass.
    """

    def __init__(self, http_client: httpx.AsyncClient, token: str | None, base_url: str = DEFAULT_BASE_URL):
        self.http_client = http_client
        self.token = token
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_env(cls, config_file: str | os.PathLike | None = None) -> "WeatherAPIClient":
        """Build a client from environment configuration with a retrying HTTP transport."""
        return cls(create_http_client(), get_api_token(config_file), base_url=get_base_url())

    async def __aenter__(self) -> "WeatherAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def search_locations(self, query: str, limit: int | None = None) -> list[Location]:
        """Search locations by name."""
        return await self._get("location/search/{query}", {"query": query}, decode_locations, limit=limit)

    async def get_current_conditions(self, location_id: str) -> CurrentConditions | None:
        """Fetch current conditions. Returns None when the response carries no observation."""
        return await self._get("current/{id}", {"id": location_id}, decode_current)

    async def get_daily_forecast(self, location_id: str, days: int | None = None) -> list[DailyForecast]:
        return await self._get("forecast/daily/{id}", {"id": location_id}, decode_daily, days=days)

    async def get_hourly_forecast(self, location_id: str, hours: int | None = None) -> list[HourlyForecast]:
        """Fetch the hourly forecast, probing each candidate endpoint in order.

        The first candidate that answers 2xx with a decodable body wins. Failures of
        individual candidates are logged and skipped.

        Raises:
            AuthError: No token is configured.
            InvalidRequestError: The location id cannot form a URL.
            EndpointNotFoundError: Every candidate failed.
        """
        self._require_token()
        for template in HOURLY_ENDPOINTS:
            try:
                result = await self._get(template, {"id": location_id}, decode_hourly, hours=hours)
            except InvalidRequestError:
                raise
            except WeatherAPIError as e:
                logger.warning("Failed to load hourly forecast from %s: %s", template, e)
                continue
            logger.info("Loaded hourly forecast from %s (%d hours)", template, len(result))
            return result

        raise EndpointNotFoundError()

    async def get_current_and_daily(
        self, location_id: str, days: int | None = 7
    ) -> tuple[CurrentConditions | None, list[DailyForecast]]:
        """Fetch current conditions and the daily forecast concurrently.

        Both must succeed; the first failure cancels the other request and is raised.
        """
        tasks = [
            asyncio.ensure_future(self.get_current_conditions(location_id)),
            asyncio.ensure_future(self.get_daily_forecast(location_id, days=days)),
        ]
        try:
            current, daily = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Collect the other outcome so a second failure is not left unretrieved.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return current, daily

    async def _get(self, template: str, path_args: dict[str, str], decode: Callable, **params):
        token = self._require_token()
        url = self._build_url(template, path_args)
        query = {key: value for key, value in params.items() if value is not None}
        query["token"] = token

        try:
            resp = await self.http_client.get(url, params=query, headers=ACCEPT_JSON)
        except httpx.HTTPStatusError as e:
            # Raised by the retrying transport once 429/5xx retries are exhausted.
            raise HttpError(e.response.status_code, await _read_body(e.response)) from e
        except httpx.TransportError as e:
            raise TransportError(e) from e

        if not 200 <= resp.status_code <= 299:
            raise HttpError(resp.status_code, await _read_body(resp))

        try:
            return decode(resp.json())
        except ValueError as e:  # invalid JSON or SchemaError
            logger.debug("Could not decode response from %s with %s: %s", template, decode.__name__, e)
            raise DecodeError(e) from e

    def _require_token(self) -> str:
        if not self.token or not self.token.strip():
            raise AuthError()
        return self.token

    def _build_url(self, template: str, path_args: dict[str, str]) -> str:
        segments = {}
        for name, value in path_args.items():
            value = "" if value is None else str(value)
            if not value.strip():
                raise InvalidRequestError(f"Empty '{name}' path segment.")
            segments[name] = quote(value, safe="")

        url = f"{self.base_url}/{template.format(**segments)}"
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise InvalidRequestError(str(e)) from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidRequestError(f"Not an absolute http(s) URL: {url}")
        return url


async def _read_body(response: httpx.Response) -> str:
    # Responses rejected inside the retrying transport arrive unread.
    try:
        await response.aread()
    except (httpx.StreamError, httpx.TransportError):
        return ""
    return response.text
