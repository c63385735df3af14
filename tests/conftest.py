# ABOUTME: Shared test fixtures for the weather ingestion test suite.
# ABOUTME: Isolates tests from the developer's environment variables and .env files.

import pytest

import weather_ingest.config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Prevent real tokens or .env files from leaking into tests."""
    for key in (weather_ingest.config.TOKEN_KEY, weather_ingest.config.BASE_URL_KEY, weather_ingest.config.TIMEOUT_KEY):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(weather_ingest.config, "load_dotenv", lambda *args, **kwargs: False)
