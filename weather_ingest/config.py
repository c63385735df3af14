# ABOUTME: Runtime configuration for the weather API client, read from the environment and .env files.
# ABOUTME: Provides the API token, base URL and request timeout.

import logging
import os
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)

TOKEN_KEY = "FORECA_API_TOKEN"
BASE_URL_KEY = "FORECA_API_BASE_URL"
TIMEOUT_KEY = "FORECA_TIMEOUT"

DEFAULT_BASE_URL = "https://pfa.foreca.com/api/v1"
DEFAULT_TIMEOUT = 15.0


def get_api_token(config_file: str | os.PathLike | None = None) -> str | None:
    """Return the API token from the environment, falling back to a key=value config file.

    Returns None when no non-empty token is configured.
    """
    load_dotenv()
    token = os.environ.get(TOKEN_KEY, "").strip()
    if token:
        return token

    if config_file is not None and Path(config_file).is_file():
        token = (dotenv_values(config_file).get(TOKEN_KEY) or "").strip()
        if token:
            return token

    logger.warning("%s not found in environment or config file", TOKEN_KEY)
    return None


def get_base_url() -> str:
    load_dotenv()
    return os.environ.get(BASE_URL_KEY, DEFAULT_BASE_URL).rstrip("/")


def get_timeout() -> float:
    load_dotenv()
    raw = os.environ.get(TIMEOUT_KEY)
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %.0fs", TIMEOUT_KEY, raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
