# ABOUTME: Factory for the shared httpx.AsyncClient used by the weather API client.
# ABOUTME: Wraps the transport with tenacity retries for transient network errors and 429/5xx responses.

import httpx
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt

from weather_ingest.config import get_timeout


def raise_for_transient_status(response: httpx.Response) -> None:
    """Raise for 429 and 5xx responses so they are retried.

    Other error statuses are returned to the caller untouched, which lets the hourly
    endpoint probe move on to its next candidate without waiting.
    """
    if response.status_code == 429 or response.status_code >= 500:
        response.raise_for_status()


def create_http_client(
    timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries connection errors, timeouts, and 429/5xx responses, honouring Retry-After.
    transport replaces the default network transport underneath the retry layer.
    """
    retrying = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout, httpx.HTTPStatusError)),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(3),
            reraise=True,
        ),
        wrapped=transport,
        validate_response=raise_for_transient_status,
    )
    return httpx.AsyncClient(
        transport=retrying,
        timeout=timeout if timeout is not None else get_timeout(),
    )
