# ABOUTME: Typed error taxonomy raised by the weather API client.
# ABOUTME: Every client failure surfaces as one WeatherAPIError subclass with a readable message.


class WeatherAPIError(Exception):
    """Base class for all weather API client failures."""


class AuthError(WeatherAPIError):
    """The API token is missing or empty. Raised before any network call."""

    def __init__(self):
        super().__init__("API token is missing. Please check your configuration.")


class InvalidRequestError(WeatherAPIError):
    """A request URL could not be constructed."""

    def __init__(self, detail: str | None = None):
        message = "Invalid URL format."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class EndpointNotFoundError(WeatherAPIError):
    """Every candidate path of the hourly forecast probe failed."""

    def __init__(self):
        super().__init__("Hourly forecast endpoint not found.")


class HttpError(WeatherAPIError):
    """The API answered with a status outside 200-299."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP Error {status_code}: {body}")


class DecodeError(WeatherAPIError):
    """The response body did not match any known schema."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}")


class TransportError(WeatherAPIError):
    """The request never produced a response (connection failure, timeout)."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Network request failed: {cause}")
