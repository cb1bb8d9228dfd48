# ABOUTME: Exception hierarchy for weather queries.
# ABOUTME: Separates transport failures, unknown locations, and undecodable responses.


class WeatherError(Exception):
    """Base class for every failure surfaced by weathercli."""


class TransportError(WeatherError):
    """The HTTP call failed or returned a non-2xx status.

    ``status_code`` is None when no response was received at all.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        if self.status_code is None:
            return super().__str__()
        return f"{super().__str__()}: {self.status_code} {self.body}".rstrip()


class LocationNotFoundError(WeatherError):
    """Geocoding returned zero results for a query."""

    def __init__(self, query: str):
        super().__init__(f"location not found: {query}")
        self.query = query


class DecodeError(WeatherError):
    """A response body could not be turned into domain models."""
