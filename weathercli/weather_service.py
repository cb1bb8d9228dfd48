# ABOUTME: Service layer for Open-Meteo API calls.
# ABOUTME: Handles geocoding, current conditions, and forecast retrieval, delegating parsing to the decoder.

import logging
import math
import re

import httpx

from weathercli.decoder import Mode, decode_current, decode_forecast, decode_locations
from weathercli.deps import WeatherDeps
from weathercli.errors import LocationNotFoundError, TransportError
from weathercli.models import CurrentWeather, Forecast, Location

logger = logging.getLogger(__name__)

MAX_FORECAST_DAYS = 16
SEARCH_COUNT = 10

CURRENT_PARAMS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation,rain,"
    "snowfall,weather_code,cloud_cover,pressure_msl,surface_pressure,"
    "wind_speed_10m,wind_direction_10m,uv_index"
)

HOURLY_PARAMS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation_probability,"
    "precipitation,rain,snowfall,weather_code,pressure_msl,cloud_cover,"
    "wind_speed_10m,wind_direction_10m,uv_index"
)

DAILY_PARAMS = (
    "temperature_2m_max,temperature_2m_min,apparent_temperature_max,apparent_temperature_min,"
    "sunrise,sunset,uv_index_max,precipitation_sum,rain_sum,snowfall_sum,"
    "precipitation_probability_max,weather_code,wind_speed_10m_max,wind_direction_10m_dominant"
)

_COORDINATES = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


async def search_locations(deps: WeatherDeps, query: str, count: int = SEARCH_COUNT) -> list[Location]:
    """Geocode free text into locations ranked by relevance, best match first.

    Raises LocationNotFoundError when the provider has no match.
    """
    body = await _get(
        deps,
        f"{deps.geo_base_url}/search",
        {"name": query, "count": count, "language": "en", "format": "json"},
        api="geocoding",
    )
    locations = decode_locations(body)
    if not locations:
        raise LocationNotFoundError(query)
    return locations


async def get_current(deps: WeatherDeps, query: str) -> CurrentWeather:
    """Current conditions for the best geocoding match of a place name."""
    location = (await search_locations(deps, query))[0]
    return await get_current_by_coords(deps, location.latitude, location.longitude, location)


async def get_current_by_coords(
    deps: WeatherDeps,
    latitude: float,
    longitude: float,
    location: Location | None = None,
) -> CurrentWeather:
    """Current conditions at coordinates, keeping a caller-known location if given."""
    params = _coordinate_params(latitude, longitude)
    params["current"] = CURRENT_PARAMS
    body = await _get(deps, f"{deps.base_url}/forecast", params)
    return decode_current(body, location)


async def get_forecast(deps: WeatherDeps, query: str, days: int, mode: Mode = Mode.DAILY) -> Forecast:
    """Daily or hourly forecast for the best geocoding match of a place name."""
    _check_days(days)
    location = (await search_locations(deps, query))[0]
    return await get_forecast_by_coords(deps, location.latitude, location.longitude, days, mode, location)


async def get_forecast_by_coords(
    deps: WeatherDeps,
    latitude: float,
    longitude: float,
    days: int,
    mode: Mode = Mode.DAILY,
    location: Location | None = None,
) -> Forecast:
    """Daily or hourly forecast at coordinates for 1-16 days."""
    _check_days(days)
    if mode not in (Mode.HOURLY, Mode.DAILY):
        raise ValueError(f"forecast mode must be hourly or daily, not {mode.value}")

    params = _coordinate_params(latitude, longitude)
    params["forecast_days"] = days
    params[mode.value] = HOURLY_PARAMS if mode is Mode.HOURLY else DAILY_PARAMS
    body = await _get(deps, f"{deps.base_url}/forecast", params)
    return decode_forecast(body, mode, location)


def days_for_hours(hours: int) -> int:
    """Whole forecast days needed to cover an hour count, capped at the API maximum."""
    return min(math.ceil(hours / 24), MAX_FORECAST_DAYS)


def limit_hours(forecast: Forecast, hours: int) -> Forecast:
    """Copy of an hourly forecast keeping only its first ``hours`` entries."""
    if forecast.hourly is None or len(forecast.hourly) <= hours:
        return forecast
    return forecast.model_copy(update={"hourly": forecast.hourly[:hours]})


def parse_coordinates(text: str) -> tuple[float, float] | None:
    """Recognize "lat,lon" input; returns None for anything that is a place name."""
    match = _COORDINATES.match(text)
    if match is None:
        return None
    latitude, longitude = float(match.group(1)), float(match.group(2))
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        return None
    return latitude, longitude


def _check_days(days: int) -> None:
    if not 1 <= days <= MAX_FORECAST_DAYS:
        raise ValueError(f"days must be between 1 and {MAX_FORECAST_DAYS}")


def _coordinate_params(latitude: float, longitude: float) -> dict:
    return {
        "latitude": f"{latitude:.4f}",
        "longitude": f"{longitude:.4f}",
        "timezone": "auto",
    }


async def _get(deps: WeatherDeps, url: str, params: dict, api: str = "weather") -> bytes:
    """Issue one GET and return the body of a 2xx response."""
    logger.debug("GET %s params=%s", url, params)
    try:
        resp = await deps.http_client.get(url, params=params)
    except httpx.HTTPStatusError as e:
        # Raised by the retry transport once its attempts are exhausted.
        raise TransportError(f"{api} API error", e.response.status_code, e.response.text) from e
    except httpx.HTTPError as e:
        raise TransportError(f"request to {url} failed: {e}") from e

    logger.debug("%s responded %d", url, resp.status_code)
    if not resp.is_success:
        raise TransportError(f"{api} API error", resp.status_code, resp.text)
    return resp.content
