# ABOUTME: Decodes raw Open-Meteo response bodies into domain models.
# ABOUTME: Collapses column-oriented forecast arrays into row-oriented entries and owns all defaulting.

import json
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError

from weathercli.errors import DecodeError
from weathercli.models import CurrentWeather, DailyForecast, Forecast, HourlyForecast, Location


class Mode(str, Enum):
    """Which request shape a response body answers."""

    CURRENT = "current"
    HOURLY = "hourly"
    DAILY = "daily"
    SEARCH = "search"


# Model field -> Open-Meteo variable name.
CURRENT_FIELDS = {
    "temperature": "temperature_2m",
    "apparent": "apparent_temperature",
    "humidity": "relative_humidity_2m",
    "precipitation": "precipitation",
    "rain": "rain",
    "snowfall": "snowfall",
    "weather_code": "weather_code",
    "cloud_cover": "cloud_cover",
    "pressure": "pressure_msl",
    "wind_speed": "wind_speed_10m",
    "wind_direction": "wind_direction_10m",
    "uv_index": "uv_index",
}

HOURLY_FIELDS = {
    "temperature": "temperature_2m",
    "apparent": "apparent_temperature",
    "humidity": "relative_humidity_2m",
    "precip_prob": "precipitation_probability",
    "precipitation": "precipitation",
    "rain": "rain",
    "snowfall": "snowfall",
    "weather_code": "weather_code",
    "pressure": "pressure_msl",
    "cloud_cover": "cloud_cover",
    "wind_speed": "wind_speed_10m",
    "wind_direction": "wind_direction_10m",
    "uv_index": "uv_index",
}

DAILY_FIELDS = {
    "temp_max": "temperature_2m_max",
    "temp_min": "temperature_2m_min",
    "apparent_max": "apparent_temperature_max",
    "apparent_min": "apparent_temperature_min",
    "uv_index_max": "uv_index_max",
    "precipitation": "precipitation_sum",
    "rain": "rain_sum",
    "snowfall": "snowfall_sum",
    "precip_prob": "precipitation_probability_max",
    "weather_code": "weather_code",
    "wind_speed_max": "wind_speed_10m_max",
    "wind_direction": "wind_direction_10m_dominant",
}

# Current conditions are useless without these, so they are never defaulted.
REQUIRED_CURRENT = ("temperature", "weather_code")


def decode(body: bytes | str, mode: Mode, location: Location | None = None):
    """Decode a response body according to the request mode."""
    if mode is Mode.SEARCH:
        return decode_locations(body)
    if mode is Mode.CURRENT:
        return decode_current(body, location)
    return decode_forecast(body, mode, location)


def decode_locations(body: bytes | str) -> list[Location]:
    """Decode a geocoding search response into locations, best match first.

    A response without results decodes to an empty list; deciding that nothing
    was found is left to the caller.
    """
    data = _load(body)
    results = data.get("results") or []
    if not isinstance(results, list):
        raise DecodeError("geocoding 'results' is not a list")

    try:
        return [
            Location(
                name=r.get("name"),
                latitude=r["latitude"],
                longitude=r["longitude"],
                country=r.get("country"),
                admin1=r.get("admin1"),
                timezone=r.get("timezone"),
            )
            for r in results
        ]
    except (KeyError, AttributeError) as e:
        raise DecodeError(f"malformed geocoding result: {e}") from e
    except ValidationError as e:
        raise DecodeError(f"invalid geocoding result: {e}") from e


def decode_current(body: bytes | str, location: Location | None = None) -> CurrentWeather:
    """Decode a forecast response requested with the ``current`` field list."""
    data = _load(body)
    current = _section(data, "current")

    values = {}
    for field, key in CURRENT_FIELDS.items():
        value = current.get(key)
        if value is None:
            if field in REQUIRED_CURRENT:
                raise DecodeError(f"current response is missing '{key}'")
            continue
        values[field] = value

    try:
        return CurrentWeather(
            location=resolve_location(data, location),
            time=parse_timestamp(current.get("time"), response_timezone(data)),
            **values,
        )
    except ValidationError as e:
        raise DecodeError(f"invalid current weather data: {e}") from e


def decode_forecast(body: bytes | str, mode: Mode, location: Location | None = None) -> Forecast:
    """Decode a forecast response requested with the ``hourly`` or ``daily`` field list."""
    if mode not in (Mode.HOURLY, Mode.DAILY):
        raise ValueError(f"not a forecast mode: {mode}")

    data = _load(body)
    raw = _section(data, mode.value)
    tz = response_timezone(data)
    resolved = resolve_location(data, location)

    try:
        if mode is Mode.HOURLY:
            return Forecast(location=resolved, hourly=parse_hourly_data(raw, tz))
        return Forecast(location=resolved, daily=parse_daily_data(raw, tz))
    except ValidationError as e:
        raise DecodeError(f"invalid {mode.value} forecast data: {e}") from e


def parse_daily_data(raw: dict, tz: tzinfo | None = None) -> list[DailyForecast]:
    """Parse Open-Meteo column-oriented daily data into row-oriented DailyForecast objects."""
    dates = _time_column(raw)
    result = []
    for i, d in enumerate(dates):
        result.append(
            DailyForecast(
                date=parse_date(d),
                sunrise=parse_timestamp(_get_at(raw, "sunrise", i, len(dates)), tz),
                sunset=parse_timestamp(_get_at(raw, "sunset", i, len(dates)), tz),
                **_row(raw, DAILY_FIELDS, i, len(dates)),
            )
        )
    return result


def parse_hourly_data(raw: dict, tz: tzinfo | None = None) -> list[HourlyForecast]:
    """Parse Open-Meteo column-oriented hourly data into row-oriented HourlyForecast objects."""
    times = _time_column(raw)
    return [
        HourlyForecast(time=parse_timestamp(t, tz), **_row(raw, HOURLY_FIELDS, i, len(times)))
        for i, t in enumerate(times)
    ]


def resolve_location(data: dict, known: Location | None) -> Location:
    """Trust a caller-known location, overlaying only the server-reported timezone.

    Without one, the location is built from the response's own coordinates.
    """
    server_tz = data.get("timezone")
    if known is not None:
        if server_tz:
            return known.model_copy(update={"timezone": server_tz})
        return known

    try:
        return Location(latitude=data["latitude"], longitude=data["longitude"], timezone=server_tz)
    except KeyError as e:
        raise DecodeError(f"response is missing {e}") from e
    except ValidationError as e:
        raise DecodeError(f"invalid response coordinates: {e}") from e


def response_timezone(data: dict) -> tzinfo | None:
    """Timezone that naive timestamps in a response are expressed in."""
    name = data.get("timezone")
    if isinstance(name, str) and name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass

    offset = data.get("utc_offset_seconds")
    if isinstance(offset, int) and not isinstance(offset, bool):
        return timezone(timedelta(seconds=offset))
    return None


def parse_timestamp(value, tz: tzinfo | None = None) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None rather than failing.

    Naive timestamps get ``tz`` attached; explicit offsets are kept as sent.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None and tz is not None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def parse_date(value) -> date | None:
    """Parse a calendar date, returning None rather than failing."""
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _load(body: bytes | str) -> dict:
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError("response is not a JSON object")
    return data


def _section(data: dict, key: str) -> dict:
    section = data.get(key)
    if section is None:
        raise DecodeError(f"response is missing '{key}'")
    if not isinstance(section, dict):
        raise DecodeError(f"'{key}' is not a JSON object")
    return section


def _time_column(raw: dict) -> list:
    times = raw.get("time")
    if times is None:
        raise DecodeError("forecast is missing 'time'")
    if not isinstance(times, list):
        raise DecodeError("'time' is not a list")
    return times


def _row(raw: dict, fields: dict[str, str], index: int, length: int) -> dict:
    """Collect one entry's values; nulls are left out so model defaults apply."""
    row = {}
    for field, key in fields.items():
        value = _get_at(raw, key, index, length)
        if value is not None:
            row[field] = value
    return row


def _get_at(data: dict, key: str, index: int, length: int):
    """Get the value at index from a column array that must match the time column in length."""
    col = data.get(key)
    if not isinstance(col, list) or len(col) != length:
        size = len(col) if isinstance(col, list) else 0
        raise DecodeError(f"'{key}' has {size} values but 'time' has {length}")
    return col[index]
