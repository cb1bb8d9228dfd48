# ABOUTME: Lookup tables for WMO weather codes and wind compass directions.
# ABOUTME: Pure functions over immutable module-level constants.

from types import MappingProxyType

WEATHER_CODES = MappingProxyType(
    {
        0: "Clear sky",
        1: "Mainly clear",
        2: "Partly cloudy",
        3: "Overcast",
        45: "Foggy",
        48: "Depositing rime fog",
        51: "Light drizzle",
        53: "Moderate drizzle",
        55: "Dense drizzle",
        56: "Light freezing drizzle",
        57: "Dense freezing drizzle",
        61: "Slight rain",
        63: "Moderate rain",
        65: "Heavy rain",
        66: "Light freezing rain",
        67: "Heavy freezing rain",
        71: "Slight snow",
        73: "Moderate snow",
        75: "Heavy snow",
        77: "Snow grains",
        80: "Slight rain showers",
        81: "Moderate rain showers",
        82: "Violent rain showers",
        85: "Slight snow showers",
        86: "Heavy snow showers",
        95: "Thunderstorm",
        96: "Thunderstorm with slight hail",
        99: "Thunderstorm with heavy hail",
    }
)

UNKNOWN_CONDITION = "Unknown"

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)  # fmt: skip


def condition_from_code(code: int) -> str:
    """Return the human-readable condition for a WMO weather code."""
    return WEATHER_CODES.get(code, UNKNOWN_CONDITION)


def compass_from_degrees(degrees: int) -> str:
    """Return the 16-point compass label for a wind direction in degrees.

    Any integer is accepted; Python's floored modulo brings it into [0, 360)
    before bucketing into 22.5 degree sectors centered on each point.
    """
    normalized = degrees % 360
    return COMPASS_POINTS[int((normalized + 11.25) // 22.5) % 16]
