# ABOUTME: Shared test fixtures for the weathercli test suite.
# ABOUTME: Provides Open-Meteo shaped payloads for geocoding, current, daily, and hourly responses.

import pytest


@pytest.fixture
def geocode_payload() -> dict:
    return {
        "results": [
            {
                "id": 2950159,
                "name": "Berlin",
                "latitude": 52.52437,
                "longitude": 13.41053,
                "country": "Germany",
                "admin1": "Land Berlin",
                "timezone": "Europe/Berlin",
            },
            {
                "id": 5083330,
                "name": "Berlin",
                "latitude": 44.46867,
                "longitude": -71.18508,
                "country": "United States",
                "admin1": "New Hampshire",
                "timezone": "America/New_York",
            },
        ],
        "generationtime_ms": 0.9,
    }


@pytest.fixture
def current_payload() -> dict:
    return {
        "latitude": 52.52,
        "longitude": 13.419998,
        "timezone": "Europe/Berlin",
        "utc_offset_seconds": 3600,
        "current": {
            "time": "2025-01-15T12:00",
            "interval": 900,
            "temperature_2m": 3.4,
            "relative_humidity_2m": 81,
            "apparent_temperature": -0.6,
            "precipitation": 0.0,
            "rain": 0.0,
            "snowfall": 0.0,
            "weather_code": 3,
            "cloud_cover": 100,
            "pressure_msl": 1021.3,
            "surface_pressure": 1016.1,
            "wind_speed_10m": 14.8,
            "wind_direction_10m": 242,
            "uv_index": 0.45,
        },
    }


@pytest.fixture
def daily_payload() -> dict:
    return {
        "latitude": 52.52,
        "longitude": 13.419998,
        "timezone": "Europe/Berlin",
        "utc_offset_seconds": 3600,
        "daily": {
            "time": ["2025-01-15", "2025-01-16", "2025-01-17"],
            "temperature_2m_max": [5.2, 6.1, 2.0],
            "temperature_2m_min": [-1.3, 0.2, -4.5],
            "apparent_temperature_max": [1.9, 2.8, -1.2],
            "apparent_temperature_min": [-5.0, -3.1, -8.9],
            "sunrise": ["2025-01-15T08:08", "2025-01-16T08:07", "2025-01-17T08:06"],
            "sunset": ["2025-01-15T16:22", "2025-01-16T16:24", "2025-01-17T16:26"],
            "uv_index_max": [0.9, 1.1, 0.0],
            "precipitation_sum": [2.1, 0.0, 0.4],
            "rain_sum": [2.1, 0.0, 0.0],
            "snowfall_sum": [0.0, 0.0, 0.28],
            "precipitation_probability_max": [80, 5, 35],
            "weather_code": [61, 1, 71],
            "wind_speed_10m_max": [18.4, 9.7, 12.2],
            "wind_direction_10m_dominant": [250, 180, 45],
        },
    }


def make_hourly_payload(hours: int) -> dict:
    """Hourly response with ``hours`` points starting at midnight on 2025-01-15."""
    return {
        "latitude": 52.52,
        "longitude": 13.419998,
        "timezone": "Europe/Berlin",
        "utc_offset_seconds": 3600,
        "hourly": {
            "time": [f"2025-01-{15 + h // 24:02d}T{h % 24:02d}:00" for h in range(hours)],
            "temperature_2m": [float(h % 24) for h in range(hours)],
            "relative_humidity_2m": [80] * hours,
            "apparent_temperature": [float(h % 24) - 3 for h in range(hours)],
            "precipitation_probability": [10] * hours,
            "precipitation": [0.0] * hours,
            "rain": [0.0] * hours,
            "snowfall": [0.0] * hours,
            "weather_code": [2] * hours,
            "pressure_msl": [1020.0] * hours,
            "cloud_cover": [60] * hours,
            "wind_speed_10m": [10.0] * hours,
            "wind_direction_10m": [90] * hours,
            "uv_index": [0.0] * hours,
        },
    }


@pytest.fixture
def hourly_payload() -> dict:
    return make_hourly_payload(48)


@pytest.fixture
def hourly_factory():
    return make_hourly_payload
