# ABOUTME: Pydantic BaseModels for locations, current conditions, and forecasts.
# ABOUTME: Field names double as the stable keys of the JSON output.

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, computed_field

from weathercli.conditions import condition_from_code


class Location(BaseModel):
    """Geocoded place, or bare coordinates when queried without a name."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    latitude: float
    longitude: float
    country: str | None = None
    admin1: str | None = None
    timezone: str | None = None


class _Conditions(BaseModel):
    """Shared weather code handling; condition is always derived from the code."""

    weather_code: int = 0

    @computed_field
    @property
    def condition(self) -> str:
        return condition_from_code(self.weather_code)


class CurrentWeather(_Conditions):
    """Conditions at the moment of the request."""

    location: Location
    time: dt.datetime | None = None
    # Never coerced: a numeric string or boolean here means a broken response.
    temperature: float = Field(strict=True)
    weather_code: int = Field(strict=True)
    apparent: float = 0.0
    humidity: int = 0
    precipitation: float = 0.0
    rain: float = 0.0
    snowfall: float = 0.0
    wind_speed: float = 0.0
    wind_direction: int = 0
    pressure: float = 0.0
    cloud_cover: int = 0
    visibility: float = 0.0
    uv_index: float = 0.0


class DailyForecast(_Conditions):
    """One day of the daily forecast."""

    date: dt.date | None = None
    temp_max: float = 0.0
    temp_min: float = 0.0
    apparent_max: float = 0.0
    apparent_min: float = 0.0
    precipitation: float = 0.0
    rain: float = 0.0
    snowfall: float = 0.0
    wind_speed_max: float = 0.0
    wind_direction: int = 0
    uv_index_max: float = 0.0
    precip_prob: int = 0
    sunrise: dt.datetime | None = None
    sunset: dt.datetime | None = None


class HourlyForecast(_Conditions):
    """One hour of the hourly forecast."""

    time: dt.datetime | None = None
    temperature: float = 0.0
    apparent: float = 0.0
    humidity: int = 0
    precipitation: float = 0.0
    rain: float = 0.0
    snowfall: float = 0.0
    wind_speed: float = 0.0
    wind_direction: int = 0
    pressure: float = 0.0
    cloud_cover: int = 0
    visibility: float = 0.0
    uv_index: float = 0.0
    precip_prob: int = 0


class Forecast(BaseModel):
    """A location with either daily or hourly entries, never both."""

    location: Location
    daily: list[DailyForecast] | None = None
    hourly: list[HourlyForecast] | None = None
