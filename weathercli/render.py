# ABOUTME: Renders domain models as colored terminal text or as JSON.
# ABOUTME: Holds the temperature band and UV level rules used by the text output.

from datetime import datetime
from enum import Enum
from typing import TextIO

import click
from pydantic import BaseModel, TypeAdapter

from weathercli.conditions import compass_from_degrees
from weathercli.models import CurrentWeather, DailyForecast, Forecast, HourlyForecast, Location

_LOCATIONS = TypeAdapter(list[Location])

MISSING = "-"


class TemperatureBand(Enum):
    """Display band for a temperature; the value is the click color used for it."""

    HOT = "red"
    WARM = "yellow"
    MILD = "green"
    COOL = "cyan"
    COLD = "blue"


def temperature_band(temp: float) -> TemperatureBand:
    """Band for a temperature in °C; each threshold includes its lower bound."""
    if temp >= 30:
        return TemperatureBand.HOT
    if temp >= 20:
        return TemperatureBand.WARM
    if temp >= 10:
        return TemperatureBand.MILD
    if temp >= 0:
        return TemperatureBand.COOL
    return TemperatureBand.COLD


def uv_level(uv: float) -> str:
    if uv < 3:
        return "low"
    if uv < 6:
        return "moderate"
    if uv < 8:
        return "high"
    if uv < 11:
        return "very high"
    return "extreme"


def format_temperature(temp: float, color: bool = True) -> str:
    text = f"{temp:.1f}°C"
    if not color:
        return text
    return click.style(text, fg=temperature_band(temp).value)


def format_location(location: Location) -> str:
    """Join name, region, and country with ", ", skipping the parts that are absent."""
    parts = [location.name, location.admin1, location.country]
    label = ", ".join(p for p in parts if p)
    if label:
        return label
    return f"{location.latitude:.4f}, {location.longitude:.4f}"


def _timestamp(value: datetime | None) -> str:
    if value is None:
        return MISSING
    return f"{value:%a %b} {value.day}, {value:%Y %H:%M %Z}".rstrip()


def _day(value) -> str:
    if value is None:
        return MISSING
    return f"{value:%a %b} {value.day}"


def _hour(value: datetime | None) -> str:
    if value is None:
        return MISSING
    return f"{value:%a %b} {value.day} {value:%H:%M}"


def _clock(value: datetime | None) -> str:
    return MISSING if value is None else f"{value:%H:%M}"


class Renderer:
    """Writes results to a stream, either as human-readable text or as JSON.

    JSON output is never styled, whatever ``color`` says.
    """

    def __init__(self, out: TextIO, json_output: bool = False, color: bool = True):
        self.out = out
        self.json_output = json_output
        self.color = color and not json_output

    def render_current(self, weather: CurrentWeather) -> None:
        if self.json_output:
            self._json(weather)
            return

        self._line(self._bold(format_location(weather.location)))
        self._line(self._cyan(_timestamp(weather.time)))
        self._line()
        self._field("Condition:", weather.condition)
        self._field("Temperature:", self._temp(weather.temperature))
        self._field("Feels like:", self._temp(weather.apparent))
        self._field("Humidity:", f"{weather.humidity}%")
        self._field("Wind:", f"{weather.wind_speed:.1f} km/h {compass_from_degrees(weather.wind_direction)}")
        self._field("Pressure:", f"{weather.pressure:.0f} hPa")
        self._field("Cloud cover:", f"{weather.cloud_cover}%")

        if weather.precipitation > 0:
            self._field("Precipitation:", f"{weather.precipitation:.1f} mm")
        if weather.rain > 0:
            self._field("Rain:", f"{weather.rain:.1f} mm")
        if weather.snowfall > 0:
            self._field("Snowfall:", f"{weather.snowfall:.1f} cm")
        if weather.uv_index > 0:
            self._field("UV Index:", f"{weather.uv_index:.1f} ({uv_level(weather.uv_index)})")

    def render_forecast(self, forecast: Forecast) -> None:
        if self.json_output:
            self._json(forecast)
            return

        self._line(self._bold(format_location(forecast.location)))
        self._line()
        for day in forecast.daily or []:
            self._render_day(day)
        for hour in forecast.hourly or []:
            self._render_hour(hour)

    def render_locations(self, locations: list[Location]) -> None:
        if self.json_output:
            self._line(_LOCATIONS.dump_json(locations, indent=2, exclude_none=True).decode())
            return

        for i, loc in enumerate(locations, start=1):
            self._line(f"{i}. {self._bold(format_location(loc))}")
            self._line(f"   {self._cyan('Coordinates:')} {loc.latitude:.4f}, {loc.longitude:.4f}")
            if loc.timezone:
                self._line(f"   {self._cyan('Timezone:')} {loc.timezone}")
            self._line()

    def _render_day(self, day: DailyForecast) -> None:
        self._line(self._bold(_day(day.date)))
        self._entry("Condition:", day.condition)
        self._entry("Temperature:", f"{self._temp(day.temp_max)} (high) / {self._temp(day.temp_min)} (low)")
        if day.precip_prob > 0:
            self._entry("Precipitation:", f"{day.precip_prob}%")
        if day.rain > 0:
            self._entry("Rain:", f"{day.rain:.1f} mm")
        if day.snowfall > 0:
            self._entry("Snowfall:", f"{day.snowfall:.1f} cm")
        self._entry("Wind:", f"{day.wind_speed_max:.1f} km/h {compass_from_degrees(day.wind_direction)}")
        self._entry("Sun:", f"{_clock(day.sunrise)} → {_clock(day.sunset)}")
        if day.uv_index_max > 0:
            self._entry("UV Index:", f"{day.uv_index_max:.1f} ({uv_level(day.uv_index_max)})")
        self._line()

    def _render_hour(self, hour: HourlyForecast) -> None:
        self._line(self._bold(_hour(hour.time)))
        self._entry("Condition:", hour.condition)
        self._entry("Temperature:", f"{self._temp(hour.temperature)} (feels {self._temp(hour.apparent)})")
        self._entry("Humidity:", f"{hour.humidity}%")
        if hour.precip_prob > 0:
            self._entry("Precipitation chance:", f"{hour.precip_prob}%")
        if hour.precipitation > 0:
            self._entry("Precipitation:", f"{hour.precipitation:.1f} mm")
        if hour.rain > 0:
            self._entry("Rain:", f"{hour.rain:.1f} mm")
        if hour.snowfall > 0:
            self._entry("Snowfall:", f"{hour.snowfall:.1f} cm")
        self._entry("Wind:", f"{hour.wind_speed:.1f} km/h {compass_from_degrees(hour.wind_direction)}")
        self._entry("Cloud cover:", f"{hour.cloud_cover}%")
        if hour.uv_index > 0:
            self._entry("UV Index:", f"{hour.uv_index:.1f} ({uv_level(hour.uv_index)})")
        self._line()

    def _json(self, model: BaseModel) -> None:
        self._line(model.model_dump_json(indent=2, exclude_none=True))

    def _field(self, label: str, value: str) -> None:
        self._line(f"{self._bold(label)} {value}")

    def _entry(self, label: str, value: str) -> None:
        self._line(f"  {self._cyan(label)} {value}")

    def _line(self, text: str = "") -> None:
        click.echo(text, file=self.out, color=self.color)

    def _temp(self, temp: float) -> str:
        return format_temperature(temp, self.color)

    def _bold(self, text: str) -> str:
        return click.style(text, bold=True) if self.color else text

    def _cyan(self, text: str) -> str:
        return click.style(text, fg="cyan") if self.color else text
