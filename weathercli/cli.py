# ABOUTME: Click command-line entry point for current weather, forecasts, and location search.
# ABOUTME: Loads .env configuration, builds the HTTP client, and hands results to the renderer.

import asyncio
import logging
import os
import sys

import click
from dotenv import load_dotenv
from pydantic import BaseModel

from weathercli import __version__
from weathercli.decoder import Mode
from weathercli.deps import DEFAULT_BASE_URL, DEFAULT_GEO_BASE_URL, DEFAULT_TIMEOUT, WeatherDeps, create_http_client
from weathercli.errors import WeatherError
from weathercli.render import Renderer
from weathercli.weather_service import (
    MAX_FORECAST_DAYS,
    days_for_hours,
    get_current,
    get_current_by_coords,
    get_forecast,
    get_forecast_by_coords,
    limit_hours,
    parse_coordinates,
    search_locations,
)

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Global options shared by every command."""

    base_url: str = DEFAULT_BASE_URL
    geo_base_url: str = DEFAULT_GEO_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 0
    json_output: bool = False
    color: bool = True


def color_enabled(no_color: bool, stream=None) -> bool:
    """Whether text output should carry ANSI styling."""
    if no_color or os.environ.get("NO_COLOR") or os.environ.get("TERM") == "dumb":
        return False
    stream = stream if stream is not None else sys.stdout
    return stream.isatty()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--base-url", envvar="WEATHER_BASE_URL", default=DEFAULT_BASE_URL, show_default=True, help="Weather API base URL."
)
@click.option(
    "--geo-base-url",
    envvar="WEATHER_GEO_BASE_URL",
    default=DEFAULT_GEO_BASE_URL,
    show_default=True,
    help="Geocoding API base URL.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="HTTP timeout in seconds.",
)
@click.option(
    "--retries", type=click.IntRange(min=0), default=0, show_default=True, help="Retries for transient HTTP failures."
)
@click.option("--json", "json_output", is_flag=True, help="Output JSON.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging.")
@click.version_option(__version__, prog_name="weathercli")
@click.pass_context
def main(ctx, base_url, geo_base_url, timeout, retries, json_output, no_color, verbose):
    """Simple weather CLI for humans and LLMs. Get current weather or forecasts for any location."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="→ %(message)s",
    )
    ctx.obj = Settings(
        base_url=base_url.rstrip("/"),
        geo_base_url=geo_base_url.rstrip("/"),
        timeout=timeout,
        retries=retries,
        json_output=json_output,
        color=not json_output and color_enabled(no_color),
    )


@main.command()
@click.argument("location")
@click.pass_obj
def current(settings: Settings, location: str):
    """Get current weather for a LOCATION (e.g. 'New York' or '40.7128,-74.0060')."""
    logger.info("Fetching current weather for: %s", location)

    async def fetch(deps: WeatherDeps):
        coords = parse_coordinates(location)
        if coords is not None:
            return await get_current_by_coords(deps, *coords)
        return await get_current(deps, location)

    weather = _run(settings, fetch)
    _renderer(settings).render_current(weather)


@main.command()
@click.argument("location")
@click.option(
    "--days", type=click.IntRange(1, MAX_FORECAST_DAYS), default=7, show_default=True, help="Number of forecast days."
)
@click.option("--hourly", is_flag=True, help="Show hourly forecast instead of daily.")
@click.option(
    "--hours",
    type=click.IntRange(1, 24 * MAX_FORECAST_DAYS),
    default=24,
    show_default=True,
    help="Number of hours for hourly forecast.",
)
@click.pass_obj
def forecast(settings: Settings, location: str, days: int, hourly: bool, hours: int):
    """Get weather forecast for a LOCATION."""
    mode = Mode.HOURLY if hourly else Mode.DAILY
    if hourly:
        days = days_for_hours(hours)
        logger.info("Fetching %d-hour forecast for: %s", hours, location)
    else:
        logger.info("Fetching %d-day forecast for: %s", days, location)

    async def fetch(deps: WeatherDeps):
        coords = parse_coordinates(location)
        if coords is not None:
            return await get_forecast_by_coords(deps, *coords, days, mode)
        return await get_forecast(deps, location, days, mode)

    result = _run(settings, fetch)
    if hourly:
        result = limit_hours(result, hours)
    _renderer(settings).render_forecast(result)


@main.command()
@click.argument("query")
@click.option("--limit", type=click.IntRange(1, 10), default=5, show_default=True, help="Max results.")
@click.pass_obj
def search(settings: Settings, query: str, limit: int):
    """Search for location coordinates matching QUERY."""
    logger.info("Searching locations: %s", query)

    async def fetch(deps: WeatherDeps):
        return await search_locations(deps, query)

    locations = _run(settings, fetch)
    _renderer(settings).render_locations(locations[:limit])


def _run(settings: Settings, fetch):
    """Run one query against a fresh HTTP client, turning WeatherErrors into exit code 1."""

    async def runner():
        async with create_http_client(settings.timeout, settings.retries) as http_client:
            deps = WeatherDeps(
                http_client=http_client,
                base_url=settings.base_url,
                geo_base_url=settings.geo_base_url,
            )
            return await fetch(deps)

    try:
        return asyncio.run(runner())
    except WeatherError as e:
        click.echo(f"{click.style('Error:', fg='red')} {e}", err=True)
        raise SystemExit(1) from e


def _renderer(settings: Settings) -> Renderer:
    return Renderer(sys.stdout, json_output=settings.json_output, color=settings.color)


def run():
    """Console script entry point; .env values are loaded before options are resolved."""
    load_dotenv()
    main()
