# ABOUTME: Contract tests for the weather service layer.
# ABOUTME: Validates search, current, and forecast calls plus error kinds with mocked HTTP.

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from weathercli.decoder import Mode
from weathercli.deps import WeatherDeps
from weathercli.errors import LocationNotFoundError, TransportError
from weathercli.models import Forecast, HourlyForecast, Location
from weathercli.weather_service import (
    CURRENT_PARAMS,
    DAILY_PARAMS,
    HOURLY_PARAMS,
    days_for_hours,
    get_current,
    get_current_by_coords,
    get_forecast,
    get_forecast_by_coords,
    limit_hours,
    parse_coordinates,
    search_locations,
)


def _response(json_data: dict | None = None, status_code: int = 200, text: str | None = None) -> httpx.Response:
    request = httpx.Request("GET", "https://test")
    if text is not None:
        return httpx.Response(status_code=status_code, text=text, request=request)
    return httpx.Response(status_code=status_code, json=json_data, request=request)


def _mock_deps(*responses: httpx.Response) -> WeatherDeps:
    """Create WeatherDeps over a mock httpx.AsyncClient returning the given responses in order."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    mock.get.side_effect = list(responses)
    return WeatherDeps(http_client=mock, base_url="https://api.test/v1", geo_base_url="https://geo.test/v1")


class TestSearchLocations:
    @pytest.mark.asyncio
    async def test_resolves_known_city(self, geocode_payload):
        """search_locations returns every match in provider order.

        Implementation: Mocks the geocoding API with two Berlins.
        Passing implies: Results are parsed into Location objects, best first.
        """
        deps = _mock_deps(_response(geocode_payload))
        result = await search_locations(deps, "Berlin")

        assert len(result) == 2
        assert result[0].name == "Berlin"
        assert result[0].country == "Germany"
        assert result[1].admin1 == "New Hampshire"

    @pytest.mark.asyncio
    async def test_sends_correct_params(self, geocode_payload):
        deps = _mock_deps(_response(geocode_payload))
        await search_locations(deps, "Berlin")

        call = deps.http_client.get.call_args
        assert call.args[0] == "https://geo.test/v1/search"
        assert call.kwargs["params"] == {"name": "Berlin", "count": 10, "language": "en", "format": "json"}

    @pytest.mark.asyncio
    async def test_zero_results_is_not_found(self):
        """An empty search is a distinct not-found error, not a transport failure.

        Implementation: Mocks the geocoding API with no results key.
        Passing implies: Users see "location not found: <query>".
        """
        deps = _mock_deps(_response({"generationtime_ms": 0.4}))
        with pytest.raises(LocationNotFoundError) as exc_info:
            await search_locations(deps, "ThisLocationDoesNotExist12345")

        assert exc_info.value.query == "ThisLocationDoesNotExist12345"
        assert str(exc_info.value) == "location not found: ThisLocationDoesNotExist12345"

    @pytest.mark.asyncio
    async def test_non_2xx_is_transport_error(self):
        deps = _mock_deps(_response(status_code=503, text="maintenance"))
        with pytest.raises(TransportError) as exc_info:
            await search_locations(deps, "Berlin")

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "maintenance"
        assert str(exc_info.value) == "geocoding API error: 503 maintenance"


class TestGetCurrent:
    @pytest.mark.asyncio
    async def test_geocodes_then_fetches(self, geocode_payload, current_payload):
        """get_current uses the first search result for the weather call.

        Implementation: Mocks a geocoding response followed by a current response.
        Passing implies: The best match's coordinates and names reach the result.
        """
        deps = _mock_deps(_response(geocode_payload), _response(current_payload))
        weather = await get_current(deps, "Berlin")

        assert weather.location.name == "Berlin"
        assert weather.location.admin1 == "Land Berlin"
        assert weather.temperature == 3.4
        params = deps.http_client.get.call_args.kwargs["params"]
        assert params["latitude"] == "52.5244"
        assert params["longitude"] == "13.4105"

    @pytest.mark.asyncio
    async def test_sends_correct_params(self, current_payload):
        deps = _mock_deps(_response(current_payload))
        await get_current_by_coords(deps, 52.52, 13.41)

        call = deps.http_client.get.call_args
        assert call.args[0] == "https://api.test/v1/forecast"
        assert call.kwargs["params"] == {
            "latitude": "52.5200",
            "longitude": "13.4100",
            "timezone": "auto",
            "current": CURRENT_PARAMS,
        }

    @pytest.mark.asyncio
    async def test_not_found_skips_weather_call(self):
        deps = _mock_deps(_response({"results": []}))
        with pytest.raises(LocationNotFoundError):
            await get_current(deps, "Atlantis")

        assert deps.http_client.get.call_count == 1

    @pytest.mark.asyncio
    async def test_network_fault_is_transport_error(self):
        """Connection failures surface as TransportError without a status.

        Implementation: Makes the mock client raise httpx.ConnectError.
        Passing implies: Callers only need to handle weathercli errors.
        """
        deps = _mock_deps()
        deps.http_client.get.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(TransportError) as exc_info:
            await get_current_by_coords(deps, 1.0, 2.0)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        """Cancelling the call aborts it without a partial result.

        Implementation: Makes the in-flight request raise CancelledError.
        Passing implies: Cancellation is never converted into a weather error.
        """
        deps = _mock_deps()
        deps.http_client.get.side_effect = asyncio.CancelledError()
        with pytest.raises(asyncio.CancelledError):
            await get_current_by_coords(deps, 1.0, 2.0)


class TestGetForecast:
    @pytest.mark.asyncio
    async def test_daily_forecast(self, geocode_payload, daily_payload):
        deps = _mock_deps(_response(geocode_payload), _response(daily_payload))
        result = await get_forecast(deps, "Berlin", days=3)

        assert isinstance(result, Forecast)
        assert result.location.name == "Berlin"
        assert len(result.daily) == 3
        assert result.hourly is None

    @pytest.mark.asyncio
    async def test_daily_params(self, daily_payload):
        deps = _mock_deps(_response(daily_payload))
        await get_forecast_by_coords(deps, 52.52, 13.41, 3, Mode.DAILY)

        params = deps.http_client.get.call_args.kwargs["params"]
        assert params["forecast_days"] == 3
        assert params["timezone"] == "auto"
        assert params["daily"] == DAILY_PARAMS
        assert "hourly" not in params

    @pytest.mark.asyncio
    async def test_hourly_params(self, hourly_payload):
        deps = _mock_deps(_response(hourly_payload))
        result = await get_forecast_by_coords(deps, 52.52, 13.41, 2, Mode.HOURLY)

        params = deps.http_client.get.call_args.kwargs["params"]
        assert params["hourly"] == HOURLY_PARAMS
        assert "daily" not in params
        assert len(result.hourly) == 48
        assert result.location.name is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, 17, -1])
    async def test_days_out_of_range(self, days):
        """Day counts outside 1-16 are rejected before any request.

        Implementation: Calls with invalid days and checks the mock was untouched.
        Passing implies: No wasted network round trip on bad input.
        """
        deps = _mock_deps()
        with pytest.raises(ValueError):
            await get_forecast(deps, "Berlin", days=days)

        deps.http_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_current_mode_is_rejected(self):
        deps = _mock_deps()
        with pytest.raises(ValueError):
            await get_forecast_by_coords(deps, 1.0, 2.0, 1, Mode.CURRENT)

    @pytest.mark.asyncio
    async def test_one_day_hourly_truncated_to_24(self, hourly_factory):
        """A one-day hourly request sliced to 24 entries has exactly 24 hours.

        Implementation: The API supplies 30 points; the result is limited to 24.
        Passing implies: The hours-to-days approximation plus slicing gives N hours.
        """
        deps = _mock_deps(_response(hourly_factory(30)))
        result = await get_forecast_by_coords(deps, 52.52, 13.41, days_for_hours(24), Mode.HOURLY)
        result = limit_hours(result, 24)

        assert len(result.hourly) == 24
        assert deps.http_client.get.call_args.kwargs["params"]["forecast_days"] == 1


class TestHourWindow:
    @pytest.mark.parametrize("hours,days", [(1, 1), (24, 1), (25, 2), (48, 2), (49, 3), (384, 16), (500, 16)])
    def test_days_for_hours(self, hours, days):
        assert days_for_hours(hours) == days

    def test_limit_hours_leaves_short_forecasts_alone(self):
        forecast = Forecast(
            location=Location(latitude=0.0, longitude=0.0),
            hourly=[HourlyForecast(weather_code=0) for _ in range(5)],
        )
        assert limit_hours(forecast, 24) is forecast
        assert len(limit_hours(forecast, 3).hourly) == 3
        assert len(forecast.hourly) == 5

    def test_limit_hours_ignores_daily_forecasts(self):
        forecast = Forecast(location=Location(latitude=0.0, longitude=0.0), daily=[])
        assert limit_hours(forecast, 24).hourly is None


class TestParseCoordinates:
    @pytest.mark.parametrize(
        "text,expected",
        [("52.52,13.41", (52.52, 13.41)), (" -33.8688 , 151.2093 ", (-33.8688, 151.2093)), ("0,0", (0.0, 0.0))],
    )
    def test_coordinates(self, text, expected):
        assert parse_coordinates(text) == expected

    @pytest.mark.parametrize("text", ["Berlin", "London, UK", "91,0", "0,181", "52.52"])
    def test_not_coordinates(self, text):
        assert parse_coordinates(text) is None
