from __future__ import annotations

import httpx
import pytest

from app.config import Settings
from app.errors import WeatherFetchError
from app.schemas.farm import Coordinates
from app.services.weather_service import WeatherService, round_half_up, summarize_daily


def _daily(temps: list[float], humidity: list[float], rain: list[float]) -> dict[str, list[float]]:
    return {
        "temperature_2m_mean": temps,
        "relative_humidity_2m_mean": humidity,
        "rain_sum": rain,
    }


def test_summarize_daily_means_and_total() -> None:
    summary = summarize_daily(_daily([10, 20, 30], [50, 60, 70], [1.0, 2.0, 3.0]))
    assert summary.temperature == 20.0
    assert summary.humidity == 60.0
    assert summary.rainfall == 6.0


def test_summarize_daily_rounds_half_up() -> None:
    summary = summarize_daily(_daily([0.25, 0.25], [10.05], [0.15]))
    assert summary.temperature == 0.3
    assert summary.humidity == 10.1
    assert summary.rainfall == 0.2
    assert round_half_up(2.45) == 2.5


def test_summarize_daily_empty_series_fails() -> None:
    with pytest.raises(WeatherFetchError, match="empty"):
        summarize_daily(_daily([], [50], [1.0]))


def test_summarize_daily_missing_series_fails() -> None:
    with pytest.raises(WeatherFetchError, match="rain_sum"):
        summarize_daily({"temperature_2m_mean": [1], "relative_humidity_2m_mean": [1]})


def test_summarize_daily_rejects_null_values() -> None:
    with pytest.raises(WeatherFetchError, match="non-numeric"):
        summarize_daily(_daily([20, None], [50, 60], [0, 1]))  # type: ignore[list-item]


@pytest.mark.asyncio
async def test_fetch_summary_requests_seven_day_series() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"daily": _daily([24, 26], [58, 62], [20.0, 30.0])})

    settings = Settings(open_meteo_url="https://weather.test/v1/forecast")
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        service = WeatherService(settings, client=http_client)
        summary = await service.fetch_summary(Coordinates(latitude=30.9, longitude=75.85))

    assert (summary.temperature, summary.humidity, summary.rainfall) == (25.0, 60.0, 50.0)
    params = seen[0].url.params
    assert params["latitude"] == "30.9"
    assert params["longitude"] == "75.85"
    assert params["daily"] == "temperature_2m_mean,relative_humidity_2m_mean,rain_sum"
    assert params["forecast_days"] == "7"


@pytest.mark.asyncio
async def test_fetch_summary_non_success_carries_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"reason": "maintenance"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        service = WeatherService(Settings(), client=http_client)
        with pytest.raises(WeatherFetchError) as excinfo:
            await service.fetch_summary(Coordinates(latitude=1.0, longitude=2.0))

    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_fetch_summary_rejects_body_without_daily() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": True})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        service = WeatherService(Settings(), client=http_client)
        with pytest.raises(WeatherFetchError, match="daily"):
            await service.fetch_summary(Coordinates(latitude=1.0, longitude=2.0))


@pytest.mark.asyncio
async def test_fetch_summary_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        service = WeatherService(Settings(), client=http_client)
        with pytest.raises(WeatherFetchError, match="connection refused"):
            await service.fetch_summary(Coordinates(latitude=1.0, longitude=2.0))
