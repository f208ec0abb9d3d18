"""Open-Meteo forecast fetch and reduction to a 7-day weather summary."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import httpx

from app.config import Settings, get_settings
from app.errors import WeatherFetchError
from app.schemas.farm import Coordinates
from app.schemas.prediction import WeatherSummary

_logger = logging.getLogger("agripredict.weather")

DAILY_SERIES = ("temperature_2m_mean", "relative_humidity_2m_mean", "rain_sum")


def round_half_up(value: float, places: int = 1) -> float:
	quantum = Decimal(1).scaleb(-places)
	return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _series(daily: Mapping[str, Any], name: str) -> list[float]:
	values = daily.get(name)
	if not isinstance(values, Sequence) or isinstance(values, (str, bytes)):
		raise WeatherFetchError(f"Weather response is missing the '{name}' series")
	if not values:
		raise WeatherFetchError(f"Weather response has an empty '{name}' series")
	try:
		return [float(value) for value in values]
	except (TypeError, ValueError) as exc:
		raise WeatherFetchError(f"Weather series '{name}' contains non-numeric values") from exc


def summarize_daily(daily: Mapping[str, Any]) -> WeatherSummary:
	"""Mean temperature and humidity, total rainfall, one decimal each."""
	temperatures = _series(daily, "temperature_2m_mean")
	humidities = _series(daily, "relative_humidity_2m_mean")
	rainfall = _series(daily, "rain_sum")

	avg_temperature = sum(temperatures) / len(temperatures)
	avg_humidity = sum(humidities) / len(humidities)
	total_rainfall = sum(rainfall)
	if not all(math.isfinite(value) for value in (avg_temperature, avg_humidity, total_rainfall)):
		raise WeatherFetchError("Weather series produced a non-finite summary")

	return WeatherSummary(
		temperature=round_half_up(avg_temperature),
		humidity=round_half_up(avg_humidity),
		rainfall=round_half_up(total_rainfall),
	)


class WeatherService:
	def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None):
		self.settings = settings or get_settings()
		self.client = client

	def _params(self, coordinates: Coordinates) -> dict[str, Any]:
		return {
			"latitude": coordinates.latitude,
			"longitude": coordinates.longitude,
			"daily": ",".join(DAILY_SERIES),
			"forecast_days": self.settings.forecast_days,
		}

	async def _get(self, params: dict[str, Any]) -> httpx.Response:
		if self.client is not None:
			return await self.client.get(self.settings.open_meteo_url, params=params)
		async with httpx.AsyncClient(timeout=self.settings.weather_timeout_seconds) as client:
			return await client.get(self.settings.open_meteo_url, params=params)

	async def fetch_summary(self, coordinates: Coordinates) -> WeatherSummary:
		start = time.perf_counter()
		try:
			response = await self._get(self._params(coordinates))
		except httpx.HTTPError as exc:
			_logger.error("weather_fetch_failed", extra={"error": str(exc)})
			raise WeatherFetchError(f"Failed to fetch weather data: {exc}") from exc

		if not response.is_success:
			_logger.error("weather_fetch_failed", extra={"status_code": response.status_code})
			raise WeatherFetchError(
				f"Failed to fetch weather data (status {response.status_code}).",
				status_code=response.status_code,
			)

		try:
			payload = response.json()
		except ValueError as exc:
			raise WeatherFetchError("Weather response is not valid JSON", status_code=response.status_code) from exc

		daily = payload.get("daily") if isinstance(payload, dict) else None
		if not isinstance(daily, Mapping):
			raise WeatherFetchError("Weather response has no daily forecast", status_code=response.status_code)

		summary = summarize_daily(daily)
		_logger.info(
			"weather_fetch",
			extra={
				"duration_ms": round((time.perf_counter() - start) * 1000.0, 2),
				"temperature": summary.temperature,
				"humidity": summary.humidity,
				"rainfall": summary.rainfall,
			},
		)
		return summary
