"""Textual inputs for the AI prompts, composed from a validated form and weather.

The historical series is synthetic: each year's yield is a rainfall-scaled
figure plus uniform noise. It only gives the model plausible context and is
not taken from any agricultural record.
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass

from app.schemas.farm import PredictionForm, PriorityForm, SoilInputs
from app.schemas.prediction import HistoricalYieldPoint, WeatherSummary

# year -> (rainfall coefficient, base offset)
HISTORY_COEFFICIENTS: dict[int, tuple[float, float]] = {
	2020: (0.01, 2.0),
	2021: (0.011, 2.0),
	2022: (0.009, 2.0),
	2023: (0.012, 2.5),
}
HISTORY_JITTER = (0.0, 2.0)


@dataclass(frozen=True)
class PredictionInputs:
	weather_patterns: str
	soil_metrics: str
	historical_data: str


@dataclass(frozen=True)
class PriorityInputs:
	weather_patterns: str
	soil_metrics: str


def describe_weather(weather: WeatherSummary) -> str:
	return json.dumps(
		{
			"temperature": f"~{weather.temperature:.1f}°C (7-day avg)",
			"humidity": f"~{weather.humidity:.1f}% (7-day avg)",
			"rainfall": f"{weather.rainfall:.1f}mm (7-day total)",
		},
		ensure_ascii=False,
	)


def _plain_number(value: float) -> int | float:
	if float(value).is_integer():
		return int(value)
	return value


def soil_metrics_payload(form: SoilInputs) -> dict[str, int | float]:
	# Missing N-P-K tells the model to estimate them from the previous crop.
	payload: dict[str, int | float] = {"ph": _plain_number(form.soil_ph)}
	for name in ("nitrogen", "phosphorus", "potassium"):
		value = getattr(form, name)
		if value:
			payload[name] = _plain_number(value)
	return payload


def soil_metrics(form: SoilInputs) -> str:
	return json.dumps(soil_metrics_payload(form), separators=(",", ":"), allow_nan=False)


def synthetic_history(crop: str, rainfall: float, rng: random.Random | None = None) -> list[HistoricalYieldPoint]:
	rng = rng or random.Random()
	low, high = HISTORY_JITTER
	return [
		HistoricalYieldPoint(
			year=year,
			yield_=rainfall * coefficient + rng.uniform(low, high) + offset,
			crop=crop,
		)
		for year, (coefficient, offset) in HISTORY_COEFFICIENTS.items()
	]


def compose_prediction_inputs(
	form: PredictionForm,
	weather: WeatherSummary,
	rng: random.Random | None = None,
) -> PredictionInputs:
	history = synthetic_history(form.crop_type.value, weather.rainfall, rng)
	return PredictionInputs(
		weather_patterns=describe_weather(weather),
		soil_metrics=soil_metrics(form),
		historical_data=json.dumps([point.model_dump(by_alias=True) for point in history]),
	)


def compose_priority_inputs(form: PriorityForm, weather: WeatherSummary) -> PriorityInputs:
	return PriorityInputs(
		weather_patterns=describe_weather(weather),
		soil_metrics=soil_metrics(form),
	)
