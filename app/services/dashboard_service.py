"""Display values for the dashboard cards and the historical yield chart."""

from __future__ import annotations

import math
from typing import Any

from app.schemas.dashboard import ChartPoint, DashboardInsights
from app.schemas.prediction import PredictionResult
from app.services.units import positive_number, tons_for_area

# Reference yields (t/ha) shown as the historical bars.
HISTORICAL_YIELDS: tuple[tuple[str, float], ...] = (
	("2020", 4.5),
	("2021", 4.8),
	("2022", 4.2),
	("2023", 5.1),
	("2024", 4.9),
)
PREDICTED_SEASON = "2025"


def yield_chart(result: PredictionResult | None) -> list[ChartPoint]:
	points = [ChartPoint(name=name, yield_=value) for name, value in HISTORICAL_YIELDS]
	if result is not None:
		points.append(
			ChartPoint(name=PREDICTED_SEASON, yield_=result.yield_prediction.predicted_yield, predicted=True)
		)
	return points


def _finite_or_none(value: Any) -> float | None:
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		return None
	return float(value) if math.isfinite(value) else None


def build_insights(form: dict[str, Any], result: PredictionResult | None) -> DashboardInsights:
	# The form snapshot may be partial; unusable values just leave cards empty.
	area = positive_number(form.get("area_biswa")) or 0.0
	soil_ph = form.get("soil_ph")
	previous_crop = form.get("previous_crop")
	insights = DashboardInsights(
		area_biswa=area,
		soil_ph=_finite_or_none(soil_ph),
		previous_crop=previous_crop if isinstance(previous_crop, str) else None,
		chart=yield_chart(result),
	)
	if result is None:
		return insights

	yield_per_hectare = result.yield_prediction.predicted_yield
	insights.weather = result.weather
	insights.yield_per_hectare = yield_per_hectare
	if area > 0:
		try:
			insights.total_yield_tons = tons_for_area(yield_per_hectare, area)
		except ValueError:
			insights.total_yield_tons = None
	return insights
