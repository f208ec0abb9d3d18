"""Yield unit conversion and revenue estimation for the dashboard calculator.

Area is always entered in biswa. The model predicts tons per hectare; the
calculator shows either total tons for the farm or total quintals computed via
bighas.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from app.models.enums import YieldUnit

BISWA_PER_HECTARE = 79
BIGHAS_PER_HECTARE = 4
QUINTALS_PER_TON = 10


@dataclass(frozen=True)
class ConvertedYield:
	unit: YieldUnit
	value: float
	unit_label: str
	price_label: str


def _check(yield_per_hectare: float, area_biswa: float) -> None:
	if not (math.isfinite(yield_per_hectare) and math.isfinite(area_biswa)):
		raise ValueError("yield and area must be finite")
	if yield_per_hectare < 0:
		raise ValueError("yield_per_hectare must be non-negative")
	if area_biswa <= 0:
		raise ValueError("area_biswa must be positive")


def _finite(result: float) -> float:
	if not math.isfinite(result):
		raise ValueError("converted value is out of range")
	return result


def tons_for_area(yield_per_hectare: float, area_biswa: float) -> float:
	_check(yield_per_hectare, area_biswa)
	yield_per_biswa = yield_per_hectare / BISWA_PER_HECTARE
	return _finite(yield_per_biswa * area_biswa)


def quintals_for_area(yield_per_hectare: float, area_biswa: float) -> float:
	_check(yield_per_hectare, area_biswa)
	quintals_per_hectare = yield_per_hectare * QUINTALS_PER_TON
	bighas = area_biswa / (BISWA_PER_HECTARE / BIGHAS_PER_HECTARE)
	quintals_per_bigha = quintals_per_hectare / BIGHAS_PER_HECTARE
	return _finite(quintals_per_bigha * bighas)


def yield_per_hectare_from_tons(total_tons: float, area_biswa: float) -> float:
	"""Inverse of :func:`tons_for_area`."""
	_check(total_tons, area_biswa)
	return _finite(total_tons / area_biswa * BISWA_PER_HECTARE)


def yield_per_hectare_from_quintals(total_quintals: float, area_biswa: float) -> float:
	"""Inverse of :func:`quintals_for_area`."""
	_check(total_quintals, area_biswa)
	bighas = area_biswa / (BISWA_PER_HECTARE / BIGHAS_PER_HECTARE)
	quintals_per_bigha = total_quintals / bighas
	return _finite(quintals_per_bigha * BIGHAS_PER_HECTARE / QUINTALS_PER_TON)


def convert_yield(yield_per_hectare: float, area_biswa: float, unit: YieldUnit) -> ConvertedYield:
	if unit == YieldUnit.tons_per_hectare:
		return ConvertedYield(
			unit=unit,
			value=tons_for_area(yield_per_hectare, area_biswa),
			unit_label="tons",
			price_label="pricePerTon",
		)
	return ConvertedYield(
		unit=unit,
		value=quintals_for_area(yield_per_hectare, area_biswa),
		unit_label="quintals",
		price_label="pricePerQuintal",
	)


def positive_number(value: Any) -> float | None:
	"""Return ``value`` as a finite positive float, or None for anything else."""
	if value is None or isinstance(value, bool):
		return None
	try:
		numeric = float(str(value).strip()) if isinstance(value, str) else float(value)
	except (TypeError, ValueError):
		return None
	if not math.isfinite(numeric) or numeric <= 0:
		return None
	return numeric


def estimate_revenue(converted_yield: float, price: Any) -> float:
	"""Revenue for the converted total; an unusable price yields 0.

	Raises ValueError when the product overflows.
	"""
	numeric_price = positive_number(price)
	if numeric_price is None:
		return 0.0
	return _finite(converted_yield * numeric_price)
