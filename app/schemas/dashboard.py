"""Pydantic schemas for the calculator, dashboard insights and client state."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from app.models.enums import LanguageCode, YieldUnit
from app.schemas.prediction import PredictionResult, PriorityList, WeatherSummary


class CalculatorRequest(BaseModel):
	yield_per_hectare: float = Field(ge=0, allow_inf_nan=False)
	area_biswa: float = Field(gt=0, allow_inf_nan=False)
	unit: YieldUnit = YieldUnit.tons_per_hectare
	price: float | str | None = None


class CalculatorResponse(BaseModel):
	unit: YieldUnit
	converted_yield: float
	unit_label: str
	price_label: str
	revenue: float


class ChartPoint(BaseModel):
	name: str
	yield_: float = Field(serialization_alias="yield", validation_alias=AliasChoices("yield", "yield_"))
	predicted: bool = False


class DashboardInsights(BaseModel):
	area_biswa: float
	total_yield_tons: float | None = None
	yield_per_hectare: float | None = None
	weather: WeatherSummary | None = None
	soil_ph: float | None = None
	previous_crop: str | None = None
	chart: list[ChartPoint] = Field(default_factory=list)


class LanguageUpdate(BaseModel):
	language: str


class ClientStateRead(BaseModel):
	form: dict[str, Any]
	language: LanguageCode
	prediction: PredictionResult | None = None
	priorities: PriorityList | None = None
