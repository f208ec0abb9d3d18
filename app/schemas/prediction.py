"""Pydantic schemas for weather summaries, AI outputs and prediction endpoints."""

from __future__ import annotations

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.schemas.farm import Coordinates


class WeatherSummary(BaseModel):
	model_config = ConfigDict(frozen=True)

	temperature: float
	humidity: float
	rainfall: float

	@field_validator("temperature", "humidity", "rainfall")
	@classmethod
	def _finite(cls, value: float) -> float:
		if not math.isfinite(value):
			raise ValueError("weather values must be finite")
		return value


class HistoricalYieldPoint(BaseModel):
	year: int
	yield_: float = Field(serialization_alias="yield", validation_alias=AliasChoices("yield", "yield_"))
	crop: str


# ── AI service outputs ──────────────────────────────────────────────────────


class YieldPrediction(BaseModel):
	predicted_yield: float = Field(
		ge=0,
		allow_inf_nan=False,
		validation_alias=AliasChoices("predictedYield", "predicted_yield"),
	)
	confidence_interval: str = Field(
		validation_alias=AliasChoices("confidenceInterval", "confidence_interval"),
	)
	recommendations: str


class CropRecommendations(BaseModel):
	irrigation_recommendations: str = Field(
		validation_alias=AliasChoices("irrigationRecommendations", "irrigation_recommendations"),
	)
	fertilization_recommendations: str = Field(
		validation_alias=AliasChoices("fertilizationRecommendations", "fertilization_recommendations"),
	)
	pest_control_recommendations: str = Field(
		validation_alias=AliasChoices("pestControlRecommendations", "pest_control_recommendations"),
	)


class CropPriority(BaseModel):
	crop_name: str = Field(min_length=1, validation_alias=AliasChoices("cropName", "crop_name"))
	priority: int = Field(ge=1)
	reason: str


class PriorityList(BaseModel):
	crops: list[CropPriority] = Field(default_factory=list)


class PredictionResult(BaseModel):
	yield_prediction: YieldPrediction
	recommendations: CropRecommendations
	weather: WeatherSummary


# ── Endpoint payloads ───────────────────────────────────────────────────────


class FlowRequest(BaseModel):
	"""Raw form values are validated by the orchestrator, not by FastAPI."""

	form: dict[str, Any] = Field(default_factory=dict)
	coordinates: Coordinates | None = None
	language: str | None = None


class PredictionResponse(PredictionResult):
	request_id: int
	area_biswa: float
	total_yield_tons: float
