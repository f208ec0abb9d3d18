"""Pydantic schemas for the three AI prompt contracts (inputs)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _PromptInput(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class YieldPredictionInput(_PromptInput):
	crop_type: str = Field(description="The type of crop.")
	region: str = Field(description="The region where the crop is grown.")
	historical_data: str = Field(description="Historical agricultural data in JSON format.")
	weather_patterns: str = Field(
		description="Weather patterns data in JSON format, including temperature, humidity, and rainfall.",
	)
	soil_metrics: str = Field(
		description=(
			"Soil metrics data in JSON format. Always includes soil pH and may include "
			"Nitrogen (N), Phosphorus (P), and Potassium (K) levels in kg/ha."
		),
	)
	previous_crop: str = Field(
		description="The crop grown in the previous season. Use it to estimate N-P-K values when they are missing.",
	)
	language: str = Field(description="The language for the recommendations.")
	area: str = Field(description="The area of the farm.")


class CropRecommendationsInput(_PromptInput):
	crop_type: str = Field(description="The type of crop.")
	region: str = Field(description="The region where the crop is grown.")
	predicted_weather_conditions: str = Field(description="Predicted weather conditions in JSON format.")
	soil_metrics: str = Field(description="Soil metrics data in JSON format.")
	historical_data: str = Field(description="Historical agricultural data in JSON format.")
	language: str = Field(description="The language for the recommendations.")
	area: str = Field(description="The area of the farm.")


class CropPriorityInput(_PromptInput):
	region: str = Field(description="The region where crops will be grown.")
	predicted_weather_conditions: str = Field(description="Predicted weather conditions in JSON format.")
	soil_metrics: str = Field(description="Soil metrics data in JSON format.")
	language: str = Field(description="The language for the reasons.")
