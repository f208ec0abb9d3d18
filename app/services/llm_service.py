"""LLM integration: prompt assembly, Anthropic call, schema-checked response parsing."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from app.config import Settings, get_settings
from app.errors import PredictionServiceError
from app.schemas.ai import CropPriorityInput, CropRecommendationsInput, YieldPredictionInput
from app.schemas.prediction import CropRecommendations, PriorityList, YieldPrediction

_logger = logging.getLogger("agripredict.llm")

OutputT = TypeVar("OutputT", bound=BaseModel)

SYSTEM_PROMPT = (
	"You are an expert agricultural advisor for Indian farmers. "
	"Use only the data provided. "
	"Return strict JSON matching the requested keys, with no prose outside the JSON object."
)

YIELD_PROMPT = (
	"Based on the historical data, weather patterns, and soil metrics provided, predict the crop yield "
	"and provide actionable recommendations. The recommendations should be in the language: {language}.\n\n"
	"If Nitrogen, Phosphorus, and Potassium (N-P-K) levels are not provided in the soil metrics, estimate them "
	"based on the previous crop grown. For example, legumes like soybeans fix nitrogen, so the soil will be "
	"richer in nitrogen. If N-P-K values are provided, use them directly for a more precise prediction.\n\n"
	"Crop Type: {cropType}\n"
	"Region: {region}\n"
	"Area: {area}\n"
	"Previous Crop: {previousCrop}\n"
	"Historical Data: {historicalData}\n"
	"Weather Patterns: {weatherPatterns}\n"
	"Soil Metrics: {soilMetrics}\n\n"
	"Respond with JSON keys: predictedYield (number, tons per hectare), confidenceInterval (string), "
	"recommendations (string covering irrigation, fertilization, and pest control)."
)

RECOMMENDATIONS_PROMPT = (
	"Generate specific farming recommendations for the crop below. "
	"Write every recommendation in the language: {language}.\n\n"
	"Crop Type: {cropType}\n"
	"Region: {region}\n"
	"Area: {area}\n"
	"Predicted Weather Conditions: {predictedWeatherConditions}\n"
	"Soil Metrics: {soilMetrics}\n"
	"Historical Data: {historicalData}\n\n"
	"Respond with JSON keys: irrigationRecommendations, fertilizationRecommendations, "
	"pestControlRecommendations (all strings)."
)

PRIORITY_PROMPT = (
	"Rank the crops best suited to plant next in the region below, most suitable first. "
	"Write each reason in the language: {language}.\n\n"
	"Region: {region}\n"
	"Predicted Weather Conditions: {predictedWeatherConditions}\n"
	"Soil Metrics: {soilMetrics}\n\n"
	"Respond with JSON key crops: a list of objects with cropName (string), "
	"priority (integer starting at 1), and reason (string)."
)


def _extract_json(text: str) -> Any:
	stripped = text.strip()
	if stripped.startswith("```"):
		stripped = stripped.strip("`")
		if stripped.lower().startswith("json"):
			stripped = stripped[4:]
	return json.loads(stripped)


class LLMService:
	def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None):
		self.settings = settings or get_settings()
		self.client = client

	async def predict_crop_yield(self, payload: YieldPredictionInput) -> YieldPrediction:
		return await self._run("predict_crop_yield", YIELD_PROMPT, payload, YieldPrediction)

	async def generate_crop_recommendations(self, payload: CropRecommendationsInput) -> CropRecommendations:
		return await self._run("generate_crop_recommendations", RECOMMENDATIONS_PROMPT, payload, CropRecommendations)

	async def get_prioritized_crops(self, payload: CropPriorityInput) -> PriorityList:
		result = await self._run("get_prioritized_crops", PRIORITY_PROMPT, payload, PriorityList)
		return PriorityList(crops=sorted(result.crops, key=lambda crop: crop.priority))

	async def _run(
		self,
		flow: str,
		template: str,
		payload: BaseModel,
		output_model: type[OutputT],
	) -> OutputT:
		start = time.perf_counter()
		prompt = template.format(**payload.model_dump(by_alias=True))
		try:
			raw = await self.call_llm(prompt)
			result = self.parse_response(raw, output_model)
		except PredictionServiceError as exc:
			_logger.error(
				"llm_call_failed",
				extra={"flow": flow, "error": exc.message, "duration_ms": round((time.perf_counter() - start) * 1000.0, 2)},
			)
			raise
		_logger.info(
			"llm_call",
			extra={"flow": flow, "duration_ms": round((time.perf_counter() - start) * 1000.0, 2)},
		)
		return result

	async def call_llm(self, prompt: str) -> Any:
		if not self.settings.anthropic_api_key:
			raise PredictionServiceError("AI service is not configured (missing API key).")

		headers = {
			"x-api-key": self.settings.anthropic_api_key,
			"anthropic-version": "2023-06-01",
			"content-type": "application/json",
		}
		body = {
			"model": self.settings.anthropic_model,
			"max_tokens": self.settings.anthropic_max_tokens,
			"system": SYSTEM_PROMPT,
			"messages": [{"role": "user", "content": prompt}],
		}

		try:
			if self.client is not None:
				response = await self.client.post(self.settings.anthropic_base_url, headers=headers, json=body)
			else:
				async with httpx.AsyncClient(timeout=self.settings.anthropic_timeout_seconds) as client:
					response = await client.post(self.settings.anthropic_base_url, headers=headers, json=body)
			response.raise_for_status()
			payload = response.json()
		except httpx.HTTPStatusError as exc:
			raise PredictionServiceError(f"AI service returned status {exc.response.status_code}") from exc
		except httpx.HTTPError as exc:
			raise PredictionServiceError(f"AI service request failed: {exc}") from exc
		except ValueError as exc:
			raise PredictionServiceError("AI service returned a non-JSON body") from exc

		content = payload.get("content") if isinstance(payload, dict) else None
		if not isinstance(content, list) or not content or not isinstance(content[0], dict):
			raise PredictionServiceError("AI service returned no content")
		text = str(content[0].get("text") or "")
		try:
			return _extract_json(text)
		except json.JSONDecodeError as exc:
			raise PredictionServiceError("AI service returned output that is not JSON") from exc

	@staticmethod
	def parse_response(raw: Any, output_model: type[OutputT]) -> OutputT:
		if not isinstance(raw, dict):
			raise PredictionServiceError("AI service output is not a JSON object")
		try:
			return output_model.model_validate(raw)
		except SchemaError as exc:
			raise PredictionServiceError(
				f"AI service output does not match {output_model.__name__}: {exc.error_count()} error(s)"
			) from exc
