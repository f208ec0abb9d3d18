"""Prediction orchestration: validate, fetch weather, compose, fan out AI calls, settle."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from app.errors import (
	AgriPredictError,
	LocationUnavailableError,
	UnknownError,
	ValidationError,
)
from app.i18n import I18nContext
from app.models.enums import CropType
from app.schemas.ai import CropPriorityInput, CropRecommendationsInput, YieldPredictionInput
from app.schemas.farm import Coordinates, PredictionForm, PriorityForm
from app.schemas.prediction import PredictionResult, PriorityList
from app.services.composer import compose_prediction_inputs, compose_priority_inputs
from app.services.llm_service import LLMService
from app.services.weather_service import WeatherService

_logger = logging.getLogger("agripredict.orchestrator")

FormT = TypeVar("FormT", bound=BaseModel)
ResultT = TypeVar("ResultT")

PREDICTION_FLOW = "prediction"
PRIORITY_FLOW = "priority"


class PredictionState(StrEnum):
	idle = "idle"
	validating = "validating"
	fetching = "fetching"
	succeeded = "succeeded"
	failed = "failed"


@dataclass
class Settlement(Generic[ResultT]):
	flow: str
	request_id: int
	state: PredictionState
	result: ResultT | None = None
	error: AgriPredictError | None = None
	form: BaseModel | None = None

	@property
	def ok(self) -> bool:
		return self.state == PredictionState.succeeded


def validate_form(raw: dict[str, Any], model: type[FormT]) -> FormT:
	try:
		return model.model_validate(raw)
	except SchemaError as exc:
		fields = [
			{
				"field": ".".join(str(part) for part in error["loc"]),
				"message": error["msg"],
			}
			for error in exc.errors()
		]
		raise ValidationError("Invalid form input", fields=fields) from exc


def _require_coordinates(coordinates: Coordinates | None) -> Coordinates:
	if coordinates is None:
		raise LocationUnavailableError("Location is unavailable; enable location access to continue.")
	return coordinates


class PredictionOrchestrator:
	"""Runs the prediction and crop-priority flows as independent state machines."""

	def __init__(
		self,
		weather_service: WeatherService,
		llm_service: LLMService,
		rng: random.Random | None = None,
	):
		self.weather_service = weather_service
		self.llm_service = llm_service
		self.rng = rng
		self.states: dict[str, PredictionState] = {
			PREDICTION_FLOW: PredictionState.idle,
			PRIORITY_FLOW: PredictionState.idle,
		}
		self._newest_request: dict[str, int] = {PREDICTION_FLOW: 0, PRIORITY_FLOW: 0}

	def _transition(self, flow: str, state: PredictionState, request_id: int) -> None:
		# states[flow] tracks the newest submission; older in-flight requests only log
		if request_id < self._newest_request[flow]:
			_logger.debug("stale_flow_transition", extra={"flow": flow, "state": state.value, "request_id": request_id})
			return
		self._newest_request[flow] = request_id
		self.states[flow] = state
		_logger.debug("flow_transition", extra={"flow": flow, "state": state.value, "request_id": request_id})

	def _settle_failure(self, flow: str, request_id: int, exc: Exception) -> Settlement[Any]:
		error = exc if isinstance(exc, AgriPredictError) else UnknownError.wrap(exc)
		self._transition(flow, PredictionState.failed, request_id)
		_logger.warning(
			"flow_failed",
			extra={"flow": flow, "request_id": request_id, "error_kind": error.kind, "error": error.message},
		)
		return Settlement(flow=flow, request_id=request_id, state=PredictionState.failed, error=error)

	async def predict(
		self,
		raw_form: dict[str, Any],
		coordinates: Coordinates | None,
		i18n: I18nContext,
		request_id: int = 0,
	) -> Settlement[PredictionResult]:
		flow = PREDICTION_FLOW
		self._transition(flow, PredictionState.validating, request_id)
		try:
			form = validate_form(raw_form, PredictionForm)
			location = _require_coordinates(coordinates)

			self._transition(flow, PredictionState.fetching, request_id)
			weather = await self.weather_service.fetch_summary(location)
			inputs = compose_prediction_inputs(form, weather, self.rng)
			area = f"{form.area_biswa:g} biswa"

			yield_task = asyncio.create_task(
				self.llm_service.predict_crop_yield(
					YieldPredictionInput(
						crop_type=form.crop_type.value,
						region=form.region.value,
						historical_data=inputs.historical_data,
						weather_patterns=inputs.weather_patterns,
						soil_metrics=inputs.soil_metrics,
						previous_crop=(form.previous_crop or CropType.fallow).value,
						language=i18n.language_name,
						area=area,
					)
				)
			)
			recommendations_task = asyncio.create_task(
				self.llm_service.generate_crop_recommendations(
					CropRecommendationsInput(
						crop_type=form.crop_type.value,
						region=form.region.value,
						predicted_weather_conditions=inputs.weather_patterns,
						soil_metrics=inputs.soil_metrics,
						historical_data=inputs.historical_data,
						language=i18n.language_name,
						area=area,
					)
				)
			)
			# join-all: both calls resolve before the first failure is raised
			outcomes = await asyncio.gather(yield_task, recommendations_task, return_exceptions=True)
			for outcome in outcomes:
				if isinstance(outcome, BaseException):
					raise outcome
			yield_prediction, recommendations = outcomes
		except Exception as exc:
			return self._settle_failure(flow, request_id, exc)

		self._transition(flow, PredictionState.succeeded, request_id)
		return Settlement(
			flow=flow,
			request_id=request_id,
			state=PredictionState.succeeded,
			result=PredictionResult(
				yield_prediction=yield_prediction,
				recommendations=recommendations,
				weather=weather,
			),
			form=form,
		)

	async def prioritize(
		self,
		raw_form: dict[str, Any],
		coordinates: Coordinates | None,
		i18n: I18nContext,
		request_id: int = 0,
	) -> Settlement[PriorityList]:
		flow = PRIORITY_FLOW
		self._transition(flow, PredictionState.validating, request_id)
		try:
			form = validate_form(raw_form, PriorityForm)
			location = _require_coordinates(coordinates)

			self._transition(flow, PredictionState.fetching, request_id)
			weather = await self.weather_service.fetch_summary(location)
			inputs = compose_priority_inputs(form, weather)
			priorities = await self.llm_service.get_prioritized_crops(
				CropPriorityInput(
					region=form.region.value,
					predicted_weather_conditions=inputs.weather_patterns,
					soil_metrics=inputs.soil_metrics,
					language=i18n.language_name,
				)
			)
		except Exception as exc:
			return self._settle_failure(flow, request_id, exc)

		self._transition(flow, PredictionState.succeeded, request_id)
		return Settlement(
			flow=flow,
			request_id=request_id,
			state=PredictionState.succeeded,
			result=priorities,
			form=form,
		)
