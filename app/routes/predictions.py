"""Yield prediction and crop priority routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_client_state, get_orchestrator
from app.errors import (
	AgriPredictError,
	LocationUnavailableError,
	PredictionServiceError,
	ValidationError,
	WeatherFetchError,
)
from app.i18n import I18nContext
from app.schemas.farm import PredictionForm
from app.schemas.prediction import FlowRequest, PredictionResponse, PredictionResult, PriorityList
from app.services.prediction_service import PREDICTION_FLOW, PRIORITY_FLOW, PredictionOrchestrator
from app.services.state_service import ClientStateService
from app.services.units import tons_for_area

router = APIRouter(tags=["predictions"])


def _map_error(exc: AgriPredictError, i18n: I18nContext, failure_key: str) -> HTTPException:
	detail: dict[str, object] = {
		"error": exc.kind,
		"title": i18n.t("errorOccurred"),
		"message": f"{i18n.t(failure_key)}: {exc.message}",
	}
	if isinstance(exc, ValidationError):
		detail["fields"] = exc.fields
		return HTTPException(status_code=422, detail=detail)
	if isinstance(exc, LocationUnavailableError):
		detail["message"] = i18n.t("locationError")
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
	if isinstance(exc, WeatherFetchError):
		detail["upstream_status"] = exc.status_code
		return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
	if isinstance(exc, PredictionServiceError):
		return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _i18n_for(payload: FlowRequest, client_state: ClientStateService) -> I18nContext:
	if payload.language is not None:
		return I18nContext.for_language(payload.language)
	return I18nContext(language=client_state.language)


@router.post("/predictions", response_model=PredictionResponse)
async def create_prediction(
	payload: FlowRequest,
	client_state: ClientStateService = Depends(get_client_state),
	orchestrator: PredictionOrchestrator = Depends(get_orchestrator),
) -> PredictionResponse:
	i18n = _i18n_for(payload, client_state)
	request_id = client_state.begin(PREDICTION_FLOW)
	await client_state.save_form(payload.form)

	settlement = await orchestrator.predict(payload.form, payload.coordinates, i18n, request_id=request_id)
	client_state.apply(settlement)
	if not settlement.ok or settlement.result is None:
		assert settlement.error is not None
		raise _map_error(settlement.error, i18n, "failedPredictions")

	form = settlement.form
	assert isinstance(form, PredictionForm)
	result = settlement.result
	return PredictionResponse(
		yield_prediction=result.yield_prediction,
		recommendations=result.recommendations,
		weather=result.weather,
		request_id=request_id,
		area_biswa=form.area_biswa,
		total_yield_tons=tons_for_area(result.yield_prediction.predicted_yield, form.area_biswa),
	)


@router.get("/predictions/latest", response_model=PredictionResult)
async def latest_prediction(
	client_state: ClientStateService = Depends(get_client_state),
) -> PredictionResult:
	if client_state.prediction is None:
		raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No prediction available")
	return client_state.prediction


@router.post("/priorities", response_model=PriorityList)
async def create_priorities(
	payload: FlowRequest,
	client_state: ClientStateService = Depends(get_client_state),
	orchestrator: PredictionOrchestrator = Depends(get_orchestrator),
) -> PriorityList:
	i18n = _i18n_for(payload, client_state)
	request_id = client_state.begin(PRIORITY_FLOW)

	settlement = await orchestrator.prioritize(payload.form, payload.coordinates, i18n, request_id=request_id)
	client_state.apply(settlement)
	if not settlement.ok or settlement.result is None:
		assert settlement.error is not None
		raise _map_error(settlement.error, i18n, "failedPriorities")
	return settlement.result


@router.get("/priorities/latest", response_model=PriorityList)
async def latest_priorities(
	client_state: ClientStateService = Depends(get_client_state),
) -> PriorityList:
	if client_state.priorities is None:
		raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No crop priorities available")
	return client_state.priorities
