"""FastAPI dependencies resolving process-wide services from ``app.state``."""

from __future__ import annotations

from fastapi import Request

from app.services.llm_service import LLMService
from app.services.prediction_service import PredictionOrchestrator
from app.services.state_service import ClientStateService
from app.services.weather_service import WeatherService


def get_client_state(request: Request) -> ClientStateService:
	client_state = getattr(request.app.state, "client_state", None)
	if client_state is None:
		client_state = ClientStateService(getattr(request.app.state, "redis", None))
		request.app.state.client_state = client_state
	return client_state


def get_orchestrator(request: Request) -> PredictionOrchestrator:
	orchestrator = getattr(request.app.state, "orchestrator", None)
	if orchestrator is None:
		orchestrator = PredictionOrchestrator(WeatherService(), LLMService())
		request.app.state.orchestrator = orchestrator
	return orchestrator
