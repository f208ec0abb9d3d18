"""Shared pytest fixtures: async test client, fake Redis, fake weather and AI services."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.dependencies import get_client_state, get_orchestrator
from app.main import app
from app.services.prediction_service import PredictionOrchestrator
from app.services.state_service import ClientStateService
from tests.fakes import FakeLLMService, FakeRedis, FakeWeatherService


@pytest.fixture
def settings() -> Settings:
	return Settings(anthropic_api_key="test-key", redis_url="redis://unused:6379/0")


@pytest.fixture
def farm_form() -> dict[str, Any]:
	return {
		"crop_type": "Wheat",
		"region": "Punjab",
		"area_biswa": 20,
		"soil_ph": 6.5,
		"previous_crop": "Rice",
	}


@pytest.fixture
def coordinates() -> dict[str, float]:
	return {"latitude": 30.9, "longitude": 75.85}


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
def fake_weather() -> FakeWeatherService:
	return FakeWeatherService()


@pytest.fixture
def fake_llm() -> FakeLLMService:
	return FakeLLMService()


@pytest.fixture
def client_state(fake_redis: FakeRedis, settings: Settings) -> ClientStateService:
	return ClientStateService(fake_redis, settings)  # type: ignore[arg-type]


@pytest.fixture
def orchestrator(fake_weather: FakeWeatherService, fake_llm: FakeLLMService) -> PredictionOrchestrator:
	return PredictionOrchestrator(fake_weather, fake_llm)  # type: ignore[arg-type]


@pytest.fixture
async def client(
	client_state: ClientStateService,
	orchestrator: PredictionOrchestrator,
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and services replaced by fakes."""

	app.dependency_overrides[get_client_state] = lambda: client_state
	app.dependency_overrides[get_orchestrator] = lambda: orchestrator
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
