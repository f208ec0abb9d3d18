from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

from app.errors import WeatherFetchError
from app.services.prediction_service import PredictionOrchestrator
from app.services.state_service import ClientStateService
from tests.fakes import FakeLLMService, FakeWeatherService


@pytest.mark.asyncio
async def test_prediction_end_to_end(
    client: AsyncClient,
    client_state: ClientStateService,
    farm_form: dict[str, Any],
    coordinates: dict[str, float],
) -> None:
    response = await client.post(
        "/api/v1/predictions",
        json={"form": farm_form, "coordinates": coordinates, "language": "en"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["yield_prediction"]["predicted_yield"] == 5.0
    assert body["weather"] == {"temperature": 25.0, "humidity": 60.0, "rainfall": 50.0}
    assert body["total_yield_tons"] == pytest.approx(1.2658, abs=1e-4)
    assert body["recommendations"]["irrigation_recommendations"]
    assert client_state.prediction is not None
    assert client_state.form == farm_form

    latest = await client.get("/api/v1/predictions/latest")
    assert latest.status_code == 200
    assert latest.json()["yield_prediction"]["confidence_interval"] == "4.5 - 5.5 t/ha"


@pytest.mark.asyncio
async def test_prediction_without_location_is_rejected(
    client: AsyncClient,
    fake_weather: FakeWeatherService,
    farm_form: dict[str, Any],
) -> None:
    response = await client.post("/api/v1/predictions", json={"form": farm_form, "language": "en"})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "location_unavailable"
    assert fake_weather.calls == []


@pytest.mark.asyncio
async def test_prediction_validation_errors_are_per_field(
    client: AsyncClient,
    coordinates: dict[str, float],
) -> None:
    response = await client.post(
        "/api/v1/predictions",
        json={"form": {"crop_type": "Wheat", "region": "Punjab", "soil_ph": -1}, "coordinates": coordinates},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "validation_error"
    fields = {item["field"] for item in detail["fields"]}
    assert {"soil_ph", "area_biswa"} <= fields


@pytest.mark.asyncio
async def test_weather_failure_maps_to_bad_gateway(
    client: AsyncClient,
    orchestrator: PredictionOrchestrator,
    fake_llm: FakeLLMService,
    farm_form: dict[str, Any],
    coordinates: dict[str, float],
) -> None:
    orchestrator.weather_service = FakeWeatherService(  # type: ignore[assignment]
        error=WeatherFetchError("Failed to fetch weather data (status 500).", status_code=500)
    )

    response = await client.post(
        "/api/v1/predictions",
        json={"form": farm_form, "coordinates": coordinates, "language": "hi"},
    )

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["upstream_status"] == 500
    assert detail["title"] == "एक त्रुटि हुई"
    assert detail["message"].startswith("पूर्वानुमान प्राप्त करने में विफल: ")
    assert fake_llm.call_count == 0


@pytest.mark.asyncio
async def test_failed_prediction_leaves_no_result(
    client: AsyncClient,
    orchestrator: PredictionOrchestrator,
    client_state: ClientStateService,
    farm_form: dict[str, Any],
    coordinates: dict[str, float],
) -> None:
    ok = await client.post("/api/v1/predictions", json={"form": farm_form, "coordinates": coordinates})
    assert ok.status_code == 200

    orchestrator.weather_service = FakeWeatherService(error=WeatherFetchError("down"))  # type: ignore[assignment]
    failed = await client.post("/api/v1/predictions", json={"form": farm_form, "coordinates": coordinates})

    assert failed.status_code == 502
    assert client_state.prediction is None
    assert (await client.get("/api/v1/predictions/latest")).status_code == 404


@pytest.mark.asyncio
async def test_priorities_endpoint(
    client: AsyncClient,
    client_state: ClientStateService,
    coordinates: dict[str, float],
) -> None:
    response = await client.post(
        "/api/v1/priorities",
        json={"form": {"region": "Punjab", "soil_ph": 6.5}, "coordinates": coordinates},
    )

    assert response.status_code == 200
    crops = response.json()["crops"]
    assert crops[0] == {"crop_name": "Wheat", "priority": 1, "reason": "Suits cool dry weather."}
    assert client_state.priorities is not None
    assert client_state.prediction is None


@pytest.mark.asyncio
async def test_calculator_quintal_revenue(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/calculator",
        json={"yield_per_hectare": 3.0, "area_biswa": 79, "unit": "q/bigha", "price": "2275"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["converted_yield"] == pytest.approx(30.0)
    assert body["revenue"] == pytest.approx(30.0 * 2275)
    assert body["unit_label"] == "quintals"


@pytest.mark.asyncio
async def test_calculator_blank_price_gives_zero_revenue(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/calculator",
        json={"yield_per_hectare": 5.0, "area_biswa": 20, "price": ""},
    )

    assert response.status_code == 200
    assert response.json()["revenue"] == 0.0


@pytest.mark.asyncio
async def test_dashboard_includes_predicted_bar(
    client: AsyncClient,
    farm_form: dict[str, Any],
    coordinates: dict[str, float],
) -> None:
    before = (await client.get("/api/v1/dashboard")).json()
    assert before["total_yield_tons"] is None
    assert len(before["chart"]) == 5

    await client.post("/api/v1/predictions", json={"form": farm_form, "coordinates": coordinates})
    after = (await client.get("/api/v1/dashboard")).json()

    assert after["chart"][-1] == {"name": "2025", "yield": 5.0, "predicted": True}
    assert after["yield_per_hectare"] == 5.0
    assert after["total_yield_tons"] == pytest.approx(1.2658, abs=1e-4)
    assert after["previous_crop"] == "Rice"


@pytest.mark.asyncio
async def test_state_round_trip(client: AsyncClient) -> None:
    saved = await client.put("/api/v1/state/form", json={"crop_type": "Cotton", "area_biswa": ""})
    assert saved.status_code == 204

    language = await client.put("/api/v1/state/language", json={"language": "xx"})
    assert language.json() == {"language": "en", "name": "English"}

    state = (await client.get("/api/v1/state")).json()
    assert state["form"] == {"crop_type": "Cotton", "area_biswa": ""}
    assert state["language"] == "en"
    assert state["prediction"] is None


@pytest.mark.asyncio
async def test_health_echoes_request_id(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"x-request-id": "req-123"})
    assert response.status_code == 200
    assert response.headers["x-request-id"] == "req-123"

    generated = await client.get("/health")
    assert len(generated.headers["x-request-id"]) >= 8


@pytest.mark.asyncio
async def test_non_finite_area_is_a_validation_error(
    client: AsyncClient,
    fake_llm: FakeLLMService,
    farm_form: dict[str, Any],
    coordinates: dict[str, float],
) -> None:
    farm_form["area_biswa"] = "inf"
    response = await client.post("/api/v1/predictions", json={"form": farm_form, "coordinates": coordinates})

    assert response.status_code == 422
    assert [item["field"] for item in response.json()["detail"]["fields"]] == ["area_biswa"]
    assert fake_llm.call_count == 0


@pytest.mark.asyncio
async def test_calculator_overflow_is_rejected(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/calculator",
        json={"yield_per_hectare": 1e308, "area_biswa": 1e308, "price": "2275"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_dashboard_survives_malformed_snapshot(client: AsyncClient) -> None:
    saved = await client.put(
        "/api/v1/state/form",
        json={"previous_crop": 5, "soil_ph": "acidic", "area_biswa": True},
    )
    assert saved.status_code == 204

    response = await client.get("/api/v1/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["previous_crop"] is None
    assert body["soil_ph"] is None
    assert body["area_biswa"] == 0.0
