"""Revenue calculator and dashboard insight routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_client_state
from app.i18n import I18nContext
from app.schemas.dashboard import CalculatorRequest, CalculatorResponse, DashboardInsights
from app.services.dashboard_service import build_insights
from app.services.state_service import ClientStateService
from app.services.units import convert_yield, estimate_revenue

router = APIRouter(tags=["dashboard"])


@router.post("/calculator", response_model=CalculatorResponse)
async def calculate_revenue(
	payload: CalculatorRequest,
	client_state: ClientStateService = Depends(get_client_state),
) -> CalculatorResponse:
	i18n = I18nContext(language=client_state.language)
	try:
		converted = convert_yield(payload.yield_per_hectare, payload.area_biswa, payload.unit)
		revenue = estimate_revenue(converted.value, payload.price)
	except ValueError as exc:
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
	return CalculatorResponse(
		unit=converted.unit,
		converted_yield=converted.value,
		unit_label=i18n.t(converted.unit_label),
		price_label=i18n.t(converted.price_label),
		revenue=revenue,
	)


@router.get("/dashboard", response_model=DashboardInsights)
async def get_dashboard(
	client_state: ClientStateService = Depends(get_client_state),
) -> DashboardInsights:
	return build_insights(client_state.form, client_state.prediction)
