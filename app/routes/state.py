"""Client state routes: saved form snapshot and selected language."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.dependencies import get_client_state
from app.i18n import LANGUAGE_NAMES, I18nContext
from app.schemas.dashboard import ClientStateRead, LanguageUpdate
from app.services.state_service import ClientStateService

router = APIRouter(prefix="/state", tags=["state"])


@router.get("", response_model=ClientStateRead)
async def read_state(
	client_state: ClientStateService = Depends(get_client_state),
) -> ClientStateRead:
	return ClientStateRead(
		form=client_state.form,
		language=client_state.language,
		prediction=client_state.prediction,
		priorities=client_state.priorities,
	)


@router.put("/form", status_code=status.HTTP_204_NO_CONTENT)
async def save_form(
	snapshot: dict[str, Any] = Body(...),
	client_state: ClientStateService = Depends(get_client_state),
) -> None:
	await client_state.save_form(snapshot)


@router.put("/language")
async def set_language(
	payload: LanguageUpdate,
	client_state: ClientStateService = Depends(get_client_state),
) -> dict[str, str]:
	language = await client_state.set_language(payload.language)
	return {"language": language.value, "name": I18nContext(language=language).language_name}


@router.get("/languages")
async def list_languages() -> list[dict[str, str]]:
	return [{"code": code.value, "name": name} for code, name in LANGUAGE_NAMES.items()]
