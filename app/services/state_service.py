"""Client state: last form snapshot, language and results, cached in Redis."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError as SchemaError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.config import Settings, get_settings
from app.i18n import resolve_language
from app.models.enums import LanguageCode
from app.schemas.farm import DEFAULT_FORM, PredictionForm
from app.schemas.prediction import PredictionResult, PriorityList
from app.services.prediction_service import PREDICTION_FLOW, PRIORITY_FLOW, Settlement

_logger = logging.getLogger("agripredict.state")


class ClientStateService:
	"""Process-wide UI state; Redis writes are best-effort and never raise."""

	def __init__(self, redis_client: Redis | None = None, settings: Settings | None = None):
		self.redis_client = redis_client
		self.settings = settings or get_settings()
		self.form: dict[str, Any] = dict(DEFAULT_FORM)
		self.language: LanguageCode = resolve_language(self.settings.default_language)
		self.prediction: PredictionResult | None = None
		self.priorities: PriorityList | None = None
		self._latest_request: dict[str, int] = {PREDICTION_FLOW: 0, PRIORITY_FLOW: 0}

	async def load(self) -> None:
		"""Replay the saved form and language; anything unusable is silently dropped."""
		if self.redis_client is None:
			return
		try:
			saved_form = await self.redis_client.get(self.settings.form_state_key)
			saved_language = await self.redis_client.get(self.settings.language_key)
		except (RedisError, OSError) as exc:
			_logger.error("client_state_load_failed", extra={"error": str(exc)})
			return

		if saved_form is not None:
			try:
				form = PredictionForm.model_validate(json.loads(saved_form))
				self.form = form.model_dump(mode="json")
			except (ValueError, TypeError, SchemaError):
				_logger.info("client_state_form_discarded")
		if saved_language is not None:
			self.language = resolve_language(saved_language)

	async def _write(self, key: str, value: str) -> None:
		if self.redis_client is None:
			return
		try:
			await self.redis_client.set(key, value)
		except (RedisError, OSError) as exc:
			_logger.error("client_state_write_failed", extra={"key": key, "error": str(exc)})

	async def save_form(self, snapshot: dict[str, Any]) -> None:
		"""Persist a possibly partial form snapshot."""
		self.form = dict(snapshot)
		try:
			serialized = json.dumps(snapshot)
		except (TypeError, ValueError) as exc:
			_logger.error("client_state_serialize_failed", extra={"error": str(exc)})
			return
		await self._write(self.settings.form_state_key, serialized)

	async def set_language(self, value: Any) -> LanguageCode:
		self.language = resolve_language(value)
		await self._write(self.settings.language_key, self.language.value)
		return self.language

	def begin(self, flow: str) -> int:
		"""Start a submission for ``flow``; returns its request id."""
		request_id = self._latest_request[flow] + 1
		self._latest_request[flow] = request_id
		if flow == PREDICTION_FLOW:
			self.prediction = None
		else:
			self.priorities = None
		return request_id

	def is_current(self, flow: str, request_id: int) -> bool:
		return self._latest_request[flow] == request_id

	def apply(self, settlement: Settlement[Any]) -> bool:
		"""Store a successful result unless a newer submission of the same flow exists."""
		if not self.is_current(settlement.flow, settlement.request_id):
			_logger.info(
				"stale_settlement_discarded",
				extra={"flow": settlement.flow, "request_id": settlement.request_id},
			)
			return False
		if not settlement.ok:
			return False
		if settlement.flow == PREDICTION_FLOW:
			self.prediction = settlement.result
		else:
			self.priorities = settlement.result
		return True
