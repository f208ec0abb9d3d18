"""Error taxonomy shared by services and routes."""

from __future__ import annotations

from typing import Any


class AgriPredictError(Exception):
	"""Base class for every user-visible failure."""

	kind = "unknown_error"

	def __init__(self, message: str):
		super().__init__(message)
		self.message = message


class ValidationError(AgriPredictError):
	"""Form input failed schema validation; carries one entry per bad field."""

	kind = "validation_error"

	def __init__(self, message: str, fields: list[dict[str, Any]] | None = None):
		super().__init__(message)
		self.fields = fields or []


class LocationUnavailableError(AgriPredictError):
	"""Coordinates were not supplied (geolocation denied or unsupported)."""

	kind = "location_unavailable"


class WeatherFetchError(AgriPredictError):
	"""Forecast provider returned a non-success status or an unusable body."""

	kind = "weather_fetch_error"

	def __init__(self, message: str, status_code: int | None = None):
		super().__init__(message)
		self.status_code = status_code


class PredictionServiceError(AgriPredictError):
	"""AI call failed or returned output that does not match its schema."""

	kind = "prediction_service_error"


class UnknownError(AgriPredictError):
	"""Wraps any exception outside the taxonomy above."""

	kind = "unknown_error"

	@classmethod
	def wrap(cls, exc: BaseException) -> UnknownError:
		message = str(exc) or "An unknown error occurred."
		error = cls(message)
		error.__cause__ = exc
		return error
