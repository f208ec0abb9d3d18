"""Structured logging for the API process, with request ID propagation.

Services log through named stdlib loggers (``agripredict.weather`` etc.) with
``extra=`` fields; the stdlib handler renders those records through the same
structlog processor chain so both paths produce one log format.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import LogFormat, Settings, get_settings

REQUEST_ID_HEADER = "x-request-id"
APP_LOGGER = "agripredict"

_configured = False


def _renderer(settings: Settings) -> Any:
	if settings.log_format == LogFormat.console:
		return structlog.dev.ConsoleRenderer()
	return structlog.processors.JSONRenderer(ensure_ascii=False)


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)


def configure_structured_logging() -> None:
	"""Route the ``agripredict`` logger tree and structlog through one renderer."""
	global _configured
	if _configured:
		return

	settings = get_settings()
	level = getattr(logging, settings.log_level.upper(), logging.INFO)
	renderer = _renderer(settings)
	shared: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
	]

	formatter = structlog.stdlib.ProcessorFormatter(
		foreign_pre_chain=[*shared, structlog.stdlib.add_logger_name, structlog.stdlib.ExtraAdder()],
		processors=[
			structlog.stdlib.ProcessorFormatter.remove_processors_meta,
			structlog.processors.format_exc_info,
			renderer,
		],
	)
	handler = logging.StreamHandler()
	handler.setFormatter(formatter)

	app_logger = logging.getLogger(APP_LOGGER)
	app_logger.handlers = [handler]
	app_logger.setLevel(level)
	app_logger.propagate = False

	structlog.configure(
		processors=[*shared, structlog.processors.format_exc_info, renderer],
		wrapper_class=structlog.make_filtering_bound_logger(level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind a request ID for every log line of a request and echo it back."""

	async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
		request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
		request.state.request_id = request_id
		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)

		log = structlog.get_logger(f"{APP_LOGGER}.request").bind(method=request.method)
		start = time.perf_counter()
		try:
			response = await call_next(request)
		except Exception:
			log.exception("request_failed", duration_ms=_elapsed_ms(start))
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		log.info("request_completed", status_code=response.status_code, duration_ms=_elapsed_ms(start))
		return response
