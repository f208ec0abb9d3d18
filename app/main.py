"""FastAPI application entrypoint: lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.config import get_settings
from app.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from app.routes import dashboard, predictions, state
from app.services.llm_service import LLMService
from app.services.prediction_service import PredictionOrchestrator
from app.services.state_service import ClientStateService
from app.services.weather_service import WeatherService

API_VERSION = "0.1.0"

logger = logging.getLogger("agripredict")


async def _connect_redis(url: str) -> Redis | None:
    """Connect to the state cache; the API still serves without it."""
    redis = Redis.from_url(url, decode_responses=True)
    try:
        await redis.ping()
    except (RedisError, OSError) as exc:
        logger.error("redis_unavailable", extra={"error": str(exc)})
        await redis.aclose()
        return None
    return redis


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup replays the saved form and language before serving.

    Redis is optional: without it client state lives in memory only.
    """
    configure_structured_logging()
    settings = get_settings()

    redis = await _connect_redis(settings.redis_url)
    client_state = ClientStateService(redis, settings)
    await client_state.load()

    app.state.redis = redis
    app.state.client_state = client_state
    app.state.orchestrator = PredictionOrchestrator(WeatherService(settings), LLMService(settings))
    logger.info(
        "startup_complete",
        extra={
            "redis": redis is not None,
            "ai_configured": bool(settings.anthropic_api_key),
            "language": client_state.language.value,
        },
    )

    yield

    if redis is not None:
        await redis.aclose()
    logger.info("shutdown_complete")


app = FastAPI(
    title="AgriPredict API",
    description=(
        "Crop yield prediction for Indian farms: a 7-day weather forecast and "
        "soil inputs go to a generative model, and results come back in biswa, "
        "bigha and quintal terms."
    ),
    version=API_VERSION,
    lifespan=lifespan,
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["*"],
    expose_headers=["x-request-id"],
)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health", tags=["system"])
async def health_check(request: Request) -> dict[str, object]:
    settings = get_settings()
    return {
        "status": "ok",
        "version": API_VERSION,
        "state_cache": getattr(request.app.state, "redis", None) is not None,
        "ai_configured": bool(settings.anthropic_api_key),
    }


# ── Routers ─────────────────────────────────────────────────────────────────
for router_module in (predictions, dashboard, state):
    app.include_router(router_module.router, prefix="/api/v1")
