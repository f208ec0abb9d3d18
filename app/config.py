"""Runtime settings for AgriPredict, read from ``AGRIPREDICT_*`` env vars or ``.env``."""

from enum import StrEnum
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AGRIPREDICT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ── Client state cache ──────────────────────────────────────────────────
    redis_url: str = "redis://localhost:6379/0"
    form_state_key: str = "agripredict:form_state"
    language_key: str = "agripredict:language"

    # ── Open-Meteo ──────────────────────────────────────────────────────────
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    weather_timeout_seconds: float = 10.0
    forecast_days: int = 7

    # ── Generative model ────────────────────────────────────────────────────
    anthropic_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("AGRIPREDICT_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY", "anthropic_api_key"),
    )
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    anthropic_base_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_timeout_seconds: float = 30.0
    anthropic_max_tokens: int = 1024

    default_language: str = "en"

    # ── Logging ─────────────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    return Settings()
