from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def _get_api_key(name: str) -> str | None:
    value = (_get_env(name) or "").strip()
    if not value or _looks_like_placeholder(value):
        return None
    return value


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    gemini_api_key: str | None
    gemini_base_url: str
    gemini_models: tuple[str, ...]
    openai_api_key: str | None
    openai_base_url: str | None
    openai_model: str
    ai_timeout_s: float
    ai_max_retries: int
    rate_limit_retry_delay_s: float
    analysis_store_enabled: bool
    analysis_db_path: str


def load_settings() -> Settings:
    return Settings(
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        gemini_api_key=_get_api_key("GEMINI_API_KEY"),
        gemini_base_url=_get_env("GEMINI_BASE_URL", _GEMINI_OPENAI_BASE_URL) or _GEMINI_OPENAI_BASE_URL,
        gemini_models=_get_env_list(
            "GEMINI_MODELS",
            ["gemini-2.5-flash-lite", "gemini-2.5-flash", "gemini-2.0-flash-lite"],
        ),
        openai_api_key=_get_api_key("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        openai_model=(_get_env("OPENAI_MODEL", "gpt-3.5-turbo") or "gpt-3.5-turbo").strip(),
        ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 60.0),
        # SDK-level retries stay at 0 so the fallback chain owns the retry policy.
        ai_max_retries=_get_env_int("AI_MAX_RETRIES", 0),
        rate_limit_retry_delay_s=_get_env_float("AI_RATE_LIMIT_RETRY_DELAY_S", 10.0),
        analysis_store_enabled=_get_env_bool("ANALYSIS_STORE_ENABLED", True),
        analysis_db_path=_get_env("ANALYSIS_DB_PATH", "data/analyses.db") or "data/analyses.db",
    )


settings = load_settings()

if settings.rate_limit_retry_delay_s < 0:
    raise RuntimeError("AI_RATE_LIMIT_RETRY_DELAY_S must not be negative.")
