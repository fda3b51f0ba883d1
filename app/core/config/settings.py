from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

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


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    scoring_config_path: str | None
    ats_debounce_ms: int
    ats_animation_ms: int
    ats_animation_frame_ms: int
    ats_feedback_ms: int
    jd_llm_enabled: bool
    jd_llm_timeout_s: float


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    ats_debounce_ms=_get_env_int("ATS_DEBOUNCE_MS", 800),
    ats_animation_ms=_get_env_int("ATS_ANIMATION_MS", 500),
    ats_animation_frame_ms=_get_env_int("ATS_ANIMATION_FRAME_MS", 16),
    ats_feedback_ms=_get_env_int("ATS_FEEDBACK_MS", 2000),
    jd_llm_enabled=_get_env_bool("JD_LLM_ENABLED", True),
    jd_llm_timeout_s=float(_get_env("JD_LLM_TIMEOUT_S", "20") or "20"),
)

if settings.ats_debounce_ms < 0 or settings.ats_feedback_ms < 0:
    raise RuntimeError("ATS_DEBOUNCE_MS and ATS_FEEDBACK_MS must not be negative.")

if settings.ats_animation_frame_ms <= 0:
    raise RuntimeError("ATS_ANIMATION_FRAME_MS must be a positive number of milliseconds.")
