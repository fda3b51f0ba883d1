from __future__ import annotations

import json
import logging
import os
import time
from functools import lru_cache
from typing import Any

from openai import OpenAI

from app.core.config import settings

logger = logging.getLogger(__name__)


class ResumeLLMError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def llm_enabled() -> bool:
    if not settings.jd_llm_enabled:
        return False
    provider = (os.getenv("AI_PROVIDER") or "openai").strip().lower()
    if provider != "openai":
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        return False
    return True


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=settings.jd_llm_timeout_s,
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )


def _model() -> str:
    return (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()


def _request_json(system_prompt: str, user_prompt: str, temperature: float, max_output_tokens: int) -> dict[str, Any]:
    response = _client().chat.completions.create(
        model=_model(),
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        temperature=temperature,
        response_format={"type": "json_object"},
        max_tokens=max_output_tokens,
    )
    content = response.choices[0].message.content if response.choices else ""
    if not content:
        raise ResumeLLMError("Provider returned an empty response.", code="empty_response")
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ResumeLLMError("Provider returned invalid JSON.", code="invalid_json") from exc
    if not isinstance(parsed, dict):
        raise ResumeLLMError("Provider returned JSON that is not an object.", code="invalid_schema")
    return parsed


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.2,
    max_output_tokens: int = 900,
    task: str = "unknown",
) -> dict[str, Any] | None:
    """JSON-mode completion. Returns None when disabled or on any provider failure."""
    if not llm_enabled():
        logger.debug("resume_llm_skipped task=%s reason=llm_disabled", task)
        return None

    started = time.perf_counter()
    try:
        payload = _request_json(system_prompt, user_prompt, temperature, max_output_tokens)
    except ResumeLLMError as exc:
        logger.warning("resume_llm_invalid task=%s model=%s code=%s", task, _model(), exc.code)
        return None
    except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
        logger.warning("resume_llm_failed task=%s model=%s prompt_len=%s: %s", task, _model(), len(user_prompt), exc)
        return None

    logger.info(
        "resume_llm_success task=%s model=%s latency_ms=%s",
        task,
        _model(),
        int((time.perf_counter() - started) * 1000),
    )
    return payload
