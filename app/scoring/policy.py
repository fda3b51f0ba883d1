from __future__ import annotations

import re
from dataclasses import dataclass
from fractions import Fraction
from functools import lru_cache
from typing import Any, Iterable

from app.core.config.scoring import ScoringConfigError, get_scoring_config

CATEGORIES = ("structure", "keywords", "content", "readability", "completeness")


@dataclass(frozen=True)
class RatioPenalty:
    below: float
    penalty: int


@dataclass(frozen=True)
class SignalLadder:
    risk_below: float
    needs_improvement_below: float


@dataclass(frozen=True)
class ScoringPolicy:
    """Constants and pattern lists read by the category scorers.

    Weights are kept as exact fractions so that the weighted sum rounds the
    same way regardless of binary float representation.
    """

    weights: dict[str, Fraction]
    structure_penalties: dict[str, int]
    structure_min_summary_chars: int
    keyword_default_score: int
    action_verb_pattern: re.Pattern[str]
    metric_patterns: tuple[re.Pattern[str], ...]
    action_verb_penalties: tuple[RatioPenalty, ...]
    metric_penalties: tuple[RatioPenalty, ...]
    summary_max_chars: int
    summary_long_penalty: int
    summary_min_chars: int
    summary_short_penalty: int
    bullet_max_mean_chars: int
    bullet_long_penalty: int
    bullet_min_mean_chars: int
    bullet_short_penalty: int
    completeness_min_summary_chars: int
    summary_signal: SignalLadder
    experience_signal: SignalLadder
    skills_signal: SignalLadder
    significant_delta: int
    measurable_delta: int
    regression_delta: int
    high_score_threshold: int


def build_action_verb_pattern(verbs: Iterable[str]) -> re.Pattern[str]:
    alternatives = [re.escape(verb.strip()) for verb in verbs if verb and verb.strip()]
    if not alternatives:
        raise ScoringConfigError("content.action_verbs must list at least one verb.")
    return re.compile(rf"^(?:{'|'.join(alternatives)})", re.IGNORECASE)


def _require(section: dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(section, dict) or key not in section:
        raise ScoringConfigError(f"Scoring config is missing '{where}.{key}'.")
    return section[key]


def _ratio_penalties(raw: Any, where: str) -> tuple[RatioPenalty, ...]:
    if not isinstance(raw, list):
        raise ScoringConfigError(f"Scoring config '{where}' must be a list.")
    return tuple(
        RatioPenalty(below=float(_require(item, "below", where)), penalty=int(_require(item, "penalty", where)))
        for item in raw
    )


def _ladder(raw: dict[str, Any], where: str) -> SignalLadder:
    return SignalLadder(
        risk_below=float(_require(raw, "risk_below", where)),
        needs_improvement_below=float(_require(raw, "needs_improvement_below", where)),
    )


def policy_from_config(config: dict[str, Any]) -> ScoringPolicy:
    raw_weights = _require(config, "weights", "root")
    weights = {name: Fraction(str(_require(raw_weights, name, "weights"))) for name in CATEGORIES}
    if sum(weights.values()) != 1:
        raise ScoringConfigError(
            f"Scoring weights must sum to 1.0, got {float(sum(weights.values()))}."
        )

    structure = _require(config, "structure", "root")
    content = _require(config, "content", "root")
    readability = _require(config, "readability", "root")
    signals = _require(config, "signals", "root")
    feedback = _require(config, "feedback", "root")

    try:
        metric_patterns = tuple(
            re.compile(pattern, re.IGNORECASE) for pattern in _require(content, "metric_patterns", "content")
        )
    except re.error as exc:
        raise ScoringConfigError(f"Invalid regex in content.metric_patterns: {exc}") from exc

    return ScoringPolicy(
        weights=weights,
        structure_penalties={key: int(value) for key, value in _require(structure, "penalties", "structure").items()},
        structure_min_summary_chars=int(_require(structure, "min_summary_chars", "structure")),
        keyword_default_score=int(_require(_require(config, "keywords", "root"), "default_score", "keywords")),
        action_verb_pattern=build_action_verb_pattern(_require(content, "action_verbs", "content")),
        metric_patterns=metric_patterns,
        action_verb_penalties=_ratio_penalties(_require(content, "action_verb_ratio", "content"), "content.action_verb_ratio"),
        metric_penalties=_ratio_penalties(_require(content, "metric_ratio", "content"), "content.metric_ratio"),
        summary_max_chars=int(_require(readability, "summary_max_chars", "readability")),
        summary_long_penalty=int(_require(readability, "summary_long_penalty", "readability")),
        summary_min_chars=int(_require(readability, "summary_min_chars", "readability")),
        summary_short_penalty=int(_require(readability, "summary_short_penalty", "readability")),
        bullet_max_mean_chars=int(_require(readability, "bullet_max_mean_chars", "readability")),
        bullet_long_penalty=int(_require(readability, "bullet_long_penalty", "readability")),
        bullet_min_mean_chars=int(_require(readability, "bullet_min_mean_chars", "readability")),
        bullet_short_penalty=int(_require(readability, "bullet_short_penalty", "readability")),
        completeness_min_summary_chars=int(
            _require(_require(config, "completeness", "root"), "min_summary_chars", "completeness")
        ),
        summary_signal=_ladder(_require(signals, "summary", "signals"), "signals.summary"),
        experience_signal=_ladder(_require(signals, "experience", "signals"), "signals.experience"),
        skills_signal=_ladder(_require(signals, "skills", "signals"), "signals.skills"),
        significant_delta=int(_require(feedback, "significant_delta", "feedback")),
        measurable_delta=int(_require(feedback, "measurable_delta", "feedback")),
        regression_delta=int(_require(feedback, "regression_delta", "feedback")),
        high_score_threshold=int(config.get("high_score_threshold", 90)),
    )


@lru_cache(maxsize=1)
def default_policy() -> ScoringPolicy:
    return policy_from_config(get_scoring_config())
