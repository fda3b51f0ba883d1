from __future__ import annotations

import math
from fractions import Fraction

from app.schemas.resume import ResumeDocument

from .policy import ScoringPolicy, default_policy


def round_half_up(value: Fraction | float | int) -> int:
    """Nearest integer, ties toward +infinity."""
    if isinstance(value, float):
        value = Fraction(value)
    return math.floor(value + Fraction(1, 2))


def _ratio(hits: int, total: int) -> float:
    if total == 0:
        return 0.0
    return hits / total


def structure_score(document: ResumeDocument, policy: ScoringPolicy | None = None) -> int:
    policy = policy or default_policy()
    penalties = policy.structure_penalties
    info = document.personal_info
    score = 100

    if not info.name:
        score -= penalties["missing_name"]
    if not info.email:
        score -= penalties["missing_email"]
    if not info.phone:
        score -= penalties["missing_phone"]
    if len(document.summary) < policy.structure_min_summary_chars:
        score -= penalties["weak_summary"]
    if not document.experience:
        score -= penalties["no_experience"]
    if not document.education:
        score -= penalties["no_education"]
    if not document.skills:
        score -= penalties["no_skills"]

    return max(0, score)


def keyword_corpus(document: ResumeDocument) -> str:
    parts = [document.summary, " ".join(document.all_bullets()), " ".join(document.all_skill_items())]
    return "\n".join(parts).lower()


def keyword_score(
    document: ResumeDocument,
    jd_keywords: list[str] | None = None,
    policy: ScoringPolicy | None = None,
) -> int:
    policy = policy or default_policy()
    if not jd_keywords:
        return policy.keyword_default_score

    corpus = keyword_corpus(document)
    matched = sum(1 for keyword in jd_keywords if keyword.lower() in corpus)
    return round_half_up(Fraction(100 * matched, len(jd_keywords)))


def starts_with_action_verb(bullet: str, policy: ScoringPolicy | None = None) -> bool:
    policy = policy or default_policy()
    return bool(policy.action_verb_pattern.match(bullet.strip()))


def has_metric(bullet: str, policy: ScoringPolicy | None = None) -> bool:
    policy = policy or default_policy()
    return any(pattern.search(bullet) for pattern in policy.metric_patterns)


def content_score(document: ResumeDocument, policy: ScoringPolicy | None = None) -> int:
    policy = policy or default_policy()
    bullets = document.all_bullets()
    score = 100

    action_ratio = _ratio(sum(1 for bullet in bullets if starts_with_action_verb(bullet, policy)), len(bullets))
    for rule in policy.action_verb_penalties:
        if action_ratio < rule.below:
            score -= rule.penalty

    metric_ratio = _ratio(sum(1 for bullet in bullets if has_metric(bullet, policy)), len(bullets))
    for rule in policy.metric_penalties:
        if metric_ratio < rule.below:
            score -= rule.penalty

    return max(0, score)


def readability_score(document: ResumeDocument, policy: ScoringPolicy | None = None) -> int:
    policy = policy or default_policy()
    summary_length = len(document.summary)
    score = 100

    # Independent checks; overlapping thresholds apply both penalties.
    if summary_length > policy.summary_max_chars:
        score -= policy.summary_long_penalty
    if summary_length < policy.summary_min_chars:
        score -= policy.summary_short_penalty

    bullets = document.all_bullets()
    mean_length = sum(len(bullet) for bullet in bullets) / len(bullets) if bullets else 0.0
    if mean_length > policy.bullet_max_mean_chars:
        score -= policy.bullet_long_penalty
    if mean_length < policy.bullet_min_mean_chars:
        score -= policy.bullet_short_penalty

    return max(0, score)


COMPLETENESS_CHECKS = 7


def completeness_score(document: ResumeDocument, policy: ScoringPolicy | None = None) -> int:
    policy = policy or default_policy()
    info = document.personal_info
    checks = (
        bool(info.name and info.email),
        bool(document.summary) and len(document.summary) >= policy.completeness_min_summary_chars,
        bool(document.experience),
        bool(document.education),
        bool(document.skills),
        bool(document.certifications),
        bool(document.projects),
    )
    return round_half_up(Fraction(100 * sum(checks), COMPLETENESS_CHECKS))
