from __future__ import annotations

from fractions import Fraction

from app.schemas.ats import ScoreBreakdown, ScoreResult, SectionSignal, SignalStatus
from app.schemas.resume import ResumeDocument

from .categories import (
    completeness_score,
    content_score,
    keyword_score,
    readability_score,
    round_half_up,
    structure_score,
)
from .policy import CATEGORIES, ScoringPolicy, SignalLadder, default_policy

_SUMMARY_MESSAGES = {
    "risk": "Summary too short for ATS impact",
    "needs-improvement": "Consider expanding your summary",
    "strong": "Summary is well-structured",
}
_EXPERIENCE_MESSAGES = {
    "risk": "Add more bullet points to each role",
    "needs-improvement": "Consider adding more achievements",
    "strong": "Experience section is comprehensive",
}
_SKILLS_MESSAGES = {
    "risk": "Add more relevant skills",
    "needs-improvement": "Consider adding industry-specific skills",
    "strong": "Skills section is well-populated",
}
_EDUCATION_MESSAGES = {
    "risk": "Add your educational background",
    "strong": "Education section is complete",
}


def build_breakdown(
    document: ResumeDocument,
    jd_keywords: list[str] | None = None,
    policy: ScoringPolicy | None = None,
) -> ScoreBreakdown:
    policy = policy or default_policy()
    return ScoreBreakdown(
        structure=structure_score(document, policy),
        keywords=keyword_score(document, jd_keywords, policy),
        content=content_score(document, policy),
        readability=readability_score(document, policy),
        completeness=completeness_score(document, policy),
    )


def overall_score(breakdown: ScoreBreakdown, policy: ScoringPolicy | None = None) -> int:
    """Weighted sum of the five categories, rounded half-up."""
    policy = policy or default_policy()
    total = sum(
        (Fraction(getattr(breakdown, name)) * policy.weights[name] for name in CATEGORIES),
        Fraction(0),
    )
    return round_half_up(total)


def _tier(value: float, ladder: SignalLadder) -> SignalStatus:
    if value < ladder.risk_below:
        return "risk"
    if value < ladder.needs_improvement_below:
        return "needs-improvement"
    return "strong"


def build_section_signals(document: ResumeDocument, policy: ScoringPolicy | None = None) -> list[SectionSignal]:
    policy = policy or default_policy()
    signals: list[SectionSignal] = []

    status = _tier(len(document.summary), policy.summary_signal)
    signals.append(SectionSignal(section_id="summary", status=status, message=_SUMMARY_MESSAGES[status]))

    entries = document.experience
    mean_bullets = sum(len(entry.bullets) for entry in entries) / len(entries) if entries else 0.0
    status = _tier(mean_bullets, policy.experience_signal)
    signals.append(SectionSignal(section_id="experience", status=status, message=_EXPERIENCE_MESSAGES[status]))

    status = _tier(len(document.all_skill_items()), policy.skills_signal)
    signals.append(SectionSignal(section_id="skills", status=status, message=_SKILLS_MESSAGES[status]))

    status = "strong" if document.education else "risk"
    signals.append(SectionSignal(section_id="education", status=status, message=_EDUCATION_MESSAGES[status]))

    return signals


def evaluate_resume(
    document: ResumeDocument,
    jd_keywords: list[str] | None = None,
    policy: ScoringPolicy | None = None,
) -> ScoreResult:
    """Run one full, stateless scoring pass."""
    policy = policy or default_policy()
    breakdown = build_breakdown(document, jd_keywords, policy)
    score = overall_score(breakdown, policy)
    return ScoreResult(
        score=score,
        breakdown=breakdown,
        section_signals=build_section_signals(document, policy),
        is_high_score=score >= policy.high_score_threshold,
    )
