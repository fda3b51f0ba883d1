from __future__ import annotations

from app.schemas.ats import Feedback

from .policy import ScoringPolicy, default_policy


def feedback_message(delta: int, policy: ScoringPolicy | None = None) -> str:
    policy = policy or default_policy()
    if delta > 0:
        if delta >= policy.significant_delta:
            return "Significant improvement in resume quality"
        if delta >= policy.measurable_delta:
            return "Added measurable impact to experience"
        return "Content improvement detected"
    if delta < 0:
        if delta <= policy.regression_delta:
            return "Content may need more detail"
        return "Minor adjustment detected"
    return ""


def build_feedback(
    previous_score: int,
    new_score: int,
    timestamp: float,
    policy: ScoringPolicy | None = None,
) -> Feedback | None:
    delta = new_score - previous_score
    if delta == 0:
        return None
    return Feedback(message=feedback_message(delta, policy), delta=delta, timestamp=timestamp)


class FeedbackTracker:
    """Remembers the last computed score and turns each new one into feedback."""

    def __init__(self, initial_score: int = 0, policy: ScoringPolicy | None = None):
        self._last_score = initial_score
        self._policy = policy

    @property
    def last_score(self) -> int:
        return self._last_score

    def observe(self, new_score: int, timestamp: float) -> Feedback | None:
        feedback = build_feedback(self._last_score, new_score, timestamp, self._policy)
        self._last_score = new_score
        return feedback
