from __future__ import annotations

import logging
import time
from typing import Callable

from app.core.config import settings
from app.schemas.ats import Feedback, ScoreBreakdown, ScoreResult, ScoreSnapshot, SectionSignal
from app.schemas.resume import ResumeDocument

from .aggregate import evaluate_resume
from .animation import ScoreAnimator
from .feedback import FeedbackTracker
from .policy import ScoringPolicy, default_policy
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_S = 0.8
DEFAULT_FEEDBACK_S = 2.0
DEFAULT_ANIMATION_S = 0.5
DEFAULT_FRAME_S = 0.016


class ATSScoreEngine:
    """Live scorer for one editing session.

    ``recalculate`` coalesces bursts of edits: each call restarts the quiet
    period and only the last call's arguments are scored. Every completed
    pass replaces score, breakdown and section signals together and is
    published to ``on_update`` as ``("score", ScoreSnapshot)``; animation
    frames and feedback expiry publish ``"frame"`` and ``"feedback_cleared"``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        policy: ScoringPolicy | None = None,
        initial_score: int = 0,
        debounce: float = DEFAULT_DEBOUNCE_S,
        feedback_window: float = DEFAULT_FEEDBACK_S,
        animation_duration: float = DEFAULT_ANIMATION_S,
        frame_interval: float = DEFAULT_FRAME_S,
        on_update: Callable[[str, ScoreSnapshot], None] | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._scheduler = scheduler
        self._policy = policy or default_policy()
        self._debounce = debounce
        self._feedback_window = feedback_window
        self._on_update = on_update
        self._clock = clock

        self._tracker = FeedbackTracker(initial_score=initial_score, policy=self._policy)
        self._animator = ScoreAnimator(
            scheduler,
            duration=animation_duration,
            frame_interval=frame_interval,
            initial=initial_score,
            on_frame=self._on_frame,
        )
        self._score = initial_score
        self._breakdown = ScoreBreakdown()
        self._signals: list[SectionSignal] = []
        self._feedback: Feedback | None = None

        self._pending: TimerHandle | None = None
        self._feedback_timer: TimerHandle | None = None
        self.passes = 0

    @property
    def score(self) -> int:
        return self._score

    @property
    def animated_score(self) -> int:
        return self._animator.displayed

    @property
    def breakdown(self) -> ScoreBreakdown:
        return self._breakdown

    @property
    def feedback(self) -> Feedback | None:
        return self._feedback

    @property
    def section_signals(self) -> list[SectionSignal]:
        return list(self._signals)

    @property
    def is_high_score(self) -> bool:
        return self._score >= self._policy.high_score_threshold

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def snapshot(self) -> ScoreSnapshot:
        return ScoreSnapshot(
            score=self._score,
            animated_score=self._animator.displayed,
            breakdown=self._breakdown,
            feedback=self._feedback,
            section_signals=list(self._signals),
            is_high_score=self.is_high_score,
        )

    def recalculate(self, document: ResumeDocument, jd_keywords: list[str] | None = None) -> None:
        self._cancel_pending()
        keywords = list(jd_keywords or [])

        def fire() -> None:
            self._pending = None
            self._run_pass(document, keywords)

        self._pending = self._scheduler.call_later(self._debounce, fire)

    def score_now(self, document: ResumeDocument, jd_keywords: list[str] | None = None) -> ScoreSnapshot:
        """Score immediately, dropping any pending debounced call."""
        self._cancel_pending()
        self._run_pass(document, list(jd_keywords or []))
        return self.snapshot()

    def close(self) -> None:
        self._cancel_pending()
        if self._feedback_timer is not None:
            self._feedback_timer.cancel()
            self._feedback_timer = None
        self._animator.stop()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _run_pass(self, document: ResumeDocument, jd_keywords: list[str]) -> ScoreResult:
        result = evaluate_resume(document, jd_keywords, self._policy)
        self.passes += 1

        self._breakdown = result.breakdown
        self._signals = list(result.section_signals)
        self._score = result.score

        feedback = self._tracker.observe(result.score, self._clock())
        if feedback is not None:
            self._show_feedback(feedback)

        logger.debug(
            "ats_pass_completed score=%s delta=%s keywords=%s",
            result.score,
            feedback.delta if feedback else 0,
            len(jd_keywords),
        )

        self._animator.retarget(result.score)
        self._publish("score")
        return result

    def _show_feedback(self, feedback: Feedback) -> None:
        if self._feedback_timer is not None:
            self._feedback_timer.cancel()
        self._feedback = feedback
        self._feedback_timer = self._scheduler.call_later(self._feedback_window, self._clear_feedback)

    def _clear_feedback(self) -> None:
        self._feedback_timer = None
        self._feedback = None
        self._publish("feedback_cleared")

    def _on_frame(self, _value: int) -> None:
        self._publish("frame")

    def _publish(self, event: str) -> None:
        if self._on_update is not None:
            self._on_update(event, self.snapshot())


def engine_from_settings(
    scheduler: Scheduler,
    *,
    on_update: Callable[[str, ScoreSnapshot], None] | None = None,
    initial_score: int = 0,
) -> ATSScoreEngine:
    return ATSScoreEngine(
        scheduler,
        policy=default_policy(),
        initial_score=initial_score,
        debounce=settings.ats_debounce_ms / 1000,
        feedback_window=settings.ats_feedback_ms / 1000,
        animation_duration=settings.ats_animation_ms / 1000,
        frame_interval=settings.ats_animation_frame_ms / 1000,
        on_update=on_update,
    )
