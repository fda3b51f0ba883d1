from .aggregate import build_breakdown, build_section_signals, evaluate_resume, overall_score
from .categories import (
    completeness_score,
    content_score,
    keyword_score,
    readability_score,
    round_half_up,
    structure_score,
)
from .engine import ATSScoreEngine, engine_from_settings
from .feedback import FeedbackTracker, build_feedback, feedback_message
from .jd_parser import local_keyword_extraction, resume_to_text
from .policy import ScoringPolicy, default_policy, policy_from_config
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    "ATSScoreEngine",
    "engine_from_settings",
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "ScoringPolicy",
    "default_policy",
    "policy_from_config",
    "build_breakdown",
    "build_section_signals",
    "evaluate_resume",
    "overall_score",
    "structure_score",
    "keyword_score",
    "content_score",
    "readability_score",
    "completeness_score",
    "round_half_up",
    "FeedbackTracker",
    "build_feedback",
    "feedback_message",
    "local_keyword_extraction",
    "resume_to_text",
]
