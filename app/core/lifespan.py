from contextlib import asynccontextmanager
import logging

from app.core.config.scoring import scoring_config_path
from app.scoring.policy import default_policy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    policy = default_policy()
    logger.info(
        "scoring_policy_loaded path=%s action_verbs=%s metric_patterns=%s",
        scoring_config_path(),
        policy.action_verb_pattern.pattern.count("|") + 1,
        len(policy.metric_patterns),
    )
    yield
