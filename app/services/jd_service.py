from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from app.schemas.jd import JDAnalysis
from app.schemas.resume import ResumeDocument
from app.scoring.jd_parser import local_keyword_extraction, resume_to_text
from app.services.resume_llm import json_completion

logger = logging.getLogger(__name__)

_MAX_PROMPT_CHARS = 12000

JD_SYSTEM_PROMPT = (
    "You analyze job descriptions for an ATS-safe resume builder. "
    "You never invent credentials. Output only valid JSON."
)

JD_PARSE_PROMPT = """Extract the keywords an applicant tracking system would screen for in this job description,
then check each one against the resume.

JOB DESCRIPTION:
{jd_text}

CURRENT RESUME:
{resume_text}

OUTPUT as JSON:
{{
  "keywords": [
    {{"keyword": "python", "category": "skill|experience|qualification|soft-skill", "importance": "high|medium|low", "found": true}}
  ],
  "match_score": 0,
  "suggestions": [
    {{"section": "Skills", "suggestion": "why and where to add it", "keyword": "python"}}
  ],
  "missing_keywords": ["keyword"],
  "matched_keywords": ["keyword"]
}}"""


class JobDescriptionError(ValueError):
    pass


def _resume_content(document: ResumeDocument | None, resume_text: str) -> str:
    if document is not None:
        rendered = resume_to_text(document)
        return f"{rendered}\n{resume_text}".strip() if resume_text else rendered
    return resume_text


def _analysis_from_llm(job_description: str, resume_content: str) -> JDAnalysis | None:
    payload = json_completion(
        system_prompt=JD_SYSTEM_PROMPT,
        user_prompt=JD_PARSE_PROMPT.format(
            jd_text=job_description[:_MAX_PROMPT_CHARS],
            resume_text=resume_content[:_MAX_PROMPT_CHARS],
        ),
        temperature=0.1,
        max_output_tokens=1200,
        task="jd_parse",
    )
    if payload is None:
        return None
    try:
        analysis = JDAnalysis.model_validate({**payload, "source": "ai"})
    except ValidationError as exc:
        logger.warning("jd_parse_invalid_schema errors=%s payload=%s", exc.error_count(), json.dumps(payload)[:200])
        return None
    if not analysis.keywords:
        return None
    return analysis


def parse_job_description(
    job_description: str,
    *,
    document: ResumeDocument | None = None,
    resume_text: str = "",
) -> JDAnalysis:
    if not job_description.strip():
        raise JobDescriptionError("Please provide a job description")

    resume_content = _resume_content(document, resume_text)
    analysis = _analysis_from_llm(job_description, resume_content)
    if analysis is not None:
        return analysis

    logger.info("jd_parse_local_fallback jd_len=%s", len(job_description))
    return local_keyword_extraction(job_description, resume_content)
