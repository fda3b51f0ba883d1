from __future__ import annotations

import re
from fractions import Fraction

from app.schemas.jd import JDAnalysis, KeywordSuggestion, ParsedKeyword
from app.schemas.resume import ResumeDocument

from .categories import round_half_up

TECHNICAL_SKILLS = (
    "javascript", "typescript", "react", "node.js", "python", "java", "sql",
    "aws", "docker", "kubernetes", "git", "agile", "scrum", "rest", "api",
    "html", "css", "mongodb", "postgresql", "redis", "graphql", "vue",
    "angular", "next.js", "express", "django", "flask", "spring", "c++",
    "go", "rust", "swift", "kotlin", "terraform", "ci/cd", "jenkins",
    "machine learning", "data analysis", "excel", "tableau", "power bi",
    "salesforce", "hubspot", "jira", "confluence", "figma", "sketch",
)

SOFT_SKILLS = (
    "leadership", "communication", "teamwork", "problem-solving", "analytical",
    "collaboration", "strategic", "initiative", "adaptability", "creativity",
    "time management", "attention to detail", "critical thinking", "mentoring",
)

EXPERIENCE_KEYWORDS = (
    "years of experience", "senior", "junior", "lead", "manager", "director",
    "architect", "principal", "staff", "intern", "entry-level", "mid-level",
)

_CAPITALIZED_TERM_RE = re.compile(r"\b[A-Z][a-zA-Z]+(?:\s+[A-Z][a-zA-Z]+)*\b")
_STOP_TERMS = {"The", "This", "That", "With", "From", "About"}
_MAX_QUALIFICATION_TERMS = 10
_MAX_SUGGESTIONS = 5
_SUGGESTION_SECTIONS = {"experience": "Experience", "soft-skill": "Summary"}


def resume_to_text(document: ResumeDocument) -> str:
    """Plain-text rendering of a resume, used for keyword matching."""
    info = document.personal_info
    lines = [info.name, info.title, info.email, info.phone, info.location, document.summary]
    for entry in document.experience:
        lines.append(f"{entry.position} {entry.company} {entry.location}")
        lines.extend(entry.bullets)
    for entry in document.education:
        lines.append(f"{entry.degree} {entry.field} {entry.school}")
    for group in document.skills:
        lines.append(f"{group.category}: {', '.join(group.items)}")
    for item in [*document.certifications, *document.projects, *document.languages]:
        if isinstance(item, dict):
            lines.append(" ".join(str(value) for value in item.values() if isinstance(value, (str, int, float))))
        elif item is not None:
            lines.append(str(item))
    return "\n".join(line for line in lines if line and line.strip())


def _qualification_terms(job_description: str) -> list[str]:
    seen: list[str] = []
    for term in _CAPITALIZED_TERM_RE.findall(job_description):
        if term in seen:
            continue
        seen.append(term)
    return [term for term in seen if len(term) > 3 and term not in _STOP_TERMS]


def local_keyword_extraction(job_description: str, resume_content: str) -> JDAnalysis:
    jd_lower = job_description.lower()
    resume_lower = resume_content.lower()

    keywords: list[ParsedKeyword] = []
    matched: list[str] = []
    missing: list[str] = []

    def add(keyword: str, category: str, importance: str, probe: str) -> None:
        found = probe in resume_lower
        keywords.append(ParsedKeyword(keyword=keyword, category=category, importance=importance, found=found))
        (matched if found else missing).append(keyword)

    for skill in TECHNICAL_SKILLS:
        if skill in jd_lower:
            add(skill, "skill", "high", skill)

    for skill in SOFT_SKILLS:
        if skill in jd_lower:
            add(skill, "soft-skill", "medium", skill)

    for keyword in EXPERIENCE_KEYWORDS:
        if keyword in jd_lower:
            importance = "high" if "senior" in keyword or "lead" in keyword else "medium"
            add(keyword, "experience", importance, keyword)

    for term in _qualification_terms(job_description)[:_MAX_QUALIFICATION_TERMS]:
        term_lower = term.lower()
        if any(item.keyword == term_lower for item in keywords):
            continue
        add(term, "qualification", "medium", term_lower)

    total = len(keywords) or 1
    found_count = sum(1 for item in keywords if item.found)
    match_score = round_half_up(Fraction(100 * found_count, total))

    categories = {item.keyword: item.category for item in keywords}
    suggestions = []
    for keyword in missing[:_MAX_SUGGESTIONS]:
        section = _SUGGESTION_SECTIONS.get(categories.get(keyword, ""), "Skills")
        suggestions.append(
            KeywordSuggestion(
                section=section,
                suggestion=f'Consider adding "{keyword}" to your {section.lower()} section to improve alignment',
                keyword=keyword,
            )
        )

    return JDAnalysis(
        keywords=keywords,
        match_score=match_score,
        suggestions=suggestions,
        missing_keywords=missing,
        matched_keywords=matched,
        source="local",
    )
