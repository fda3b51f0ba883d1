from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .resume import ResumeDocument

KeywordCategory = Literal["skill", "experience", "qualification", "soft-skill"]
KeywordImportance = Literal["high", "medium", "low"]


class ParsedKeyword(BaseModel):
    keyword: str
    category: KeywordCategory
    importance: KeywordImportance
    found: bool


class KeywordSuggestion(BaseModel):
    section: str
    suggestion: str
    keyword: str


class JDAnalysis(BaseModel):
    keywords: list[ParsedKeyword] = Field(default_factory=list)
    match_score: int = Field(default=0, ge=0, le=100)
    suggestions: list[KeywordSuggestion] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    matched_keywords: list[str] = Field(default_factory=list)
    source: Literal["ai", "local"] = "local"

    def keyword_list(self) -> list[str]:
        return [item.keyword for item in self.keywords]


class JDAnalyzeRequest(BaseModel):
    job_description: str = Field(default="", max_length=50000)
    document: ResumeDocument | None = None
    resume_text: str = Field(default="", max_length=50000)
