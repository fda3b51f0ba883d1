from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .resume import ResumeDocument

SignalStatus = Literal["strong", "needs-improvement", "risk"]
SectionId = Literal["summary", "experience", "skills", "education"]


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    structure: int = Field(default=0, ge=0, le=100)
    keywords: int = Field(default=0, ge=0, le=100)
    content: int = Field(default=0, ge=0, le=100)
    readability: int = Field(default=0, ge=0, le=100)
    completeness: int = Field(default=0, ge=0, le=100)


class SectionSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    section_id: SectionId
    status: SignalStatus
    message: str


class Feedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    delta: int
    timestamp: float


class ScoreResult(BaseModel):
    """Output of one full scoring pass."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    section_signals: list[SectionSignal] = Field(default_factory=list)
    is_high_score: bool = False


class ScoreSnapshot(BaseModel):
    """State published by the live engine after every change."""

    model_config = ConfigDict(frozen=True)

    score: int = 0
    animated_score: int = 0
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    feedback: Feedback | None = None
    section_signals: list[SectionSignal] = Field(default_factory=list)
    is_high_score: bool = False


class ScoreRequest(BaseModel):
    document: ResumeDocument
    jd_keywords: list[str] = Field(default_factory=list, max_length=200)
    previous_score: int | None = Field(default=None, ge=0, le=100)


class ScoreResponse(BaseModel):
    score: int
    breakdown: ScoreBreakdown
    section_signals: list[SectionSignal]
    feedback: Feedback | None = None
    is_high_score: bool


class LiveScoreMessage(BaseModel):
    document: ResumeDocument
    jd_keywords: list[str] = Field(default_factory=list, max_length=200)
