from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from cvscore.catalog import SectionId

MAX_CV_TEXT_CHARS = 50000


class AnalysisResult(BaseModel):
    """Canonical output of one CV analysis. Every field derives from the CV text alone."""

    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    rating: str
    format_score: int = Field(ge=0, le=100)
    skill_score: int = Field(ge=0, le=100)
    regional_score: int = Field(ge=0, le=100)
    regional_relevance: str
    strengths: tuple[str, ...] = Field(min_length=1, max_length=5)
    improvements: tuple[str, ...] = Field(min_length=1, max_length=5)
    format_feedback: tuple[str, ...] = ()
    sections_detected: tuple[SectionId, ...] = ()
    skills_identified: tuple[str, ...] = ()
    regional_markers_detected: tuple[str, ...] = ()


class CVAnalysisRequest(BaseModel):
    text: str | None = Field(default=None, max_length=MAX_CV_TEXT_CHARS)
    job_description: str | None = Field(default=None, max_length=MAX_CV_TEXT_CHARS)


class CVAnalysisResponse(BaseModel):
    success: bool = True
    analysis: AnalysisResult
    generated_at: datetime


class LegacyCVTextRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str | None = Field(default=None, max_length=MAX_CV_TEXT_CHARS)
    job_description: str | None = Field(default=None, alias="jobDescription", max_length=MAX_CV_TEXT_CHARS)


class LegacyResumeTextRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_content: str | None = Field(default=None, alias="resumeContent", max_length=MAX_CV_TEXT_CHARS)
    job_description: str | None = Field(default=None, alias="jobDescription", max_length=MAX_CV_TEXT_CHARS)


class LegacyAnalysisResponse(BaseModel):
    score: int = Field(ge=0, le=100)
    rating: str
    strengths: list[str] = Field(max_length=3)
    weaknesses: list[str] = Field(max_length=3)
    suggestions: list[str] = Field(max_length=2)
    sa_score: int = Field(ge=0, le=100)
    sa_relevance: str
    skills: list[str] = Field(max_length=8)
    job_match: None = None


class LegacyCVTextResponse(LegacyAnalysisResponse):
    success: bool = True


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
