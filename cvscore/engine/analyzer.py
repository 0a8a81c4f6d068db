from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from cvscore.catalog import PatternCatalog, get_default_catalog
from cvscore.core.config.scoring import get_scoring_config
from cvscore.schemas.analysis import AnalysisResult

from .aggregator import (
    ScoringRules,
    overall_score,
    rating_for,
    regional_relevance_for,
    skill_score,
)
from .feedback import FeedbackContext, generate_feedback
from .format_evaluator import evaluate_format
from .regional import evaluate_regional
from .sections import detect_sections, ordered_sections
from .skills import detect_skills

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    def __init__(self, message: str, *, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


def validate_cv_text(text: Any) -> str:
    if text is None:
        raise ValidationError("CV text is required")
    if not isinstance(text, str):
        raise ValidationError("CV text must be a string")
    if not text.strip():
        raise ValidationError("CV text is required")
    return text


class CVAnalyzer:
    """Single-pass, stateless CV scoring pipeline over an immutable pattern catalog."""

    def __init__(self, catalog: PatternCatalog | None = None, rules: ScoringRules | None = None) -> None:
        self.catalog = catalog if catalog is not None else get_default_catalog()
        self.rules = rules if rules is not None else ScoringRules.from_config(get_scoring_config())

    def analyze(self, text: Any) -> AnalysisResult:
        text = validate_cv_text(text)

        sections = detect_sections(text, self.catalog)
        skills = detect_skills(text, self.catalog)
        format_eval = evaluate_format(text, sections, self.catalog)
        regional = evaluate_regional(text, self.catalog)

        skills_points = skill_score(len(skills), self.rules)
        overall = overall_score(format_eval.score, skills_points, regional.score, self.rules)

        feedback = generate_feedback(
            FeedbackContext(
                format=format_eval,
                sections=sections,
                skills=skills,
                regional=regional,
                catalog=self.catalog,
                rules=self.rules,
            )
        )

        logger.debug(
            "cv_analysis_scored overall=%s format=%s skills=%s regional=%s sections=%s",
            overall,
            format_eval.score,
            skills_points,
            regional.score,
            len(sections),
        )
        return AnalysisResult(
            overall_score=overall,
            rating=rating_for(overall, self.rules),
            format_score=format_eval.score,
            skill_score=skills_points,
            regional_score=regional.score,
            regional_relevance=regional_relevance_for(regional.score, self.rules),
            strengths=feedback.strengths,
            improvements=feedback.improvements,
            format_feedback=format_eval.feedback,
            sections_detected=ordered_sections(sections, self.catalog),
            skills_identified=skills,
            regional_markers_detected=regional.detected,
        )


@lru_cache(maxsize=1)
def get_default_analyzer() -> CVAnalyzer:
    return CVAnalyzer()


def analyze(text: Any) -> AnalysisResult:
    return get_default_analyzer().analyze(text)
