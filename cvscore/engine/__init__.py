from .aggregator import (
    Band,
    FeedbackThresholds,
    ScoringRules,
    band_label,
    overall_score,
    rating_for,
    regional_relevance_for,
    skill_score,
)
from .analyzer import CVAnalyzer, ValidationError, analyze, get_default_analyzer, validate_cv_text
from .feedback import Feedback, FeedbackContext, generate_feedback
from .format_evaluator import FormatCheck, FormatEvaluation, evaluate_format
from .regional import RegionalEvaluation, evaluate_regional
from .sections import detect_sections
from .skills import detect_skills

__all__ = [
    "Band",
    "CVAnalyzer",
    "Feedback",
    "FeedbackContext",
    "FeedbackThresholds",
    "FormatCheck",
    "FormatEvaluation",
    "RegionalEvaluation",
    "ScoringRules",
    "ValidationError",
    "analyze",
    "band_label",
    "detect_sections",
    "detect_skills",
    "evaluate_format",
    "evaluate_regional",
    "generate_feedback",
    "get_default_analyzer",
    "overall_score",
    "rating_for",
    "regional_relevance_for",
    "skill_score",
    "validate_cv_text",
]
