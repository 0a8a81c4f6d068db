from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone
from typing import Any

from cvscore.engine import ValidationError, get_default_analyzer
from cvscore.schemas.analysis import (
    AnalysisResult,
    CVAnalysisResponse,
    LegacyAnalysisResponse,
    LegacyCVTextResponse,
)

logger = logging.getLogger(__name__)


def _text_hash(text: Any) -> str:
    if not isinstance(text, str):
        return "-"
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]


def analyze_cv_text(text: Any, *, job_description: str | None = None, caller: str = "api") -> AnalysisResult:
    """Run the engine for one request; validation errors pass through, anything else is logged."""
    text_hash = _text_hash(text)
    try:
        result = get_default_analyzer().analyze(text)
    except ValidationError as exc:
        logger.info("cv_analysis_rejected caller=%s text_hash=%s reason=%s", caller, text_hash, exc)
        raise
    except Exception:
        logger.exception("cv_analysis_failed caller=%s text_hash=%s", caller, text_hash)
        raise

    logger.info(
        "cv_analysis caller=%s text_hash=%s chars=%s overall=%s rating=%s regional=%s job_description=%s",
        caller,
        text_hash,
        len(text),
        result.overall_score,
        result.rating,
        result.regional_score,
        bool(job_description and job_description.strip()),
    )
    return result


def build_analysis_response(result: AnalysisResult) -> CVAnalysisResponse:
    return CVAnalysisResponse(analysis=result, generated_at=datetime.now(timezone.utc))


def _legacy_fields(result: AnalysisResult) -> dict[str, Any]:
    return dict(
        score=result.overall_score,
        rating=result.rating,
        strengths=list(result.strengths[:3]),
        weaknesses=list(result.improvements[:3]),
        suggestions=list(result.format_feedback[:2]),
        sa_score=result.regional_score,
        sa_relevance=result.regional_relevance,
        skills=list(result.skills_identified[:8]),
        job_match=None,
    )


def to_legacy_response(result: AnalysisResult) -> LegacyAnalysisResponse:
    return LegacyAnalysisResponse(**_legacy_fields(result))


def to_legacy_cv_text_response(result: AnalysisResult) -> LegacyCVTextResponse:
    return LegacyCVTextResponse(success=True, **_legacy_fields(result))
