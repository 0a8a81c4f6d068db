from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from cvscore.core.rate_limit import rate_limit
from cvscore.engine import ValidationError
from cvscore.schemas.analysis import (
    AnalysisResult,
    CVAnalysisRequest,
    CVAnalysisResponse,
    LegacyAnalysisResponse,
    LegacyCVTextRequest,
    LegacyCVTextResponse,
    LegacyResumeTextRequest,
)
from cvscore.services.analysis_service import (
    analyze_cv_text,
    build_analysis_response,
    to_legacy_cv_text_response,
    to_legacy_response,
)

router = APIRouter()


def _run_analysis(text: Any, job_description: str | None, caller: str) -> AnalysisResult:
    try:
        return analyze_cv_text(text, job_description=job_description, caller=caller)
    except ValidationError:
        raise
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyze CV",
        ) from exc


@router.post("/cv/analyze", response_model=CVAnalysisResponse)
@rate_limit()
async def cv_analyze(request: Request, payload: CVAnalysisRequest):
    _ = request
    result = _run_analysis(payload.text, payload.job_description, caller="cv_analyze")
    return build_analysis_response(result)


@router.post("/analyze-cv-text", response_model=LegacyCVTextResponse)
@rate_limit()
async def analyze_cv_text_legacy(request: Request, payload: LegacyCVTextRequest):
    _ = request
    result = _run_analysis(payload.text, payload.job_description, caller="analyze_cv_text")
    return to_legacy_cv_text_response(result)


@router.post("/analyze-resume-text", response_model=LegacyAnalysisResponse)
@rate_limit()
async def analyze_resume_text_legacy(request: Request, payload: LegacyResumeTextRequest):
    _ = request
    result = _run_analysis(payload.resume_content, payload.job_description, caller="analyze_resume_text")
    return to_legacy_response(result)
