"""
Employment History Analytics API Routes.

Endpoints for:
- Full experience report for a parsed work history
- Full report straight from raw LLM output
- Individual metrics (total experience, tenure, gaps/overlaps)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.api.deps import get_analyzer_dep
from app.schemas.experience import (
    Duration,
    EmploymentTimeline,
    ExperienceReport,
    TenureResponse,
    WorkHistoryRequest,
)
from app.schemas.resume import parse_llm_output
from app.services.utils.analyzer import ExperienceAnalyzer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/experience", tags=["Experience Analytics"])


@router.post("/analyze", response_model=ExperienceReport)
async def analyze_work_history(
    request: WorkHistoryRequest,
    analyzer: ExperienceAnalyzer = Depends(get_analyzer_dep),
):
    """
    Analyze a parsed work history.

    Returns total experience (overlaps merged), average tenure per role and
    per company, employment gaps/overlaps and per-job summaries.
    """
    return analyzer.analyze(
        request.work_history,
        exclude_trainee_from_gaps=request.exclude_trainee_from_gaps,
    )


@router.post("/analyze-raw", response_model=ExperienceReport)
async def analyze_llm_output(
    raw: Request,
    exclude_trainee_from_gaps: Optional[bool] = Query(
        None, description="Overrides the configured default"
    ),
    analyzer: ExperienceAnalyzer = Depends(get_analyzer_dep),
):
    """
    Analyze the `workHistory` of a resume document exactly as the LLM
    returned it (JSON, optionally wrapped in a Markdown code fence).
    """
    body = (await raw.body()).decode("utf-8", errors="replace")

    try:
        resume = parse_llm_output(body)
    except ValueError as e:
        logger.warning(f"Rejected LLM output: {e}")
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )

    return analyzer.analyze(
        resume.work_history,
        exclude_trainee_from_gaps=exclude_trainee_from_gaps,
    )


@router.post("/total", response_model=Duration)
async def total_experience(
    request: WorkHistoryRequest,
    analyzer: ExperienceAnalyzer = Depends(get_analyzer_dep),
):
    """Total experience with concurrent and back-to-back roles merged."""
    return analyzer.total_experience(request.work_history)


@router.post("/tenure", response_model=TenureResponse)
async def average_tenure(
    request: WorkHistoryRequest,
    analyzer: ExperienceAnalyzer = Depends(get_analyzer_dep),
):
    """Average tenure per role and per company."""
    return TenureResponse(
        role=analyzer.average_tenure(request.work_history),
        company=analyzer.average_company_tenure(request.work_history),
    )


@router.post("/timeline", response_model=EmploymentTimeline)
async def employment_timeline(
    request: WorkHistoryRequest,
    analyzer: ExperienceAnalyzer = Depends(get_analyzer_dep),
):
    """Employment gaps and overlaps between adjacent roles."""
    return analyzer.timeline(
        request.work_history,
        exclude_trainee_from_gaps=request.exclude_trainee_from_gaps,
    )
