from typing import Optional

from fastapi import APIRouter, Query

from app.features.seo_audit.schemas.analysis import (
    AnalysisResponse,
    AnalyzeRequest,
    IssueListResponse,
    IssuesResponse,
    RuleCatalogEnvelope,
)
from app.features.seo_audit.schemas.issue import Severity
from app.features.seo_audit.services.audit_engine import analyze_document
from app.features.seo_audit.services.extraction.markup_extractor import byte_size
from app.features.seo_audit.services.rule_catalog import rule_catalog
from app.features.seo_audit.services.sample_document import SAMPLE_MARKUP, SAMPLE_URL
from app.features.seo_audit.services.utils.aggregator import prioritized_issues
from app.features.seo_audit.services.utils.grading import grade_description
from app.features.seo_audit.utils.report_formatter import render_markdown
from app.platform.config import settings
from app.platform.exceptions import MarkupTooLargeError
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger(__name__)

router = APIRouter(prefix="/seo-audit", tags=["SEO Audit"])


def _ensure_within_limit(request: AnalyzeRequest) -> None:
    size = byte_size(request.markup)
    if size > settings.MAX_MARKUP_BYTES:
        logger.warning(f"Rejected markup of {size} bytes for {request.url or '<no url>'}")
        raise MarkupTooLargeError(size=size, limit=settings.MAX_MARKUP_BYTES)


@router.post("/analyze", summary="Audit a document", response_model=AnalysisResponse)
def analyze(request: AnalyzeRequest):
    """
    Run every rule over the submitted markup.

    Returns the full report: ten category rollups, overall score, grade,
    severity summary and page info.
    """
    _ensure_within_limit(request)
    result = analyze_document(request.markup, request.url)
    return api_response(
        data=result,
        message=grade_description(result.grade),
    )


@router.post("/issues", summary="Prioritized issue list", response_model=IssuesResponse)
def list_issues(
    request: AnalyzeRequest,
    severity: Optional[Severity] = Query(None, description="Only return issues of this severity"),
):
    _ensure_within_limit(request)
    result = analyze_document(request.markup, request.url)
    issues = prioritized_issues(result, severity)
    return api_response(
        data=IssueListResponse(
            url=result.url,
            severity=severity,
            total_issues=len(issues),
            issues=tuple(issues),
        ),
        message=f"{len(issues)} issue(s) found",
    )


@router.post("/report", summary="Markdown report")
def markdown_report(request: AnalyzeRequest):
    _ensure_within_limit(request)
    result = analyze_document(request.markup, request.url)
    return api_response(
        data={
            "url": result.url,
            "overallScore": result.overall_score,
            "grade": result.grade,
            "report": render_markdown(result),
        },
        message="Report generated",
    )


@router.get("/demo", summary="Audit the sample document", response_model=AnalysisResponse)
def demo():
    result = analyze_document(SAMPLE_MARKUP, SAMPLE_URL)
    return api_response(data=result, message=grade_description(result.grade))


@router.get("/rules", summary="Rule catalog", response_model=RuleCatalogEnvelope)
async def rules():
    catalog = rule_catalog()
    return api_response(data=catalog, message=f"{catalog.total_rules} rule outcomes")
