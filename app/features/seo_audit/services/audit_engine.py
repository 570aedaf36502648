"""
Audit Engine

Runs every category analyzer over one document and assembles the report.

The engine is a pure function of (markup, url) apart from `analyzedAt`: it never
fetches anything and never raises for string input. Malformed markup degrades
into lower scores instead of errors.
"""
import concurrent.futures
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.features.seo_audit.schemas.analysis import AnalysisResult, Categories
from app.features.seo_audit.schemas.issue import CategoryScore
from app.features.seo_audit.services.analyzers import ANALYZERS
from app.features.seo_audit.services.page_info import extract_page_info
from app.features.seo_audit.services.utils.aggregator import overall_score, summarize_issues
from app.features.seo_audit.services.utils.grading import calculate_grade
from app.platform.config import settings
from app.platform.logger import get_logger

logger = get_logger(__name__)


def coerce_text(value: Any) -> str:
    """None becomes "", bytes are decoded leniently, anything else is stringified."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value
    return str(value)


def _run_sequential(markup: str, url: str) -> Dict[str, CategoryScore]:
    return {key: analyzer(markup, url) for key, analyzer in ANALYZERS.items()}


def _run_pooled(markup: str, url: str, workers: int) -> Dict[str, CategoryScore]:
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {key: pool.submit(analyzer, markup, url) for key, analyzer in ANALYZERS.items()}
        return {key: future.result() for key, future in futures.items()}


def run_analyzers(markup: str, url: str, workers: Optional[int] = None) -> Categories:
    """
    Evaluate all ten categories.

    Args:
        markup: Raw page markup
        url: Page URL, possibly empty
        workers: Thread pool size; None uses ANALYZER_WORKERS, 0 or 1 runs sequentially

    Returns:
        Categories in report order
    """
    pool_size = settings.ANALYZER_WORKERS if workers is None else workers
    if pool_size > 1:
        scores = _run_pooled(markup, url, min(pool_size, len(ANALYZERS)))
    else:
        scores = _run_sequential(markup, url)

    for key, category in scores.items():
        logger.debug(f"{key}: {category.score}/{category.max_score} ({len(category.issues)} issues)")

    return Categories(**scores)


def analyze_document(markup: Any, url: Any = "", workers: Optional[int] = None) -> AnalysisResult:
    """
    Audit a document and return the full report.

    Args:
        markup: Raw page markup (None is treated as an empty document)
        url: URL the markup came from, used for HTTPS and link classification
        workers: Optional override of the analyzer thread pool size

    Returns:
        AnalysisResult with per-category rollups, overall score, grade, summary and page info
    """
    started = time.perf_counter()
    markup = coerce_text(markup)
    url = coerce_text(url).strip()

    categories = run_analyzers(markup, url, workers)
    score = overall_score(categories)
    grade, grade_color = calculate_grade(score)

    result = AnalysisResult(
        url=url,
        analyzed_at=datetime.now(timezone.utc),
        overall_score=score,
        grade=grade,
        grade_color=grade_color,
        categories=categories,
        summary=summarize_issues(categories),
        page_info=extract_page_info(markup, url),
    )

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"Analyzed {url or '<no url>'}: score={score} grade={grade} in {elapsed_ms:.1f}ms")
    return result
