from typing import Iterable, List, Optional

from app.features.seo_audit.schemas.analysis import (
    AnalysisResult,
    Categories,
    PrioritizedIssue,
    Summary,
)
from app.features.seo_audit.schemas.issue import CategoryScore, Issue, Severity, round_half_up

SEVERITY_ORDER = {"critical": 0, "warning": 1, "info": 2, "success": 3}
IMPACT_ORDER = {"high": 0, "medium": 1, "low": 2}


def overall_score(categories: Categories) -> int:
    """
    Weighted overall score: total points over total maximum, as a rounded percentage.

    Args:
        categories: The ten category rollups

    Returns:
        Integer between 0 and 100 (0 when nothing could be scored)
    """
    total_score = sum(category.score for category in categories.values())
    total_max = sum(category.max_score for category in categories.values())
    if total_max == 0:
        return 0
    return round_half_up(total_score / total_max * 100)


def count_severities(issues: Iterable[Issue]) -> Summary:
    critical = warnings = passed = info = 0
    for issue in issues:
        if issue.severity == "critical":
            critical += 1
        elif issue.severity == "warning":
            warnings += 1
        elif issue.severity == "success":
            passed += 1
        else:
            info += 1
    return Summary(
        critical=critical,
        warnings=warnings,
        passed=passed,
        info=info,
        total=critical + warnings + passed + info,
    )


def summarize_issues(categories: Categories) -> Summary:
    """Severity counts across every category."""
    return count_severities(
        issue for category in categories.values() for issue in category.issues
    )


def category_severity_counts(category: CategoryScore) -> Summary:
    """Severity counts for a single category."""
    return count_severities(category.issues)


def categories_with_severity(result: AnalysisResult, severity: Severity) -> List[str]:
    """Keys of the categories holding at least one issue of `severity`, in report order."""
    return [
        key
        for key, category in result.categories.items()
        if any(issue.severity == severity for issue in category.issues)
    ]


def prioritized_issues(
    result: AnalysisResult, severity: Optional[Severity] = None
) -> List[PrioritizedIssue]:
    """
    Flatten every issue out of its category, most urgent first.

    Ordering is severity (critical, warning, info, success), then impact
    (high, medium, low); ties keep report order.

    Args:
        result: Analysis to flatten
        severity: Keep only issues of this severity when given

    Returns:
        List of issues tagged with their category key and display name
    """
    flattened = [
        PrioritizedIssue(
            category=key,
            category_name=result.categories[key].name,
            issue=issue,
        )
        for key, issue in result.all_issues()
        if severity is None or issue.severity == severity
    ]
    return sorted(
        flattened,
        key=lambda item: (SEVERITY_ORDER[item.issue.severity], IMPACT_ORDER[item.issue.impact]),
    )
