from typing import List

from app.features.seo_audit.schemas.analysis import AnalysisResult
from app.features.seo_audit.schemas.issue import round_half_up
from app.features.seo_audit.services.utils.aggregator import prioritized_issues
from app.features.seo_audit.services.utils.grading import grade_description

BAR_CELLS = 10
SEVERITY_HEADINGS = (
    ("critical", "Critical Issues"),
    ("warning", "Warnings"),
    ("info", "Recommendations"),
    ("success", "Passed Checks"),
)


def bar(percentage: float) -> str:
    """Ten-cell text bar for a 0-100 value."""
    blocks = max(0, min(BAR_CELLS, round_half_up(percentage / 10)))
    return ("█" * blocks) + ("░" * (BAR_CELLS - blocks))


def render_markdown(result: AnalysisResult) -> str:
    """Render an analysis as a Markdown report: summary, score card, then issues by severity."""
    summary = result.summary
    page = result.page_info
    lines: List[str] = [
        "# SEO Audit Report",
        "",
        "## Executive Summary",
        f"- URL: `{result.url or 'n/a'}`",
        f"- Analyzed: {result.analyzed_at.isoformat()}",
        f"- Overall Score: **{result.overall_score}/100** (Grade {result.grade})",
        f"- Verdict: {grade_description(result.grade)}",
        f"- Issues: {summary.critical} critical, {summary.warnings} warnings, "
        f"{summary.info} info, {summary.passed} passed",
        "",
        "## Page",
        f"- Title: {page.title}",
        f"- Description: {page.description}",
        f"- Word count: {page.word_count}",
        f"- Page size: {page.page_size}",
        f"- Estimated load time: {page.load_time}s",
        "",
        "## Score Card",
        "",
        "| Category | Score | Percentage | |",
        "|---|---|---|---|",
    ]

    for _, category in result.categories.items():
        lines.append(
            f"| {category.icon} {category.name} | {category.score}/{category.max_score} "
            f"| {category.percentage}% | `{bar(category.percentage)}` |"
        )

    flattened = prioritized_issues(result)
    for severity, heading in SEVERITY_HEADINGS:
        group = [item for item in flattened if item.issue.severity == severity]
        if not group:
            continue
        lines.extend(["", f"## {heading} ({len(group)})", ""])
        for item in group:
            issue = item.issue
            lines.append(
                f"- **{issue.title}** [{item.category_name}, {issue.points}/{issue.max_points}]: "
                f"{issue.description}"
            )
            if issue.fix_guidance and severity != "success":
                lines.append(f"  - Fix: {issue.fix_guidance}")

    lines.append("")
    return "\n".join(lines)
