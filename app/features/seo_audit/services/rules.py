"""
Declarative rule outcomes.

Each analyzer declares the possible verdicts of its rules as data (`Rule`
entries in a `RULES` table) and only decides which outcome applies. Scores are
never accumulated by hand: a category's totals are derived from the issues it
emits (see `CategoryScore`).
"""
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional

from app.features.seo_audit.schemas.issue import CategoryScore, Impact, Issue, Severity

CATEGORY_DISPLAY = {
    "meta": ("Meta Tags", "🏷️"),
    "content": ("Content Quality", "📝"),
    "headings": ("Headings", "📑"),
    "images": ("Images", "🖼️"),
    "links": ("Links", "🔗"),
    "technical": ("Technical SEO", "⚙️"),
    "mobile": ("Mobile Friendly", "📱"),
    "social": ("Social Media", "📣"),
    "security": ("Security", "🔒"),
    "performance": ("Performance", "⚡"),
}


@dataclass(frozen=True)
class Rule:
    """
    One possible outcome of a rule.

    `description` is a `str.format` template filled with facts the analyzer
    measured. `points` of None means the analyzer supplies partial credit itself.
    """
    id: str
    severity: Severity
    title: str
    description: str
    impact: Impact
    points: Optional[int]
    max_points: int
    fix_guidance: Optional[str] = None
    category: str = ""


def rule_table(category: str, *rules: Rule) -> Dict[str, Rule]:
    """Index rules by id and stamp them with their category key."""
    table: Dict[str, Rule] = {}
    for rule in rules:
        if rule.id in table:
            raise ValueError(f"Duplicate rule id {rule.id!r} in category {category!r}")
        table[rule.id] = replace(rule, category=category)
    return table


def build_issue(rule: Rule, *, points: Optional[int] = None, **facts) -> Issue:
    """Materialize a rule outcome into an Issue, formatting its description with `facts`."""
    awarded = rule.points if points is None else points
    if awarded is None:
        raise ValueError(f"Rule {rule.id} needs explicit points")
    return Issue(
        id=rule.id,
        severity=rule.severity,
        title=rule.title,
        description=rule.description.format(**facts),
        fix_guidance=rule.fix_guidance,
        impact=rule.impact,
        points=awarded,
        max_points=rule.max_points,
    )


def build_category(category: str, issues: Iterable[Issue]) -> CategoryScore:
    name, icon = CATEGORY_DISPLAY[category]
    return CategoryScore(name=name, icon=icon, issues=tuple(issues))
