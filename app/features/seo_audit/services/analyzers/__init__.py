"""
Category analyzers.

Every module exposes `analyze_<category>(markup, url="") -> CategoryScore` and the
`RULES` table of outcomes it can emit. `ANALYZERS` fixes the category order of
the report.
"""
from typing import Callable, Dict

from app.features.seo_audit.schemas.issue import CategoryScore
from app.features.seo_audit.services.analyzers import (
    content,
    headings,
    images,
    links,
    meta_tags,
    mobile,
    performance,
    security,
    social,
    technical,
)
from app.features.seo_audit.services.rules import Rule

Analyzer = Callable[[str, str], CategoryScore]

ANALYZERS: Dict[str, Analyzer] = {
    "meta": meta_tags.analyze_meta_tags,
    "content": content.analyze_content,
    "headings": headings.analyze_headings,
    "images": images.analyze_images,
    "links": links.analyze_links,
    "technical": technical.analyze_technical,
    "mobile": mobile.analyze_mobile,
    "social": social.analyze_social,
    "security": security.analyze_security,
    "performance": performance.analyze_performance,
}

RULES_BY_CATEGORY: Dict[str, Dict[str, Rule]] = {
    "meta": meta_tags.RULES,
    "content": content.RULES,
    "headings": headings.RULES,
    "images": images.RULES,
    "links": links.RULES,
    "technical": technical.RULES,
    "mobile": mobile.RULES,
    "social": social.RULES,
    "security": security.RULES,
    "performance": performance.RULES,
}


def _merge_rule_tables() -> Dict[str, Rule]:
    merged: Dict[str, Rule] = {}
    for category, table in RULES_BY_CATEGORY.items():
        for rule_id, rule in table.items():
            if rule_id in merged:
                raise ValueError(f"Rule id {rule_id!r} declared by both {merged[rule_id].category!r} and {category!r}")
            merged[rule_id] = rule
    return merged


RULE_TABLE: Dict[str, Rule] = _merge_rule_tables()

__all__ = ["ANALYZERS", "RULES_BY_CATEGORY", "RULE_TABLE", "Analyzer"]
