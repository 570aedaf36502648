from collections import Counter

from app.features.seo_audit.schemas.analysis import RuleCatalogResponse, RuleDescriptor
from app.features.seo_audit.services.analyzers import RULE_TABLE, RULES_BY_CATEGORY


def rule_catalog() -> RuleCatalogResponse:
    """Every possible rule outcome, grouped by category in report order."""
    descriptors = tuple(
        RuleDescriptor(
            id=rule.id,
            category=rule.category,
            severity=rule.severity,
            title=rule.title,
            impact=rule.impact,
            points=rule.points,
            max_points=rule.max_points,
            fix_guidance=rule.fix_guidance,
        )
        for table in RULES_BY_CATEGORY.values()
        for rule in table.values()
    )
    per_category = Counter(rule.category for rule in RULE_TABLE.values())
    return RuleCatalogResponse(
        total_rules=len(descriptors),
        rules_per_category={key: per_category[key] for key in RULES_BY_CATEGORY},
        rules=descriptors,
    )
