from typing import List, Tuple

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

# (tag key, partial credit) in declaration order
OPEN_GRAPH_WEIGHTS: Tuple[Tuple[str, int], ...] = (
    ("og:title", 10),
    ("og:description", 10),
    ("og:image", 10),
    ("og:url", 5),
    ("og:type", 5),
)
OPEN_GRAPH_ESSENTIALS = ("og:title", "og:description", "og:image")
OPEN_GRAPH_COMPLETE = 30

TWITTER_WEIGHTS: Tuple[Tuple[str, int], ...] = (
    ("twitter:card", 15),
    ("twitter:title", 10),
    ("twitter:description", 10),
    ("twitter:image", 5),
)
TWITTER_COMPLETE = 25

RULES = rule_table(
    "social",
    # Open Graph (40)
    Rule("social-1", "warning", "Missing Open Graph Tags",
         "No Open Graph tags found. Your content won't look good when shared on Facebook/LinkedIn.",
         "medium", 0, 40,
         "Add og:title, og:description, og:image, og:url, and og:type meta tags."),
    Rule("social-2", "success", "Open Graph Tags Present",
         "Essential Open Graph tags are configured for social sharing.",
         "low", 40, 40),
    Rule("social-3", "warning", "Incomplete Open Graph Tags",
         "Some Open Graph tags are missing. Add og:title, og:description, og:image.",
         "medium", None, 40,
         "Complete your Open Graph implementation with all required tags."),
    # Twitter Card (40)
    Rule("social-4", "warning", "Missing Twitter Card Tags",
         "No Twitter Card tags found. Your content won't display well when shared on Twitter.",
         "medium", 0, 40,
         "Add twitter:card, twitter:title, twitter:description, and twitter:image meta tags."),
    Rule("social-5", "success", "Twitter Card Tags Present",
         "Twitter Card is properly configured.",
         "low", 40, 40),
    Rule("social-6", "warning", "Incomplete Twitter Card Tags",
         "Some Twitter Card tags are missing.",
         "medium", None, 40,
         "Add twitter:title, twitter:description, and twitter:image tags."),
    # Best practices (20, always awarded)
    Rule("social-7", "info", "Social Sharing Best Practices",
         "Use images at least 1200x630px for best display on social platforms.",
         "low", 20, 20,
         "Create custom social sharing images with your brand and compelling text."),
)


def tag_credit(markup: str, weights: Tuple[Tuple[str, int], ...]) -> int:
    """Sum of the weights of every tag key the markup declares (via name or property)."""
    return sum(weight for key, weight in weights if mx.has_meta(markup, key))


def _open_graph_issue(markup: str) -> Issue:
    if not any(mx.has_meta(markup, key) for key in OPEN_GRAPH_ESSENTIALS):
        return build_issue(RULES["social-1"])
    credit = tag_credit(markup, OPEN_GRAPH_WEIGHTS)
    if credit >= OPEN_GRAPH_COMPLETE:
        return build_issue(RULES["social-2"])
    return build_issue(RULES["social-3"], points=credit)


def _twitter_issue(markup: str) -> Issue:
    if not mx.has_meta(markup, "twitter:card"):
        return build_issue(RULES["social-4"])
    credit = tag_credit(markup, TWITTER_WEIGHTS)
    if credit >= TWITTER_COMPLETE:
        return build_issue(RULES["social-5"])
    return build_issue(RULES["social-6"], points=credit)


def analyze_social(markup: str, url: str = "") -> CategoryScore:
    """Open Graph and Twitter Card completeness (100 pts)."""
    issues: List[Issue] = [
        _open_graph_issue(markup),
        _twitter_issue(markup),
        build_issue(RULES["social-7"]),
    ]
    return build_category("social", issues)
