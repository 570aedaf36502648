from typing import Dict, List

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")
H1_MIN_LENGTH = 20
H1_MAX_LENGTH = 70
H1_PREVIEW_LENGTH = 40

RULES = rule_table(
    "headings",
    # H1 (30)
    Rule("heading-1", "critical", "Missing H1 Heading",
         "Your page has no H1 heading. Every page should have exactly one H1 tag.",
         "high", 0, 30,
         "Add an H1 heading at the top of your main content: <h1>Your Main Page Title</h1>"),
    Rule("heading-2", "warning", "Multiple H1 Headings",
         "Found {count} H1 headings. Each page should have only one H1.",
         "medium", 15, 30,
         "Keep only one H1 and change others to H2 or lower. The H1 should be your main topic."),
    Rule("heading-3", "warning", "H1 Heading Too Short",
         'Your H1 "{text}" is quite short. Make it more descriptive.',
         "medium", 20, 30,
         "Expand your H1 to include your main keyword and be more descriptive."),
    Rule("heading-4", "warning", "H1 Heading Too Long",
         "Your H1 has {length} characters. Keep it concise (under 70 chars).",
         "low", 25, 30,
         "Shorten your H1 while keeping the main keyword. Move extra details to H2 or content."),
    Rule("heading-5", "success", "H1 Heading is Optimal",
         'Your H1 "{preview}..." is well-formatted.',
         "low", 30, 30),
    # H2 (25)
    Rule("heading-6", "warning", "No H2 Subheadings",
         "No H2 headings found. Subheadings help structure your content and improve SEO.",
         "medium", 0, 25,
         "Add H2 headings to break your content into logical sections."),
    Rule("heading-7", "info", "Few H2 Subheadings",
         "Only {count} H2 heading(s). Consider adding more for better structure.",
         "low", 15, 25,
         "Add more H2 headings to improve content organization."),
    Rule("heading-8", "success", "Good H2 Usage",
         "Found {count} H2 subheadings. Great content structure!",
         "low", 25, 25),
    # Hierarchy (25)
    Rule("heading-9", "critical", "No Headings Found",
         "Your page has no heading tags at all. This is very bad for SEO.",
         "high", 0, 25,
         "Add proper heading structure: One H1 for main title, H2s for sections, H3s for subsections."),
    Rule("heading-10", "success", "Good Heading Hierarchy",
         "Found {total} headings with proper H1 → H2 structure.",
         "low", 25, 25),
    Rule("heading-11", "info", "Heading Hierarchy Could Be Improved",
         "Consider following H1 → H2 → H3 hierarchy for better structure.",
         "low", 15, 25,
         "Organize headings in proper order: H1 first, then H2s, then H3s under H2s."),
    # Summary (20, always awarded)
    Rule("heading-12", "info", "Heading Summary",
         "H1: {h1} | H2: {h2} | H3: {h3} | H4: {h4} | H5: {h5} | H6: {h6}",
         "low", 20, 20),
)


def heading_texts(markup: str) -> Dict[str, List[str]]:
    """Text of every complete heading element per level."""
    return {level: mx.find_element_texts(markup, level) for level in HEADING_LEVELS}


def _h1_issue(h1s: List[str]) -> Issue:
    if not h1s:
        return build_issue(RULES["heading-1"])
    if len(h1s) > 1:
        return build_issue(RULES["heading-2"], count=len(h1s))

    text = h1s[0]
    if len(text) < H1_MIN_LENGTH:
        return build_issue(RULES["heading-3"], text=text)
    if len(text) > H1_MAX_LENGTH:
        return build_issue(RULES["heading-4"], length=len(text))
    return build_issue(RULES["heading-5"], preview=text[:H1_PREVIEW_LENGTH])


def _h2_issue(count: int) -> Issue:
    if count == 0:
        return build_issue(RULES["heading-6"])
    if count < 2:
        return build_issue(RULES["heading-7"], count=count)
    return build_issue(RULES["heading-8"], count=count)


def analyze_headings(markup: str, url: str = "") -> CategoryScore:
    """H1 presence/length, H2 usage, overall hierarchy and a per-level summary (100 pts)."""
    headings = heading_texts(markup)
    counts = {level: len(texts) for level, texts in headings.items()}
    total = sum(counts.values())

    issues: List[Issue] = [_h1_issue(headings["h1"]), _h2_issue(counts["h2"])]

    if total == 0:
        issues.append(build_issue(RULES["heading-9"]))
    elif counts["h1"] > 0 and counts["h2"] > 0:
        issues.append(build_issue(RULES["heading-10"], total=total))
    else:
        issues.append(build_issue(RULES["heading-11"]))

    issues.append(build_issue(RULES["heading-12"], **counts))

    return build_category("headings", issues)
