from typing import List, Optional
from urllib.parse import urlparse

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table
from app.platform.logger import get_logger

logger = get_logger(__name__)

INVALID_HREFS = ("", "#", "javascript:void(0)")

INTERNAL = "internal"
EXTERNAL = "external"
INVALID = "invalid"

RULES = rule_table(
    "links",
    Rule("link-1", "warning", "No Links Found",
         "Your page has no links. Internal and external links are important for SEO.",
         "medium", 30, 100,
         "Add relevant internal links to other pages and external links to authoritative sources."),
    # Internal (30)
    Rule("link-2", "warning", "No Internal Links",
         "No internal links found. Internal linking helps search engines understand your site structure.",
         "medium", 10, 30,
         "Add links to other pages on your website to create a good internal link structure."),
    Rule("link-3", "success", "Internal Links Found",
         "Found {count} internal link(s). Good for site navigation and SEO.",
         "low", 30, 30),
    # External (25)
    Rule("link-4", "info", "No External Links",
         "No outbound links to other websites. Linking to authoritative sources can improve credibility.",
         "low", 15, 25,
         "Consider linking to reputable external sources that add value to your content."),
    Rule("link-5", "success", "External Links Present",
         "Found {count} external link(s). Good for credibility!",
         "low", 25, 25),
    # Valid hrefs (20)
    Rule("link-6", "warning", "Empty or Invalid Links",
         "Found {count} link(s) with empty or JavaScript href. These don't help SEO.",
         "medium", 0, 20,
         "Replace empty hrefs with actual URLs or use buttons for JavaScript actions."),
    Rule("link-7", "success", "All Links Have Valid URLs",
         "All links have proper href attributes.",
         "low", 20, 20),
    # NoFollow (10, informational either way)
    Rule("link-8", "info", "NoFollow Links Detected",
         '{count} link(s) have rel="nofollow". This is fine for untrusted or sponsored links.',
         "low", 10, 10),
    Rule("link-9", "info", "No NoFollow Links",
         "All links pass link equity. Consider using nofollow for sponsored or untrusted content.",
         "low", 10, 10),
    # Summary (15, always awarded)
    Rule("link-10", "info", "Link Summary",
         "Total: {total} | Internal: {internal} | External: {external} | NoFollow: {nofollow}",
         "low", 15, 15),
)


def hostname_of(url: str) -> Optional[str]:
    """Lowercase hostname of an absolute URL, or None when it has none or cannot be parsed."""
    if not url:
        return None
    try:
        return urlparse(url).hostname or None
    except ValueError:
        logger.debug(f"Unparsable URL treated as unknown host: {url!r}")
        return None


def classify_href(href: str, page_host: Optional[str]) -> Optional[str]:
    """
    Classify one href as internal, external or invalid relative to the page host.

    Args:
        href: Raw href value (already stripped)
        page_host: Hostname of the analyzed page, None when unknown

    Returns:
        INTERNAL, EXTERNAL, INVALID, or None for other schemes such as mailto: or tel:
    """
    if href in INVALID_HREFS:
        return INVALID

    if href.startswith("//"):
        # Protocol-relative: compare hosts like an absolute URL
        link_host = hostname_of("http:" + href)
        return INTERNAL if page_host and link_host == page_host else EXTERNAL

    if href.lower().startswith("http"):
        link_host = hostname_of(href)
        if page_host and link_host == page_host:
            return INTERNAL
        return EXTERNAL

    if href.startswith("/") or href.startswith("./") or ":" not in href:
        return INTERNAL
    return None


def analyze_links(markup: str, url: str = "") -> CategoryScore:
    """Internal/external link balance, invalid hrefs and nofollow usage (100 pts)."""
    anchors = [tag for tag in mx.find_tags(markup, "a") if mx.has_attr(tag, "href")]

    if not anchors:
        return build_category("links", [build_issue(RULES["link-1"])])

    page_host = hostname_of(url)
    internal = external = invalid = nofollow = 0

    for anchor in anchors:
        if "nofollow" in mx.rel_tokens(anchor):
            nofollow += 1
        kind = classify_href((mx.find_attr(anchor, "href") or "").strip(), page_host)
        if kind == INTERNAL:
            internal += 1
        elif kind == EXTERNAL:
            external += 1
        elif kind == INVALID:
            invalid += 1

    issues: List[Issue] = []

    if internal == 0:
        issues.append(build_issue(RULES["link-2"]))
    else:
        issues.append(build_issue(RULES["link-3"], count=internal))

    if external == 0:
        issues.append(build_issue(RULES["link-4"]))
    else:
        issues.append(build_issue(RULES["link-5"], count=external))

    if invalid > 0:
        issues.append(build_issue(RULES["link-6"], count=invalid))
    else:
        issues.append(build_issue(RULES["link-7"]))

    if nofollow > 0:
        issues.append(build_issue(RULES["link-8"], count=nofollow))
    else:
        issues.append(build_issue(RULES["link-9"]))

    issues.append(
        build_issue(
            RULES["link-10"],
            total=len(anchors),
            internal=internal,
            external=external,
            nofollow=nofollow,
        )
    )

    return build_category("links", issues)
