from typing import List, Optional

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

# SEO Best Practice Constants
TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
DESCRIPTION_MIN_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 160
BLOCKING_ROBOTS_DIRECTIVES = ("noindex", "nofollow")

RULES = rule_table(
    "meta",
    # Title (20)
    Rule("meta-1", "critical", "Missing Page Title",
         "Your page has no title tag. The title is crucial for SEO and appears in search results.",
         "high", 0, 20,
         "Add a <title> tag inside the <head> section of your HTML. Example: <title>Your Page Title - Your Brand</title>"),
    Rule("meta-2", "warning", "Title Too Short",
         "Your title has only {length} characters. Titles between 50-60 characters perform best.",
         "medium", 10, 20,
         "Expand your title to include more relevant keywords while keeping it under 60 characters."),
    Rule("meta-3", "warning", "Title Too Long",
         "Your title has {length} characters. It may be truncated in search results (max 60 chars).",
         "medium", 15, 20,
         "Shorten your title to 50-60 characters. Put the most important keywords at the beginning."),
    Rule("meta-4", "success", "Title Length is Optimal",
         "Your title has {length} characters, which is within the recommended range.",
         "low", 20, 20),
    # Description (20)
    Rule("meta-5", "critical", "Missing Meta Description",
         "Your page has no meta description. This is the text that appears below your title in search results.",
         "high", 0, 20,
         'Add a meta description tag: <meta name="description" content="Your compelling description here (150-160 characters)">'),
    Rule("meta-6", "warning", "Meta Description Too Short",
         "Your description has only {length} characters. Aim for 150-160 characters.",
         "medium", 10, 20,
         "Expand your description to fully utilize the available space and include a call-to-action."),
    Rule("meta-7", "warning", "Meta Description Too Long",
         "Your description has {length} characters. It will be truncated in search results.",
         "medium", 15, 20,
         "Shorten your description to 150-160 characters. Include your main keyword and a call-to-action."),
    Rule("meta-8", "success", "Meta Description Length is Optimal",
         "Your description has {length} characters, which is within the recommended range.",
         "low", 20, 20),
    # Canonical (15)
    Rule("meta-9", "warning", "Missing Canonical URL",
         "No canonical URL specified. This can lead to duplicate content issues.",
         "medium", 0, 15,
         'Add a canonical link: <link rel="canonical" href="https://yoursite.com/page-url">'),
    Rule("meta-10", "success", "Canonical URL Present",
         "A canonical URL is specified, helping prevent duplicate content issues.",
         "low", 15, 15),
    # Keywords (10)
    Rule("meta-11", "info", "No Meta Keywords",
         "Meta keywords are not used by Google anymore, but some other search engines may still use them.",
         "low", 5, 10,
         "Optional: Add meta keywords if you want to target other search engines."),
    Rule("meta-12", "success", "Meta Keywords Present",
         "Meta keywords are defined. Note: Google ignores this, but other search engines may use it.",
         "low", 10, 10),
    # Robots (15)
    Rule("meta-13", "critical", "Page Blocked from Search Engines",
         'Your robots meta contains "{robots}". This page will not appear in search results!',
         "high", 0, 15,
         "If you want this page indexed, remove the noindex/nofollow from the robots meta tag."),
    Rule("meta-14", "success", "Page is Indexable",
         "No blocking robots directives found. Search engines can index this page.",
         "low", 15, 15),
    # Language (10)
    Rule("meta-15", "warning", "Missing Language Declaration",
         "No lang attribute on the HTML tag. This helps search engines understand your content language.",
         "medium", 0, 10,
         'Add lang attribute: <html lang="en"> for English content.'),
    Rule("meta-16", "success", "Language Declaration Present",
         'Page language is set to "{lang}".',
         "low", 10, 10),
    # Viewport (10)
    Rule("meta-17", "critical", "Missing Viewport Meta Tag",
         "No viewport meta tag found. Your page may not display correctly on mobile devices.",
         "high", 0, 10,
         'Add: <meta name="viewport" content="width=device-width, initial-scale=1.0">'),
    Rule("meta-18", "success", "Viewport Meta Tag Present",
         "Viewport meta tag is configured for responsive design.",
         "low", 10, 10),
)


def _canonical_href(markup: str) -> str:
    for tag in mx.find_links_with_rel(markup, "canonical"):
        href = (mx.find_attr(tag, "href") or "").strip()
        if href:
            return href
    return ""


def _html_lang(markup: str) -> Optional[str]:
    for tag in mx.find_tags(markup, "html"):
        lang = mx.find_attr(tag, "lang")
        if lang is not None:
            return lang
    return None


def _title_issue(title: str) -> Issue:
    length = len(title)
    if not title:
        return build_issue(RULES["meta-1"])
    if length < TITLE_MIN_LENGTH:
        return build_issue(RULES["meta-2"], length=length)
    if length > TITLE_MAX_LENGTH:
        return build_issue(RULES["meta-3"], length=length)
    return build_issue(RULES["meta-4"], length=length)


def _description_issue(description: str) -> Issue:
    length = len(description)
    if not description:
        return build_issue(RULES["meta-5"])
    if length < DESCRIPTION_MIN_LENGTH:
        return build_issue(RULES["meta-6"], length=length)
    if length > DESCRIPTION_MAX_LENGTH:
        return build_issue(RULES["meta-7"], length=length)
    return build_issue(RULES["meta-8"], length=length)


def analyze_meta_tags(markup: str, url: str = "") -> CategoryScore:
    """Title, description, canonical, keywords, robots, lang and viewport checks (100 pts)."""
    issues: List[Issue] = []

    title = mx.find_title(markup)
    description = mx.find_meta(markup, name="description") or ""
    keywords = mx.find_meta(markup, name="keywords") or ""
    robots = mx.find_meta(markup, name="robots") or ""

    issues.append(_title_issue(title))
    issues.append(_description_issue(description))

    if _canonical_href(markup):
        issues.append(build_issue(RULES["meta-10"]))
    else:
        issues.append(build_issue(RULES["meta-9"]))

    # Keywords are informational; presence only changes the credit
    if keywords:
        issues.append(build_issue(RULES["meta-12"]))
    else:
        issues.append(build_issue(RULES["meta-11"]))

    if any(directive in robots.lower() for directive in BLOCKING_ROBOTS_DIRECTIVES):
        issues.append(build_issue(RULES["meta-13"], robots=robots))
    else:
        issues.append(build_issue(RULES["meta-14"]))

    lang = _html_lang(markup)
    if lang is None:
        issues.append(build_issue(RULES["meta-15"]))
    else:
        issues.append(build_issue(RULES["meta-16"], lang=lang))

    if mx.find_meta_tags(markup, name="viewport"):
        issues.append(build_issue(RULES["meta-18"]))
    else:
        issues.append(build_issue(RULES["meta-17"]))

    return build_category("meta", issues)
