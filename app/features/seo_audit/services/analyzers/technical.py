import re
from typing import List
from urllib.parse import urlparse

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

MAX_INLINE_STYLES = 10
JSON_LD_TYPE = "application/ld+json"
UPPERCASE_PATTERN = re.compile(r"[A-Z]")

RULES = rule_table(
    "technical",
    # DOCTYPE (15)
    Rule("tech-1", "warning", "Missing DOCTYPE Declaration",
         "No DOCTYPE declaration found. This may cause rendering issues.",
         "medium", 0, 15,
         "Add <!DOCTYPE html> at the very beginning of your HTML document."),
    Rule("tech-2", "success", "DOCTYPE Declaration Present",
         "HTML5 DOCTYPE is properly declared.",
         "low", 15, 15),
    # Charset (15)
    Rule("tech-3", "warning", "Missing Character Encoding",
         "No charset meta tag found. This can cause text display issues.",
         "medium", 0, 15,
         'Add <meta charset="UTF-8"> as the first tag in your <head> section.'),
    Rule("tech-4", "success", "Character Encoding Specified",
         'Charset is set to "{charset}".',
         "low", 15, 15),
    # Favicon (10)
    Rule("tech-5", "warning", "Missing Favicon",
         "No favicon found. A favicon helps with brand recognition in browser tabs.",
         "low", 0, 10,
         'Add: <link rel="icon" href="/favicon.ico" type="image/x-icon">'),
    Rule("tech-6", "success", "Favicon Present",
         "A favicon is defined for the page.",
         "low", 10, 10),
    # HTTPS (20)
    Rule("tech-7", "critical", "Not Using HTTPS",
         "Your site is not using HTTPS. Google prioritizes secure websites.",
         "high", 0, 20,
         "Install an SSL certificate and redirect all HTTP traffic to HTTPS."),
    Rule("tech-8", "success", "HTTPS Enabled",
         "Your site uses HTTPS. Great for security and SEO!",
         "low", 20, 20),
    # URL structure (15)
    Rule("tech-9", "warning", "URL Contains Query Parameters",
         "Dynamic URLs with query strings are less SEO-friendly.",
         "medium", 5, 15,
         "Use clean, descriptive URLs like /blog/my-article instead of /page?id=123"),
    Rule("tech-10", "info", "URL Contains Uppercase Letters",
         "Using lowercase URLs is recommended for consistency.",
         "low", 10, 15,
         "Use lowercase letters in URLs and set up redirects for uppercase versions."),
    Rule("tech-11", "success", "Clean URL Structure",
         "Your URL is clean and SEO-friendly.",
         "low", 15, 15),
    # Inline styles (15)
    Rule("tech-12", "warning", "Excessive Inline Styles",
         "Found {count} inline style attributes. This can slow down rendering.",
         "medium", 5, 15,
         "Move inline styles to external CSS files for better caching and maintenance."),
    Rule("tech-13", "success", "Minimal Inline Styles",
         "Good use of external stylesheets over inline styles.",
         "low", 15, 15),
    # Structured data (15)
    Rule("tech-14", "info", "No Structured Data",
         "No JSON-LD structured data found. Schema markup can enhance search results.",
         "medium", 5, 15,
         "Add Schema.org structured data to get rich snippets in search results."),
    Rule("tech-15", "success", "Structured Data Present",
         "JSON-LD structured data is implemented. Great for rich snippets!",
         "low", 15, 15),
    # HTTPS + URL structure credit when there is no URL to inspect (35)
    Rule("tech-16", "info", "URL Checks Skipped",
         "No page URL was provided, so HTTPS and URL structure checks were not run.",
         "low", 35, 35,
         "Provide the page URL to check HTTPS usage and URL structure."),
)


def count_inline_styles(markup: str) -> int:
    """Tags carrying a non-empty style attribute."""
    return sum(1 for _, attrs in mx.iter_tags(markup) if attrs.get("style", "").strip())


def has_json_ld(markup: str) -> bool:
    return any(
        (mx.find_attr(tag, "type") or "").strip().lower() == JSON_LD_TYPE
        for tag in mx.find_tags(markup, "script")
    )


def url_path(url: str) -> str:
    """Path, params and query of a URL; scheme and host are case-insensitive and excluded."""
    try:
        parts = urlparse(url)
    except ValueError:
        return url
    if not parts.netloc:
        return url
    return url.split(parts.netloc, 1)[-1]


def _url_issues(url: str) -> List[Issue]:
    if not url:
        return [build_issue(RULES["tech-16"])]

    issues: List[Issue] = []
    if url.lower().startswith("https://"):
        issues.append(build_issue(RULES["tech-8"]))
    else:
        issues.append(build_issue(RULES["tech-7"]))

    lowered = url.lower()
    if "?" in lowered and "id=" in lowered:
        issues.append(build_issue(RULES["tech-9"]))
    elif UPPERCASE_PATTERN.search(url_path(url)):
        issues.append(build_issue(RULES["tech-10"]))
    else:
        issues.append(build_issue(RULES["tech-11"]))
    return issues


def analyze_technical(markup: str, url: str = "") -> CategoryScore:
    """DOCTYPE, charset, favicon, URL hygiene, inline styles and structured data (105 pts)."""
    issues: List[Issue] = []

    if mx.has_doctype(markup):
        issues.append(build_issue(RULES["tech-2"]))
    else:
        issues.append(build_issue(RULES["tech-1"]))

    charset = mx.find_charset(markup)
    if charset:
        issues.append(build_issue(RULES["tech-4"], charset=charset))
    else:
        issues.append(build_issue(RULES["tech-3"]))

    if mx.find_links_with_rel(markup, "icon", partial=True):
        issues.append(build_issue(RULES["tech-6"]))
    else:
        issues.append(build_issue(RULES["tech-5"]))

    issues.extend(_url_issues(url))

    inline_styles = count_inline_styles(markup)
    if inline_styles > MAX_INLINE_STYLES:
        issues.append(build_issue(RULES["tech-12"], count=inline_styles))
    else:
        issues.append(build_issue(RULES["tech-13"]))

    if has_json_ld(markup):
        issues.append(build_issue(RULES["tech-15"]))
    else:
        issues.append(build_issue(RULES["tech-14"]))

    return build_category("technical", issues)
