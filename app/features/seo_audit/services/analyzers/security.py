from typing import List, Optional

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.analyzers.links import hostname_of
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

MAX_EXTERNAL_SCRIPTS = 5
INSECURE_SCHEME = "http://"
INSECURE_LINKED_ASSETS = (".css", ".js")

RULES = rule_table(
    "security",
    # HTTPS (40)
    Rule("security-1", "success", "SSL/HTTPS Enabled",
         "Your site uses HTTPS encryption. This is a ranking factor for Google.",
         "low", 40, 40),
    Rule("security-2", "critical", "No HTTPS/SSL",
         "Your site is not using HTTPS. This is a security risk and hurts SEO.",
         "high", 0, 40,
         "Install an SSL certificate and redirect all traffic to HTTPS."),
    Rule("security-9", "info", "HTTPS Not Verified",
         "No page URL was provided, so HTTPS usage could not be verified.",
         "low", 20, 40,
         "Provide the page URL to verify that it is served over HTTPS."),
    # Mixed content (25)
    Rule("security-3", "warning", "Mixed Content Detected",
         "Found {count} HTTP resource(s). This can cause security warnings.",
         "medium", 10, 25,
         "Change all HTTP resources to HTTPS or use protocol-relative URLs (//)."),
    Rule("security-4", "success", "No Mixed Content",
         "All resources are loaded securely.",
         "low", 25, 25),
    # External scripts (20)
    Rule("security-5", "info", "Many External Scripts",
         "{count} external scripts detected. Be cautious about third-party code.",
         "low", 10, 20,
         "Review external scripts regularly and use Subresource Integrity (SRI) for security."),
    Rule("security-6", "success", "Reasonable External Scripts",
         "External script usage is within acceptable limits.",
         "low", 20, 20),
    # Forms (15)
    Rule("security-7", "warning", "Form Security",
         "Some forms may not submit over HTTPS.",
         "medium", 5, 15,
         "Ensure all form actions use HTTPS URLs."),
    Rule("security-8", "success", "Forms Secure",
         "No insecure form submissions detected.",
         "low", 15, 15),
)


def count_insecure_resources(markup: str) -> int:
    """`src` values over plain HTTP plus stylesheet/script `href`s over plain HTTP."""
    count = 0
    for _, attrs in mx.iter_tags(markup):
        src = attrs.get("src", "").strip().lower()
        if src.startswith(INSECURE_SCHEME):
            count += 1
        href = attrs.get("href", "").strip().lower()
        if href.startswith(INSECURE_SCHEME) and href.endswith(INSECURE_LINKED_ASSETS):
            count += 1
    return count


def count_external_scripts(markup: str, page_host: Optional[str]) -> int:
    """Absolute script sources served from another host (every absolute one when the host is unknown)."""
    count = 0
    for tag in mx.find_tags(markup, "script"):
        src = (mx.find_attr(tag, "src") or "").strip()
        if not src.lower().startswith(("http://", "https://")):
            continue
        if page_host is None or hostname_of(src) != page_host:
            count += 1
    return count


def count_insecure_forms(markup: str) -> int:
    """Forms whose action explicitly posts over plain HTTP."""
    return sum(
        1
        for tag in mx.find_tags(markup, "form")
        if (mx.find_attr(tag, "action") or "").strip().lower().startswith(INSECURE_SCHEME)
    )


def _https_issue(url: str) -> Issue:
    if not url:
        return build_issue(RULES["security-9"])
    if url.lower().startswith("https://"):
        return build_issue(RULES["security-1"])
    return build_issue(RULES["security-2"])


def analyze_security(markup: str, url: str = "") -> CategoryScore:
    """HTTPS, mixed content, third-party scripts and form submission checks (100 pts)."""
    issues: List[Issue] = [_https_issue(url)]

    insecure = count_insecure_resources(markup)
    if insecure > 0:
        issues.append(build_issue(RULES["security-3"], count=insecure))
    else:
        issues.append(build_issue(RULES["security-4"]))

    external_scripts = count_external_scripts(markup, hostname_of(url))
    if external_scripts > MAX_EXTERNAL_SCRIPTS:
        issues.append(build_issue(RULES["security-5"], count=external_scripts))
    else:
        issues.append(build_issue(RULES["security-6"]))

    if count_insecure_forms(markup) > 0:
        issues.append(build_issue(RULES["security-7"]))
    else:
        issues.append(build_issue(RULES["security-8"]))

    return build_category("security", issues)
