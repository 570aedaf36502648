from typing import List

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

LARGE_DOCUMENT_BYTES = 100_000
MODERATE_DOCUMENT_BYTES = 50_000
MAX_STYLE_BLOCKS = 3
MAX_INLINE_SCRIPTS = 5
MAX_BLOCKING_STYLESHEETS = 5
MAX_BLOCKING_SCRIPTS = 3

RULES = rule_table(
    "performance",
    # Document size (25)
    Rule("perf-1", "warning", "Large HTML Document",
         "HTML size is {size_kb}KB. Large documents slow down initial render.",
         "medium", 10, 25,
         "Reduce HTML size by removing unnecessary code, comments, and inline styles."),
    Rule("perf-2", "info", "Moderate HTML Size",
         "HTML size is {size_kb}KB. Consider optimizing if possible.",
         "low", 18, 25,
         "Look for opportunities to reduce HTML size."),
    Rule("perf-3", "success", "Optimized HTML Size",
         "HTML size is {size_kb}KB. Good for fast loading!",
         "low", 25, 25),
    # Inline code (25)
    Rule("perf-4", "warning", "Excessive Inline Code",
         "Found {style_blocks} style blocks and {inline_scripts} inline scripts.",
         "medium", 10, 25,
         "Move inline CSS and JavaScript to external files for better caching."),
    Rule("perf-5", "success", "Minimal Inline Code",
         "Good balance of inline and external resources.",
         "low", 25, 25),
    # Render-blocking resources (25)
    Rule("perf-6", "warning", "Multiple Render-Blocking Resources",
         "{stylesheets} CSS files and {scripts} blocking scripts may slow rendering.",
         "medium", 10, 25,
         "Use async/defer for scripts and consider critical CSS inlining."),
    Rule("perf-7", "success", "Reasonable Resource Loading",
         "Number of render-blocking resources is acceptable.",
         "low", 25, 25),
    # Compression (25, always awarded)
    Rule("perf-8", "info", "Enable Compression",
         "Ensure Gzip/Brotli compression is enabled on your server.",
         "medium", 25, 25,
         "Configure your server to compress HTML, CSS, and JavaScript files."),
)


def format_kb(size_bytes: int) -> str:
    return f"{size_bytes / 1024:.1f}"


def count_inline_scripts(markup: str) -> int:
    """Complete <script> elements without a src attribute."""
    return sum(
        1
        for element in mx.find_elements(markup, "script")
        if not mx.has_attr(mx.find_tag(element, "script") or "", "src")
    )


def count_blocking_scripts(markup: str) -> int:
    """External scripts loaded without async or defer."""
    return sum(
        1
        for tag in mx.find_tags(markup, "script")
        if mx.has_attr(tag, "src") and not (mx.has_attr(tag, "async") or mx.has_attr(tag, "defer"))
    )


def _size_issue(size_bytes: int) -> Issue:
    size_kb = format_kb(size_bytes)
    if size_bytes > LARGE_DOCUMENT_BYTES:
        return build_issue(RULES["perf-1"], size_kb=size_kb)
    if size_bytes > MODERATE_DOCUMENT_BYTES:
        return build_issue(RULES["perf-2"], size_kb=size_kb)
    return build_issue(RULES["perf-3"], size_kb=size_kb)


def analyze_performance(markup: str, url: str = "") -> CategoryScore:
    """Static performance estimates: document size, inline code and render-blocking resources (100 pts)."""
    issues: List[Issue] = [_size_issue(mx.byte_size(markup))]

    style_blocks = len(mx.find_elements(markup, "style"))
    inline_scripts = count_inline_scripts(markup)
    if style_blocks > MAX_STYLE_BLOCKS or inline_scripts > MAX_INLINE_SCRIPTS:
        issues.append(
            build_issue(RULES["perf-4"], style_blocks=style_blocks, inline_scripts=inline_scripts)
        )
    else:
        issues.append(build_issue(RULES["perf-5"]))

    stylesheets = len(mx.find_links_with_rel(markup, "stylesheet"))
    scripts = count_blocking_scripts(markup)
    if stylesheets > MAX_BLOCKING_STYLESHEETS or scripts > MAX_BLOCKING_SCRIPTS:
        issues.append(build_issue(RULES["perf-6"], stylesheets=stylesheets, scripts=scripts))
    else:
        issues.append(build_issue(RULES["perf-7"]))

    issues.append(build_issue(RULES["perf-8"]))

    return build_category("performance", issues)
