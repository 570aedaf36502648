import re
from typing import List

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

MIN_READABLE_FONT_PX = 12
FONT_SIZE_PATTERN = re.compile(r"font-size:\s*([0-9]+)px", re.IGNORECASE)

RULES = rule_table(
    "mobile",
    # Viewport (35)
    Rule("mobile-1", "critical", "Missing Viewport Meta Tag",
         "No viewport configuration found. Page will not display correctly on mobile.",
         "high", 0, 35,
         'Add <meta name="viewport" content="width=device-width, initial-scale=1.0">'),
    Rule("mobile-2", "success", "Responsive Viewport Configured",
         "Viewport is properly configured for responsive design.",
         "low", 35, 35),
    Rule("mobile-3", "warning", "Viewport May Not Be Responsive",
         "Viewport is set but may not be fully responsive.",
         "medium", 20, 35,
         "Ensure viewport includes width=device-width for proper mobile scaling."),
    # Touch targets (20, always awarded)
    Rule("mobile-4", "info", "Touch Target Size",
         "Ensure buttons and links are at least 44x44 pixels for easy tapping on mobile.",
         "medium", 20, 20,
         "Use min-height and min-width of 44px for interactive elements."),
    # Font size (20)
    Rule("mobile-5", "warning", "Small Font Sizes Detected",
         "Some text may be too small to read on mobile devices.",
         "medium", 10, 20,
         "Use a minimum font size of 16px for body text on mobile."),
    Rule("mobile-6", "success", "Readable Font Sizes",
         "No extremely small fonts detected.",
         "low", 20, 20),
    # Responsive images (15)
    Rule("mobile-7", "info", "No Responsive Images",
         "Consider using srcset for responsive images on different screen sizes.",
         "low", 10, 15,
         "Use srcset attribute to provide different image sizes for different devices."),
    Rule("mobile-8", "success", "Responsive Images Implemented",
         "{count} image(s) use srcset/sizes for responsive loading.",
         "low", 15, 15),
    Rule("mobile-11", "info", "No Images to Make Responsive",
         "The page has no images, so responsive image markup is not needed.",
         "low", 15, 15),
    # Media queries (10)
    Rule("mobile-9", "info", "No CSS Media Queries Detected",
         "Inline styles don't contain media queries. Check external stylesheets.",
         "low", 5, 10,
         "Use CSS media queries to adapt layout for different screen sizes."),
    Rule("mobile-10", "success", "Media Queries Present",
         "CSS media queries are used for responsive design.",
         "low", 10, 10),
)


def has_small_fonts(markup: str) -> bool:
    """True when any `font-size: Npx` declaration is below the readable minimum."""
    return any(int(size) < MIN_READABLE_FONT_PX for size in FONT_SIZE_PATTERN.findall(markup or ""))


def has_media_queries(markup: str) -> bool:
    return any("@media" in block for block in mx.find_elements(markup, "style"))


def _viewport_issue(markup: str) -> Issue:
    content = mx.find_meta(markup, name="viewport")
    if not content:
        return build_issue(RULES["mobile-1"])
    if "width=device-width" in content.lower().replace(" ", ""):
        return build_issue(RULES["mobile-2"])
    return build_issue(RULES["mobile-3"])


def _responsive_images_issue(markup: str) -> Issue:
    images = mx.find_tags(markup, "img")
    responsive = sum(1 for img in images if mx.has_attr(img, "srcset") or mx.has_attr(img, "sizes"))
    if not images:
        return build_issue(RULES["mobile-11"])
    if responsive == 0:
        return build_issue(RULES["mobile-7"])
    return build_issue(RULES["mobile-8"], count=responsive)


def analyze_mobile(markup: str, url: str = "") -> CategoryScore:
    """Viewport, font size, responsive images and media query checks (100 pts)."""
    issues: List[Issue] = [
        _viewport_issue(markup),
        build_issue(RULES["mobile-4"]),
    ]

    if has_small_fonts(markup):
        issues.append(build_issue(RULES["mobile-5"]))
    else:
        issues.append(build_issue(RULES["mobile-6"]))

    issues.append(_responsive_images_issue(markup))

    if has_media_queries(markup):
        issues.append(build_issue(RULES["mobile-10"]))
    else:
        issues.append(build_issue(RULES["mobile-9"]))

    return build_category("mobile", issues)
