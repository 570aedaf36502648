from dataclasses import dataclass
from typing import List

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

# Lazy loading only matters once there are more images than this
LAZY_LOADING_IMAGE_THRESHOLD = 2

RULES = rule_table(
    "images",
    Rule("img-1", "info", "No Images Found",
         "Your page has no images. Visual content can improve engagement and SEO.",
         "low", 50, 100,
         "Consider adding relevant images to your content. Always include alt text."),
    # Alt text (35)
    Rule("img-2", "critical", "Images Missing Alt Text",
         "{count} image(s) have no alt attribute. Alt text is essential for accessibility and SEO.",
         "high", 0, 35,
         'Add descriptive alt attributes to all images: <img src="photo.jpg" alt="Description of the image">'),
    Rule("img-3", "warning", "Images with Empty Alt Text",
         "{count} image(s) have empty alt attributes. Provide meaningful descriptions.",
         "medium", 20, 35,
         "Fill in alt attributes with descriptive text that includes relevant keywords."),
    Rule("img-4", "success", "All Images Have Alt Text",
         "All {count} image(s) have alt attributes. Great for accessibility and SEO!",
         "low", 35, 35),
    # Lazy loading (25)
    Rule("img-5", "warning", "No Lazy Loading",
         "Images are not using lazy loading. This can slow down initial page load.",
         "medium", 10, 25,
         'Add loading="lazy" to images below the fold: <img src="photo.jpg" loading="lazy">'),
    Rule("img-6", "success", "Lazy Loading Implemented",
         "{count} image(s) use lazy loading for better performance.",
         "low", 25, 25),
    Rule("img-7", "info", "Few Images - Lazy Loading Optional",
         "With only a few images, lazy loading is less critical but still recommended.",
         "low", 20, 25),
    # Dimensions (20)
    Rule("img-8", "warning", "Images Missing Dimensions",
         "{count} image(s) don't have width/height specified. This can cause layout shifts.",
         "medium", 10, 20,
         "Add width and height attributes to prevent Cumulative Layout Shift (CLS)."),
    Rule("img-9", "success", "Image Dimensions Specified",
         "All images have width and height attributes. This prevents layout shifts.",
         "low", 20, 20),
    # Summary (20, always awarded)
    Rule("img-10", "info", "Image Summary",
         "Total: {total} | With Alt: {with_alt} | Empty Alt: {empty_alt} | No Alt: {missing_alt}",
         "low", 20, 20),
)


@dataclass(frozen=True)
class ImageStats:
    total: int = 0
    with_alt: int = 0
    empty_alt: int = 0
    missing_alt: int = 0
    lazy: int = 0
    with_dimensions: int = 0


def collect_image_stats(markup: str) -> ImageStats:
    """Classify every <img> by alt state, lazy loading and explicit dimensions."""
    with_alt = empty_alt = missing_alt = lazy = with_dimensions = 0
    images = mx.find_tags(markup, "img")

    for img in images:
        attrs = mx.parse_attrs(img)
        alt = attrs.get("alt")
        if alt is None:
            missing_alt += 1
        elif not alt.strip():
            empty_alt += 1
        else:
            with_alt += 1

        if attrs.get("loading", "").strip().lower() == "lazy":
            lazy += 1
        if "width" in attrs and "height" in attrs:
            with_dimensions += 1

    return ImageStats(
        total=len(images),
        with_alt=with_alt,
        empty_alt=empty_alt,
        missing_alt=missing_alt,
        lazy=lazy,
        with_dimensions=with_dimensions,
    )


def _alt_issue(stats: ImageStats) -> Issue:
    # Worst bucket present decides the verdict
    if stats.missing_alt > 0:
        return build_issue(RULES["img-2"], count=stats.missing_alt)
    if stats.empty_alt > 0:
        return build_issue(RULES["img-3"], count=stats.empty_alt)
    return build_issue(RULES["img-4"], count=stats.total)


def _lazy_loading_issue(stats: ImageStats) -> Issue:
    if stats.lazy == 0 and stats.total > LAZY_LOADING_IMAGE_THRESHOLD:
        return build_issue(RULES["img-5"])
    if stats.lazy > 0:
        return build_issue(RULES["img-6"], count=stats.lazy)
    return build_issue(RULES["img-7"])


def analyze_images(markup: str, url: str = "") -> CategoryScore:
    """Alt text, lazy loading and dimension checks over every <img> (100 pts)."""
    stats = collect_image_stats(markup)

    if stats.total == 0:
        return build_category("images", [build_issue(RULES["img-1"])])

    issues: List[Issue] = [_alt_issue(stats), _lazy_loading_issue(stats)]

    if stats.with_dimensions < stats.total:
        issues.append(build_issue(RULES["img-8"], count=stats.total - stats.with_dimensions))
    else:
        issues.append(build_issue(RULES["img-9"]))

    issues.append(
        build_issue(
            RULES["img-10"],
            total=stats.total,
            with_alt=stats.with_alt,
            empty_alt=stats.empty_alt,
            missing_alt=stats.missing_alt,
        )
    )

    return build_category("images", issues)
