from app.features.seo_audit.schemas.analysis import PageInfo
from app.features.seo_audit.services.extraction import markup_extractor as mx

NO_TITLE = "No title found"
NO_DESCRIPTION = "No description found"

BASE_LOAD_SECONDS = 0.5
BYTES_PER_SECOND = 50_000
MAX_LOAD_SECONDS = 2.5


def estimate_load_time(size_bytes: int) -> float:
    """Rough transfer-time estimate in seconds, a pure function of the document size."""
    return round(min(MAX_LOAD_SECONDS, BASE_LOAD_SECONDS + size_bytes / BYTES_PER_SECOND), 2)


def format_page_size(size_bytes: int) -> str:
    return f"{size_bytes / 1024:.1f} KB"


def body_word_count(markup: str) -> int:
    """Words in the body text with tags removed; 0 when there is no <body> element."""
    body = mx.body_content(markup)
    if body is None:
        return 0
    return len(mx.words(mx.strip_tags(body)))


def extract_page_info(markup: str, url: str = "") -> PageInfo:
    """Display summary of a document. Not used for scoring."""
    size_bytes = mx.byte_size(markup)
    return PageInfo(
        title=mx.find_title(markup) or NO_TITLE,
        description=mx.find_meta(markup, name="description") or NO_DESCRIPTION,
        url=url,
        word_count=body_word_count(markup),
        load_time=estimate_load_time(size_bytes),
        page_size=format_page_size(size_bytes),
    )
