import math
import re
from typing import Dict, List

from app.features.seo_audit.schemas.issue import CategoryScore, Issue
from app.features.seo_audit.services.extraction import markup_extractor as mx
from app.features.seo_audit.services.rules import Rule, build_category, build_issue, rule_table

THIN_CONTENT_WORDS = 300
GOOD_CONTENT_WORDS = 500
EXCELLENT_CONTENT_WORDS = 1000
MIN_PARAGRAPHS = 3
WORDS_PER_MINUTE = 200
STUFFING_MIN_TOKEN_LENGTH = 5
STUFFING_DENSITY = 0.05
# Density is meaningless on very short pages
STUFFING_MIN_WORDS = 100

NON_LETTERS = re.compile(r"[^a-z]")

RULES = rule_table(
    "content",
    # Word count (25)
    Rule("content-1", "critical", "Thin Content",
         "Your page has only {word_count} words. Search engines prefer pages with at least 300+ words.",
         "high", 0, 25,
         "Add more valuable content to your page. Aim for at least 300-500 words for basic pages, and 1000+ for articles."),
    Rule("content-2", "warning", "Content Could Be Longer",
         "Your page has {word_count} words. Consider adding more content for better ranking.",
         "medium", 15, 25,
         "Expand your content to at least 500-1000 words with valuable information."),
    Rule("content-3", "success", "Excellent Content Length",
         "Your page has {word_count} words, which is great for SEO.",
         "low", 25, 25),
    Rule("content-4", "success", "Good Content Length",
         "Your page has {word_count} words, which is adequate for SEO.",
         "low", 20, 25),
    # Paragraphs (15)
    Rule("content-5", "warning", "Few Paragraphs",
         "Only {paragraphs} paragraph(s) found. Well-structured content with multiple paragraphs is better.",
         "medium", 5, 15,
         "Break your content into multiple paragraphs (3-4 sentences each) for better readability."),
    Rule("content-6", "success", "Good Paragraph Structure",
         "Found {paragraphs} paragraphs. Content is well-structured.",
         "low", 15, 15),
    # Lists (15)
    Rule("content-7", "info", "No Lists Found",
         "Consider using bullet points or numbered lists to improve readability.",
         "low", 5, 15,
         "Add <ul> or <ol> lists to break down complex information into easy-to-read points."),
    Rule("content-8", "success", "Lists Used",
         "Found {lists} list(s). Good for readability and featured snippets!",
         "low", 15, 15),
    # Emphasis (10)
    Rule("content-9", "info", "No Bold/Strong Text",
         "Using bold text for important keywords can help with SEO.",
         "low", 5, 10,
         "Use <strong> or <b> tags to emphasize important keywords and phrases."),
    Rule("content-10", "success", "Bold Text Used",
         "Found {bold} bold/strong elements. Good for emphasizing keywords!",
         "low", 10, 10),
    # Reading time (10, always awarded)
    Rule("content-11", "info", "Estimated Reading Time",
         "This page takes approximately {minutes} minute(s) to read.",
         "low", 10, 10),
    # Keyword stuffing (25)
    Rule("content-12", "warning", "Possible Keyword Stuffing",
         'Some words appear too frequently: "{words}"',
         "medium", 10, 25,
         "Use synonyms and natural language. Keep keyword density below 2-3%."),
    Rule("content-13", "success", "Natural Keyword Usage",
         "No keyword stuffing detected. Content appears natural.",
         "low", 25, 25),
)


def visible_words(markup: str) -> List[str]:
    """Whitespace tokens of the body text with script and style blocks removed."""
    body = mx.body_content(markup)
    scope = body if body is not None else (markup or "")
    cleaned = mx.strip_tags(mx.remove_elements(scope, "script", "style"))
    return mx.words(cleaned)


def stuffed_words(tokens: List[str]) -> List[str]:
    """Letter-only tokens longer than four characters above the density threshold, in first-seen order."""
    total = len(tokens)
    frequencies: Dict[str, int] = {}
    for token in tokens:
        word = NON_LETTERS.sub("", token.lower())
        if len(word) >= STUFFING_MIN_TOKEN_LENGTH:
            frequencies[word] = frequencies.get(word, 0) + 1
    return [word for word, count in frequencies.items() if count / total > STUFFING_DENSITY]


def _word_count_issue(word_count: int) -> Issue:
    if word_count < THIN_CONTENT_WORDS:
        return build_issue(RULES["content-1"], word_count=word_count)
    if word_count < GOOD_CONTENT_WORDS:
        return build_issue(RULES["content-2"], word_count=word_count)
    if word_count >= EXCELLENT_CONTENT_WORDS:
        return build_issue(RULES["content-3"], word_count=word_count)
    return build_issue(RULES["content-4"], word_count=word_count)


def analyze_content(markup: str, url: str = "") -> CategoryScore:
    """Word count, structure, emphasis, reading time and keyword stuffing (100 pts)."""
    issues: List[Issue] = []

    tokens = visible_words(markup)
    word_count = len(tokens)
    issues.append(_word_count_issue(word_count))

    paragraphs = mx.count_tag(markup, "p")
    if paragraphs < MIN_PARAGRAPHS:
        issues.append(build_issue(RULES["content-5"], paragraphs=paragraphs))
    else:
        issues.append(build_issue(RULES["content-6"], paragraphs=paragraphs))

    lists = mx.count_tag(markup, "ul", "ol")
    if lists == 0:
        issues.append(build_issue(RULES["content-7"]))
    else:
        issues.append(build_issue(RULES["content-8"], lists=lists))

    bold = mx.count_tag(markup, "strong", "b")
    if bold == 0:
        issues.append(build_issue(RULES["content-9"]))
    else:
        issues.append(build_issue(RULES["content-10"], bold=bold))

    minutes = math.ceil(word_count / WORDS_PER_MINUTE)
    issues.append(build_issue(RULES["content-11"], minutes=minutes))

    stuffed = stuffed_words(tokens) if tokens else []
    if stuffed and word_count > STUFFING_MIN_WORDS:
        issues.append(build_issue(RULES["content-12"], words=", ".join(stuffed[:3])))
    else:
        issues.append(build_issue(RULES["content-13"]))

    return build_category("content", issues)
