"""
Pattern-based lookup of tags, attributes and text runs in raw markup.

This is deliberately not a conformant HTML parser: there is no tree, nested or
overlapping tags are not reconciled, and comments/CDATA are not special-cased.
Every helper is case-insensitive, tolerant of extra whitespace and attribute
order, and never raises on malformed input; "not found" is an empty list,
None, or zero.

Each lookup is a single pass over the markup. A tag never spans a "<", and
elements are built by pairing opening and closing tags found separately, so
unclosed tags cannot trigger rescans to the end of the document.

Analyzers depend only on this module for extraction, so a real tokenizer can be
swapped in behind the same functions without touching rule logic.
"""
import re
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Pattern, Tuple

# name[=value] pairs; consuming quoted values keeps words inside them from
# being read as attribute names
ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)
ANY_OPENING_TAG_PATTERN = re.compile(r"<([a-zA-Z][a-zA-Z0-9:-]*)(?=[\s/>])[^<>]*>")
TAG_PREFIX_PATTERN = re.compile(r"^<\s*[^\s/>]+")
ANY_TAG_PATTERN = re.compile(r"<[^<>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")
DOCTYPE_PATTERN = re.compile(r"<!doctype\s+html(?=[\s>])", re.IGNORECASE)
CHARSET_IN_CONTENT_PATTERN = re.compile(r"charset\s*=\s*([^\s;\"'>]+)", re.IGNORECASE)

# (start, content start, content end, end) of one element
ElementSpan = Tuple[int, int, int, int]


@lru_cache(maxsize=64)
def _opening_tag_pattern(tag: str) -> Pattern[str]:
    return re.compile(rf"<{re.escape(tag)}(?=[\s/>])[^<>]*>", re.IGNORECASE)


@lru_cache(maxsize=64)
def _closing_tag_pattern(tag: str) -> Pattern[str]:
    return re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE)


def _element_spans(markup: str, tag: str) -> List[ElementSpan]:
    """
    Pair each opening tag with the first closing tag after it.

    Matches are non-overlapping and taken left to right, so openings inside an
    already paired element are skipped and nesting is not reconciled.
    """
    closings = [(match.start(), match.end()) for match in _closing_tag_pattern(tag).finditer(markup)]
    spans: List[ElementSpan] = []
    index = 0
    resume_at = 0
    for opening in _opening_tag_pattern(tag).finditer(markup):
        if opening.start() < resume_at:
            continue
        while index < len(closings) and closings[index][0] < opening.end():
            index += 1
        if index == len(closings):
            break
        close_start, close_end = closings[index]
        spans.append((opening.start(), opening.end(), close_start, close_end))
        resume_at = close_end
        index += 1
    return spans


# ── Tags ─────────────────────────────────────

def find_tags(markup: str, tag: str) -> List[str]:
    """All opening tags named `tag`, e.g. every `<img ...>` substring."""
    return _opening_tag_pattern(tag).findall(markup or "")


def find_tag(markup: str, tag: str) -> Optional[str]:
    """First opening tag named `tag`, or None."""
    match = _opening_tag_pattern(tag).search(markup or "")
    return match.group(0) if match else None


def count_tag(markup: str, *tags: str) -> int:
    """Number of opening tags across every name in `tags`."""
    return sum(len(find_tags(markup, tag)) for tag in tags)


def find_elements(markup: str, tag: str) -> List[str]:
    """Whole `<tag ...>...</tag>` runs, each ending at the first closing tag."""
    markup = markup or ""
    return [markup[start:end] for start, _, _, end in _element_spans(markup, tag)]


def find_element_texts(markup: str, tag: str) -> List[str]:
    """Text of each `<tag>` element with inner tags removed and whitespace trimmed."""
    markup = markup or ""
    return [
        strip_tags(markup[inner_start:inner_end])
        for _, inner_start, inner_end, _ in _element_spans(markup, tag)
    ]


def remove_elements(markup: str, *tags: str) -> str:
    """Drop whole elements (opening tag, content and closing tag)."""
    cleaned = markup or ""
    for tag in tags:
        pieces = []
        position = 0
        for start, _, _, end in _element_spans(cleaned, tag):
            pieces.append(cleaned[position:start])
            position = end
        pieces.append(cleaned[position:])
        cleaned = "".join(pieces)
    return cleaned


def iter_tags(markup: str) -> Iterator[Tuple[str, Dict[str, str]]]:
    """Every opening tag in document order as (lowercase name, attributes)."""
    for match in ANY_OPENING_TAG_PATTERN.finditer(markup or ""):
        yield match.group(1).lower(), parse_attrs(match.group(0))


# ── Attributes ───────────────────────────────

def parse_attrs(tag_fragment: str) -> Dict[str, str]:
    """
    Attributes of a single opening tag.

    Names are lowercased; the first occurrence of a repeated attribute wins.
    A bare attribute (`<img alt>`) maps to an empty string.
    """
    body = TAG_PREFIX_PATTERN.sub("", (tag_fragment or "").strip())
    if body.endswith(">"):
        body = body[:-1].rstrip()
    if body.endswith("/"):
        body = body[:-1]
    attrs: Dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(body):
        name = match.group(1).lower()
        if name in attrs:
            continue
        value = next((group for group in match.group(2, 3, 4) if group is not None), "")
        attrs[name] = value
    return attrs


def find_attr(tag_fragment: str, name: str) -> Optional[str]:
    """Value of attribute `name` in one tag, or None when the attribute is absent."""
    return parse_attrs(tag_fragment).get(name.lower())


def has_attr(tag_fragment: str, name: str) -> bool:
    return find_attr(tag_fragment, name) is not None


def rel_tokens(tag_fragment: str) -> List[str]:
    """Space-separated tokens of a `rel` attribute, lowercased."""
    return (find_attr(tag_fragment, "rel") or "").lower().split()


# ── Document-level lookups ───────────────────

def find_meta_tags(markup: str, *, name: Optional[str] = None, prop: Optional[str] = None) -> List[Dict[str, str]]:
    """Attributes of every `<meta>` whose name (or property) equals the given key."""
    wanted = (name or prop or "").lower()
    found = []
    for tag in find_tags(markup, "meta"):
        attrs = parse_attrs(tag)
        key = attrs.get("name") if name else attrs.get("property")
        if key is not None and key.strip().lower() == wanted:
            found.append(attrs)
    return found


def find_meta(markup: str, *, name: Optional[str] = None, prop: Optional[str] = None) -> Optional[str]:
    """
    Trimmed `content` of the first matching `<meta>` that has one.

    Returns "" when the tag exists without content and None when no such tag exists.
    """
    tags = find_meta_tags(markup, name=name, prop=prop)
    if not tags:
        return None
    for attrs in tags:
        if "content" in attrs:
            return attrs["content"].strip()
    return ""


def has_meta(markup: str, key: str) -> bool:
    """True when a `<meta>` declares `key` through either `name` or `property`."""
    return bool(find_meta_tags(markup, name=key) or find_meta_tags(markup, prop=key))


def find_links_with_rel(markup: str, rel: str, *, partial: bool = False) -> List[str]:
    """
    `<link>` tags whose rel contains `rel` as a token, or as a substring when `partial`
    (so "icon" also finds "shortcut icon" and "apple-touch-icon").
    """
    wanted = rel.lower()
    found = []
    for tag in find_tags(markup, "link"):
        if partial:
            matched = wanted in (find_attr(tag, "rel") or "").lower()
        else:
            matched = wanted in rel_tokens(tag)
        if matched:
            found.append(tag)
    return found


def find_charset(markup: str) -> Optional[str]:
    """Declared character encoding from `<meta charset>` or an http-equiv content value."""
    for tag in find_tags(markup, "meta"):
        attrs = parse_attrs(tag)
        charset = (attrs.get("charset") or "").strip()
        if charset:
            return charset
        match = CHARSET_IN_CONTENT_PATTERN.search(attrs.get("content") or "")
        if match:
            return match.group(1)
    return None


def has_doctype(markup: str) -> bool:
    return bool(DOCTYPE_PATTERN.search(markup or ""))


def find_title(markup: str) -> str:
    """Trimmed text of the first `<title>` element, or "" when absent."""
    texts = find_element_texts(markup, "title")
    return texts[0] if texts else ""


# ── Text ─────────────────────────────────────

def strip_tags(text: str) -> str:
    """Replace every tag with a space and collapse whitespace."""
    without_tags = ANY_TAG_PATTERN.sub(" ", text or "")
    return WHITESPACE_PATTERN.sub(" ", without_tags).strip()


def body_content(markup: str) -> Optional[str]:
    """Raw markup between the first `<body>` and the last `</body>` after it, or None."""
    markup = markup or ""
    opening = _opening_tag_pattern("body").search(markup)
    if opening is None:
        return None
    closings = list(_closing_tag_pattern("body").finditer(markup, opening.end()))
    if not closings:
        return None
    return markup[opening.end():closings[-1].start()]


def words(text: str) -> List[str]:
    return text.split()


def byte_size(markup: str) -> int:
    """UTF-8 size of the markup; lone surrogates count as three bytes instead of raising."""
    return len((markup or "").encode("utf-8", errors="surrogatepass"))
