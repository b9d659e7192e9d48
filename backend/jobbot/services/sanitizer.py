"""
Plain-text cleanup for fetched pages and feeds before they go into a prompt.
"""
import re

from jobbot.config import settings

TRUNCATION_MARKER = "\n[truncated]"

_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*>.*?</\1>", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&nbsp;": " ",
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES))


def decode_entities(text: str) -> str:
    # Single pass, so "&amp;lt;" decodes to "&lt;" and not "<".
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


def clean_feed_text(raw: str) -> str:
    """Light RSS/XML cleanup. Tags are kept so item structure survives."""
    text = _CDATA_RE.sub(r"\1", raw)
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = decode_entities(text)
    return collapse_whitespace(text)


def extract_page_text(html: str) -> str:
    """Strip an HTML page down to its visible text."""
    text = _SCRIPT_STYLE_RE.sub("", html)
    text = _TAG_RE.sub(" ", text)
    text = decode_entities(text)
    return collapse_whitespace(text)


def sanitize_feed(raw: str, limit: int | None = None) -> str:
    return truncate(clean_feed_text(raw), limit or settings.max_feed_chars)


def sanitize_page(html: str, limit: int | None = None) -> str:
    return truncate(extract_page_text(html), limit or settings.max_page_chars)
