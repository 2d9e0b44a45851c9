"""Text cleanup helpers for fragments pulled out of the carrier's tracking page."""

from __future__ import annotations

import re
from typing import Any, Optional


HTML_ENTITIES = {
    "nbsp": " ",
    "amp": "&",
    "quot": '"',
    "#39": "'",
    "lt": "<",
    "gt": ">",
}

_ENTITY_RE = re.compile(r"&(nbsp|amp|quot|#39|lt|gt);", re.I)
_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)
_LINE_COMMENT_RE = re.compile(r"^\s*//.*$", re.M)
_DIGIT_RE = re.compile(r"\d")


def decode_html_entities(value: Optional[str]) -> str:
    """Decode the small entity set the portal emits.

    Single pass: `&amp;lt;` becomes `&lt;`, never `<`.
    """
    if not value:
        return ""
    return _ENTITY_RE.sub(lambda m: HTML_ENTITIES[m.group(1).lower()], value)


def clean_text(value: Any) -> str:
    """Strip tags, decode entities, collapse whitespace and trim."""
    if value is None:
        return ""
    text = _TAG_RE.sub(" ", str(value))
    text = decode_html_entities(text)
    return _WS_RE.sub(" ", text).strip()


def has_digits(value: Optional[str]) -> bool:
    return bool(_DIGIT_RE.search(value or ""))


def strip_js_comments(value: Optional[str]) -> str:
    """Remove /* block */ comments and whole-line // comments from script text."""
    text = _BLOCK_COMMENT_RE.sub("", str(value or ""))
    return _LINE_COMMENT_RE.sub("", text)
