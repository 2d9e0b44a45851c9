"""Structural extraction of the portal's activity timeline.

The page has no stable API, so we scan the raw HTML for
`div.widget-activity-item` blocks and balance nested `div` tags by hand to
find where each block ends. This is deliberately narrow (one element type, one
page layout) and is not meant to grow into a general HTML parser.

Layout of one block, as served by the portal:

    <div class="widget-activity-item">
      <div class="tbl-cell">(icon)</div>
      <div class="tbl-cell">
        <p><span>12/05/2024 10:30</span> <span>En tránsito</span></p>
        <p>Bodega Santiago</p>
      </div>
    </div>
"""

from __future__ import annotations

import re
from typing import Iterator, List, Tuple

from zaitrack.extraction.template_artifacts import TemplatePredicate, looks_like_template_text
from zaitrack.extraction.text_clean import clean_text, has_digits
from zaitrack.tracking.types import TrackingEvent


ACTIVITY_MARKER = "widget-activity-item"
CELL_MARKER = "tbl-cell"


def _class_div_re(marker: str) -> str:
    return r"<div\b[^>]*class=[\"'][^\"']*" + re.escape(marker) + r"[^\"']*[\"'][^>]*>"


_BLOCK_START_RE = re.compile(_class_div_re(ACTIVITY_MARKER), re.I)
_DIV_TAG_RE = re.compile(r"</?div\b[^>]*>", re.I)
_CELL_RE = re.compile(_class_div_re(CELL_MARKER) + r"(.*?)</div>", re.I | re.S)
_P_RE = re.compile(r"<p\b[^>]*>(.*?)</p>", re.I | re.S)
_SPAN_RE = re.compile(r"<span\b[^>]*>(.*?)</span>", re.I | re.S)


def find_block_end(html: str, cursor: int) -> int:
    """Return the index just past the `</div>` closing a block opened before `cursor`.

    Falls back to the end of the document when the block is never closed.
    """
    depth = 1
    while depth > 0:
        tag = _DIV_TAG_RE.search(html, cursor)
        if tag is None:
            return len(html)
        if tag.group(0).startswith("</"):
            depth -= 1
        else:
            depth += 1
        cursor = tag.end()
    return cursor


def iter_activity_blocks(html: str) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) of every activity block, in document order."""
    if not html:
        return
    match = _BLOCK_START_RE.search(html)
    while match:
        end = find_block_end(html, match.end())
        yield match.start(), end
        match = _BLOCK_START_RE.search(html, end)


def _parse_block(block: str) -> Tuple[str, str, str]:
    cells = _CELL_RE.findall(block)
    if len(cells) < 2:
        return "", "", ""
    # cells[0] only holds the timeline icon
    paragraphs = _P_RE.findall(cells[1])
    if not paragraphs:
        return "", "", ""
    spans = _SPAN_RE.findall(paragraphs[0])
    timestamp = clean_text(spans[0]) if spans else ""
    status = clean_text(spans[1]) if len(spans) > 1 else ""
    detail = clean_text(paragraphs[1]) if len(paragraphs) > 1 else ""
    return timestamp, status, detail


def extract_statuses(html: str, *, is_template_text: TemplatePredicate = looks_like_template_text) -> List[TrackingEvent]:
    """Extract tracking events from the visible activity widget.

    A candidate is dropped whole when its timestamp is empty or digit-free, or
    when any of its fields looks like template source.
    """
    results: List[TrackingEvent] = []
    for start, end in iter_activity_blocks(html):
        timestamp, status, detail = _parse_block(html[start:end])
        if not timestamp or not has_digits(timestamp):
            continue
        if any(is_template_text(v) for v in (timestamp, status, detail)):
            continue
        results.append(TrackingEvent(timestamp=timestamp, status=status, detail=detail))
    return results
