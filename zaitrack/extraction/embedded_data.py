"""Fallback extraction of the JSON payload embedded in the page's scripts.

When the activity widget is empty the portal still ships its API response
inside an inline script, serialized twice:

    AjaxBasicRequestPOSTSE(...);
    var data = JSON.parse("[{\\"fecha\\":\\"...\\"}]");

Decoding is kept in two explicit stages (string literal, then JSON) so a
failure in either is reported separately.
"""

from __future__ import annotations

import json
import re
from typing import Any, List, Optional

from zaitrack.extraction.text_clean import strip_js_comments
from zaitrack.tracking.errors import ParseError


SCRIPT_FUNCTION_MARKER = "AjaxBasicRequestPOSTSE"
SCRIPT_PARSE_MARKER = "JSON.parse"

_SCRIPT_RE = re.compile(r"<script[^>]*>(.*?)</script>", re.I | re.S)
_PARSE_CALL_RE = re.compile(r"JSON\.parse\(\"(.*?)\"\)", re.S)


def find_payload_script(html: str) -> Optional[str]:
    for body in _SCRIPT_RE.findall(html or ""):
        if SCRIPT_FUNCTION_MARKER in body and SCRIPT_PARSE_MARKER in body:
            return body
    return None


def find_payload_literal(script: str) -> Optional[str]:
    match = _PARSE_CALL_RE.search(strip_js_comments(script))
    return match.group(1) if match else None


def decode_string_literal(raw: str) -> str:
    """Resolve the backslash escapes of a double-quoted literal body."""
    try:
        return json.loads(f'"{raw}"')
    except ValueError as e:
        raise ParseError("payload literal is not a valid string") from e


def parse_payload(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise ParseError("payload is not valid JSON") from e


def extract_tracking_json(html: str) -> List[Any]:
    """Return the embedded event array as-is (element shape is the carrier's)."""
    script = find_payload_script(html)
    if script is None:
        raise ParseError("script not found")
    raw = find_payload_literal(script)
    if raw is None:
        raise ParseError("payload literal not found")
    data = parse_payload(decode_string_literal(raw))
    if not isinstance(data, list):
        raise ParseError("payload is not an event array")
    return data
