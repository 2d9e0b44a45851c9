"""Detection of unrendered template source in the activity widget.

The portal sometimes ships the activity markup without running its
interpolation step (typically for guides with no activity yet), which leaves
literal template expressions where the data should be. The token list below
is a maintained allow-list, not a grammar: when the carrier changes its
template variable names, update TEMPLATE_TOKENS.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional


TEMPLATE_TOKENS = (
    # dotted accessors
    r"\bDato\.",
    r"\bvalor\.",
    # indexed array access
    r"\bdat\[\d+\]",
    # field names used as template variables
    r"\bNgui\b",
    r"\bNumeroGuia\b",
    r"\bComentarios\b",
    r"\bdescripcion\b",
    r"\bfecha\b",
    r"\bhora\b",
)

# Un-evaluated string concatenation.
CONCAT_MARKER = "+"

TemplatePredicate = Callable[[Optional[str]], bool]


def build_template_detector(tokens: Iterable[str] = TEMPLATE_TOKENS, *, concat_marker: Optional[str] = CONCAT_MARKER) -> TemplatePredicate:
    """Build a predicate flagging text that matches any token (case-insensitive) or contains the concat marker."""
    tokens = list(tokens)
    token_re = re.compile("(?:" + "|".join(tokens) + ")", re.I) if tokens else None

    def detector(value: Optional[str]) -> bool:
        if not value:
            return False
        if token_re is not None and token_re.search(value):
            return True
        return bool(concat_marker) and concat_marker in value

    return detector


looks_like_template_text: TemplatePredicate = build_template_detector()
