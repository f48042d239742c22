# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Final clean-up of compiled template text."""

from __future__ import annotations

import re
from typing import Final

# ``//@`` joins the following line onto the current one; ``//@$`` is the inline form.
LINE_CONTINUATION_RE: Final[re.Pattern[str]] = re.compile(r"//@(?:\r\n|[$\r\n]|\Z)")
FORMATTER_PRAGMA_RE: Final[re.Pattern[str]] = re.compile(r"\{\{--\s*@formatter:\S+\s*--\}\}\n?", re.IGNORECASE)
# Comments opening with ``<!--[`` are kept, e.g. conditional comments.
MARKUP_COMMENT_RE: Final[re.Pattern[str]] = re.compile(r"<!--(?!\[)[\s\S]*?-->\n?")


def strip_build_markers(text: str) -> str:
    """Remove build-only markers and comments from compiled template text.

    Args:
        text: Template body after block substitution and loader includes.

    Returns:
        str: Text without line-continuation markers, formatter pragmas, and
        markup comments other than ``<!--[`` escapes.
    """

    text = LINE_CONTINUATION_RE.sub("", text)
    text = FORMATTER_PRAGMA_RE.sub("", text)
    return MARKUP_COMMENT_RE.sub("", text)


__all__ = [
    "FORMATTER_PRAGMA_RE",
    "LINE_CONTINUATION_RE",
    "MARKUP_COMMENT_RE",
    "strip_build_markers",
]
