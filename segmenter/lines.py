"""
segmenter/lines.py
------------------
Line splitting stage of the segmentation pipeline.

Breaks raw text into its non-blank lines. Lines are returned exactly as they
appear in the input (internal and edge whitespace included), because a line
that already fits the budget is emitted untouched.
"""

import re
from typing import List, Optional

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: Optional[str]) -> List[str]:
    """
    Splits text on LF / CRLF breaks and drops whitespace-only lines.

    Consecutive breaks are not collapsed; the empty segments they produce are
    simply filtered out together with any other blank line.

    Args:
        text: Raw input text. None is treated as empty.

    Returns:
        The non-blank lines, in original order, untrimmed.
    """
    if not text:
        return []
    return [line for line in _LINE_BREAK.split(text) if line.strip()]
