"""
segmenter/chunker.py
--------------------
Budget-aware segmentation of lines into chunks.

A line that fits the budget together with its positional label is kept as a
single chunk, untouched. A line that does not is broken on whitespace and its
words are greedily repacked, left to right, into as few chunks as possible.

Words are atomic: a word longer than the budget is never cut and ends up as
a chunk of its own, which is then the only kind of chunk allowed to exceed
the budget.
"""

from typing import List, Optional, Sequence

from segmenter.labels import render_template, position
from segmenter.logging_config import get_logger
from segmenter.measure import MeasureFn, weighted_length

log = get_logger(__name__)

# ── Constants ──────────────────────────────────────────────────────────────────
BUDGET          = 140
PREFIX_TEMPLATE = "{{current}}/{{total}}-) "
# ──────────────────────────────────────────────────────────────────────────────


def pack_words(
    words: Sequence[str],
    budget: int = BUDGET,
    measure: MeasureFn = weighted_length,
) -> List[str]:
    """
    Greedily packs words into space-joined chunks of at most `budget` units.

    Each candidate is measured as the actual joined string. A word that does
    not fit seals the current chunk and starts the next one, even when it
    alone is longer than the budget.

    Args:
        words:   Words in order; none of them empty.
        budget:  Maximum measured length of a chunk.
        measure: Length measurer.

    Returns:
        The chunks, preserving word order.

    Raises:
        ValueError: If budget is not a positive integer.
    """
    if budget <= 0:
        raise ValueError("budget must be a positive integer.")

    chunks: List[str] = []
    current: Optional[str] = None

    for word in words:
        candidate = word if current is None else f"{current} {word}"
        if measure(candidate) <= budget:
            current = candidate
            continue
        if current is not None:
            chunks.append(current)
        current = word

    if current is not None:
        chunks.append(current)

    return chunks


def expand_line(
    line: str,
    index: int,
    line_count: int,
    prefix_template: str = PREFIX_TEMPLATE,
    suffix_template: Optional[str] = None,
    budget: int = BUDGET,
    measure: MeasureFn = weighted_length,
    label_width: int = 0,
) -> List[str]:
    """
    Turns one line into one or more unlabeled chunks.

    The label width is reserved from the budget: the prefix rendered for this
    line's position plus the rendered suffix when a suffix template is given,
    or `label_width` when that is wider.
    Labels themselves are NOT attached here.

    Args:
        line:            A non-blank line.
        index:           0-based position of the line.
        line_count:      Number of lines in the text.
        prefix_template: Template rendered with {current, total}.
        suffix_template: Template for a suffix label, None when unused.
        budget:          Maximum measured length of a labeled chunk.
        measure:         Length measurer.
        label_width:     Minimum label width (prefix and suffix together) to
                         reserve, for when the final labels are wider than
                         the per-line ones.

    Returns:
        [line] when it fits, otherwise its words repacked into chunks.

    Raises:
        ValueError: If budget is not a positive integer.
    """
    if budget <= 0:
        raise ValueError("budget must be a positive integer.")

    stats    = position(index, line_count)
    reserved = measure(render_template(prefix_template, stats))
    if suffix_template:
        reserved += measure(render_template(suffix_template, stats))
    reserved = max(reserved, label_width)

    total = reserved + measure(line)
    if total <= budget:
        return [line]

    chunks = pack_words(line.split(), max(budget - reserved, 1), measure)
    log.debug(
        "Line %d/%d measures %d > %d, split into %d chunk(s)",
        stats["current"], line_count, total, budget, len(chunks),
    )
    return chunks


def expand_lines(
    lines: Sequence[str],
    prefix_template: str = PREFIX_TEMPLATE,
    suffix_template: Optional[str] = None,
    budget: int = BUDGET,
    measure: MeasureFn = weighted_length,
    label_width: int = 0,
) -> List[str]:
    """Expands every line and concatenates the resulting chunks in order."""
    chunks: List[str] = []
    for index, line in enumerate(lines):
        chunks.extend(
            expand_line(
                line, index, len(lines),
                prefix_template = prefix_template,
                suffix_template = suffix_template,
                budget          = budget,
                measure         = measure,
                label_width     = label_width,
            )
        )
    return chunks
