"""
segmenter/labels.py
-------------------
Positional labeling of the final chunk sequence.

Labels are rendered from small mustache-style templates where `{{current}}`
is the 1-based position of a chunk and `{{total}}` the size of the sequence
it belongs to. Labeling always runs over the WHOLE chunk sequence, after
every line has been expanded, so its numbering is independent from the
per-line numbering used while deciding which lines to split.
"""

import re
from typing import Callable, List, Mapping, Optional, Sequence

from segmenter.logging_config import get_logger
from segmenter.measure import MeasureFn

log = get_logger(__name__)

LabelFn = Callable[[str, int, Sequence[str]], str]

# ── Constants ──────────────────────────────────────────────────────────────────
LABEL_TEMPLATE  = "{{current}}/{{total}} "
SUFFIX_TEMPLATE = " (...)"
# ──────────────────────────────────────────────────────────────────────────────

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def render_template(template: str, values: Mapping[str, object]) -> str:
    """
    Substitutes `{{name}}` placeholders in template.

    Unknown names render as the empty string.
    """
    def _lookup(match: "re.Match[str]") -> str:
        value = values.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_lookup, template)


def position(index: int, total: int) -> Mapping[str, int]:
    """Template values for the item at 0-based `index` out of `total`."""
    return {"current": index + 1, "total": total}


def template_label(template: str) -> LabelFn:
    """Builds a label function rendering `template` for each position."""
    def _label(chunk: str, index: int, chunks: Sequence[str]) -> str:
        return render_template(template, position(index, len(chunks)))

    return _label


def enumerate_prefix(chunk: str, index: int, chunks: Sequence[str]) -> str:
    """Default prefix: "<current>/<total> "."""
    return f"{index + 1}/{len(chunks)} "


def label_all(
    chunks: Sequence[str],
    prefix_fn: LabelFn = enumerate_prefix,
    suffix_fn: Optional[LabelFn] = None,
) -> List[str]:
    """
    Attaches a positional prefix (and optionally a suffix) to every chunk.

    Args:
        chunks:    Unlabeled chunks, in output order.
        prefix_fn: Called as prefix_fn(chunk, index, chunks).
        suffix_fn: Same signature; None applies no suffix.

    Returns:
        The labeled chunks, same length and order as `chunks`.
    """
    labeled: List[str] = []
    for index, chunk in enumerate(chunks):
        prefix = prefix_fn(chunk, index, chunks)
        suffix = suffix_fn(chunk, index, chunks) if suffix_fn else ""
        labeled.append(f"{prefix}{chunk}{suffix}")
    return labeled


def find_overflow(
    labeled: Sequence[str],
    budget: int,
    measure: MeasureFn,
) -> List[int]:
    """
    Re-measures labeled chunks and returns the indices exceeding the budget.

    A chunk can overflow when it holds a single word longer than the budget,
    or when its final label is wider than the label reserved while splitting.
    """
    overflow = []
    for index, chunk in enumerate(labeled):
        length = measure(chunk)
        if length > budget:
            log.warning(
                "Chunk %d/%d exceeds budget (%d > %d)",
                index + 1, len(labeled), length, budget,
            )
            overflow.append(index)
    return overflow
