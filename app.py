"""
app.py
------
Orchestration layer for the tweet segmenter.

Turns a block of text into a thread of numbered, budget-respecting chunks:

    text → split_lines() → expand_lines() → label_all() → find_overflow()
         → validate() → ThreadResponse

expand_lines() and label_all() are repeated with a wider label reservation
whenever the final "current/total" labels turn out wider than the per-line
prefix that was reserved.

Each stage is a pure function; this module only wires them together with the
configured budget, templates and length measurer. The command line entry
point additionally resolves the text from a file, a URL or a literal
parameter before running the pipeline.

Usage:
    python app.py create --resource notes.txt
    python app.py create -r "https://example.com/post.txt" --json
    python app.py create -r "Some literal text" --budget 280 --suffix " (...)"
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from segmenter.chunker  import expand_lines
from segmenter.labels   import (
    label_all, find_overflow, position, render_template, template_label,
)
from segmenter.lines    import split_lines
from segmenter.logging_config import LEVEL_ENV, configure_logging, get_logger
from segmenter.measure  import MEASURERS, MeasureFn, make_measurer
from segmenter.sources  import resolve_text
from validator.thread_validator import validate, ValidationError, ThreadResponse

log = get_logger(__name__)

# ── Configuration ───────────────────────────────────────────────────────────────

BUDGET          = 140
PREFIX_TEMPLATE = "{{current}}/{{total}}-) "
SUFFIX_TEMPLATE = " (...)"
LABEL_TEMPLATE  = "{{current}}/{{total}} "
MEASURER        = "weighted"
URL_LENGTH      = 23
FETCH_TIMEOUT   = 10


def resolve_measurer(name: str = MEASURER, url_length: int = URL_LENGTH) -> MeasureFn:
    """
    Looks up a length measurer by name.

    Raises:
        ValueError: If name is not a known measurer.
    """
    if name not in MEASURERS:
        raise ValueError(
            f"Unknown measurer '{name}'. Choose one of: {', '.join(sorted(MEASURERS))}."
        )
    if name == "weighted":
        return make_measurer(url_length)
    return MEASURERS[name]


def widest_label(
    count: int,
    label_template: str,
    suffix_template: Optional[str],
    measure: MeasureFn,
) -> int:
    """Measured width of the label (prefix and suffix) on the last of `count` chunks."""
    if count == 0:
        return 0
    stats = position(count - 1, count)
    width = measure(render_template(label_template, stats))
    if suffix_template:
        width += measure(render_template(suffix_template, stats))
    return width


def _split_overflow(chunks, labeled, budget, measure) -> bool:
    """True when a chunk of more than one word went over budget once labeled."""
    return any(
        len(chunk.split()) > 1 and measure(text) > budget
        for chunk, text in zip(chunks, labeled)
    )


# ── Pipeline ────────────────────────────────────────────────────────────────────

def split_pipeline(
    text: Optional[str],
    budget: int            = BUDGET,
    prefix_template: str   = PREFIX_TEMPLATE,
    suffix_template: str   = SUFFIX_TEMPLATE,
    label_template: str    = LABEL_TEMPLATE,
    use_suffix: bool       = False,
    measure: Optional[MeasureFn] = None,
) -> ThreadResponse:
    """
    Segments text into a labeled thread and validates the result.

    Args:
        text:            Resolved input text.
        budget:          Maximum measured length of a labeled chunk.
        prefix_template: Label template reserved while deciding how to split
                         each line (numbered per line).
        suffix_template: Suffix template, used only when use_suffix is set.
        label_template:  Label template applied to the final sequence
                         (numbered over all chunks).
        use_suffix:      Reserve and append the suffix label.
        measure:         Length measurer; platform weighting by default.

    Returns:
        A validated ThreadResponse.

    Raises:
        ValueError:      If budget is not positive.
        ValidationError: If the output fails schema validation.
    """
    measure = measure or resolve_measurer()
    suffix  = suffix_template if use_suffix else None

    lines = split_lines(text)
    log.info("Segmenting %d line(s) with budget %d", len(lines), budget)

    # final labels number over all chunks and may outgrow the per-line
    # prefix; widen the reservation until the chunk count settles
    label_width = 0
    while True:
        chunks = expand_lines(
            lines,
            prefix_template = prefix_template,
            suffix_template = suffix,
            budget          = budget,
            measure         = measure,
            label_width     = label_width,
        )
        labeled = label_all(
            chunks,
            prefix_fn = template_label(label_template),
            suffix_fn = template_label(suffix) if suffix else None,
        )
        widest = widest_label(len(chunks), label_template, suffix, measure)
        if widest <= label_width or not _split_overflow(chunks, labeled, budget, measure):
            break
        log.debug(
            "Labels for %d chunk(s) need %d units, expanding again", len(chunks), widest,
        )
        label_width = widest

    overflow = find_overflow(labeled, budget, measure)

    log.info(
        "Segmentation complete - %d chunk(s) from %d line(s), %d over budget",
        len(labeled), len(lines), len(overflow),
    )
    return validate({
        "chunks":   labeled,
        "count":    len(labeled),
        "budget":   budget,
        "overflow": overflow,
    })


# ── Command line ────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tweet-segmenter",
        description="Split text into a numbered thread of short messages.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Create a thread from a resource")
    create.add_argument(
        "-r", "--resource",
        help="File path, http(s) URL or literal text (prompted when omitted)",
    )
    create.add_argument(
        "--prefix",
        default=PREFIX_TEMPLATE,
        help=f"Label template reserved while splitting (default: {PREFIX_TEMPLATE!r})",
    )
    create.add_argument(
        "--suffix",
        default=None,
        help="Append this suffix template to every chunk",
    )
    create.add_argument(
        "-b", "--budget",
        type=int,
        default=BUDGET,
        help=f"Maximum measured length per chunk (default: {BUDGET})",
    )
    create.add_argument(
        "--measure",
        choices=sorted(MEASURERS),
        default=MEASURER,
        help=f"Length measurer (default: {MEASURER})",
    )
    create.add_argument(
        "--json",
        action="store_true",
        help="Print the full response as JSON",
    )
    create.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        logging.DEBUG if args.verbose else os.environ.get(LEVEL_ENV) or logging.WARNING
    )

    if args.budget <= 0:
        print("[ERROR] --budget must be a positive integer.", file=sys.stderr)
        return 2

    resource = args.resource
    if resource is None:
        try:
            resource = input("Resource (file, URL or text): ")
        except EOFError:
            resource = ""

    text = resolve_text(resource, timeout=FETCH_TIMEOUT)
    if not text.strip():
        print("[ERROR] Nothing to segment: the resource resolved to no text.", file=sys.stderr)
        return 1

    try:
        response = split_pipeline(
            text,
            budget          = args.budget,
            prefix_template = args.prefix,
            suffix_template = SUFFIX_TEMPLATE if args.suffix is None else args.suffix,
            use_suffix      = args.suffix is not None,
            measure         = resolve_measurer(args.measure),
        )
    except ValidationError as exc:
        print(f"[VALIDATION ERROR] {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(response, indent=2, ensure_ascii=False))
    else:
        for chunk in response["chunks"]:
            print(chunk)
    return 0


# ── Entry point ─────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    sys.exit(main())
