"""
validator/thread_validator.py
-----------------------------
Output schema enforcement for the segmentation pipeline.

Defines the canonical ThreadResponse TypedDict and validates pipeline output
against it before it is handed to a display or transmission collaborator.
Any violation raises a typed ValidationError.
"""

import json
from typing import Any, Dict, List

from typing_extensions import TypedDict

from segmenter.logging_config import get_logger

log = get_logger(__name__)


# ── Schema definition ──────────────────────────────────────────────────────────

class ThreadResponse(TypedDict):
    """Canonical output contract of the segmentation pipeline."""
    chunks:   List[str]   # labeled chunks, in posting order
    count:    int         # number of chunks
    budget:   int         # measured-length budget every chunk was cut for
    overflow: List[int]   # indices of chunks that still exceed the budget


# ── Custom exception ───────────────────────────────────────────────────────────

class ValidationError(ValueError):
    """Raised when a ThreadResponse fails schema validation."""


# ── Validators ─────────────────────────────────────────────────────────────────

def validate_json_string(raw: str) -> Dict[str, Any]:
    """
    Parses a JSON string and returns the decoded dict.

    Raises:
        ValidationError: If the string is not valid JSON or not an object.
    """
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise ValidationError(
            f"Expected a JSON object, got {type(decoded).__name__}."
        )
    return decoded


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(response: Dict[str, Any]) -> ThreadResponse:
    """
    Validates a dict against the ThreadResponse schema.

    Checks:
      - Required keys are present: chunks, count, budget, overflow
      - chunks is a list of non-blank strings (an empty list is valid)
      - count equals len(chunks); budget is a positive integer
      - overflow holds sorted, unique, in-range chunk indices

    Returns:
        The same dict cast as a typed ThreadResponse.

    Raises:
        ValidationError: If any field is missing, of the wrong type or
                         inconsistent with the others.
    """
    required_keys = {"chunks", "count", "budget", "overflow"}
    missing = required_keys - response.keys()
    if missing:
        log.error("Validation failed - missing keys: %s", sorted(missing))
        raise ValidationError(f"ThreadResponse missing required keys: {sorted(missing)}")

    chunks = response["chunks"]
    if not isinstance(chunks, list):
        log.error("Validation failed - 'chunks' is not a list")
        raise ValidationError("ThreadResponse 'chunks' must be a list.")

    for i, chunk in enumerate(chunks):
        if not isinstance(chunk, str) or not chunk.strip():
            log.error("Validation failed - chunks[%d] is empty or not a string", i)
            raise ValidationError(
                f"ThreadResponse chunks[{i}] must be a non-empty string."
            )

    if not _is_int(response["count"]) or response["count"] != len(chunks):
        log.error("Validation failed - count %r != %d", response["count"], len(chunks))
        raise ValidationError(
            f"ThreadResponse 'count' must equal the number of chunks ({len(chunks)})."
        )

    if not _is_int(response["budget"]) or response["budget"] <= 0:
        log.error("Validation failed - budget %r", response["budget"])
        raise ValidationError("ThreadResponse 'budget' must be a positive integer.")

    overflow = response["overflow"]
    if not isinstance(overflow, list) or not all(_is_int(i) for i in overflow):
        log.error("Validation failed - 'overflow' is not a list of integers")
        raise ValidationError("ThreadResponse 'overflow' must be a list of integers.")
    if overflow != sorted(set(overflow)) or any(not 0 <= i < len(chunks) for i in overflow):
        log.error("Validation failed - overflow indices %s", overflow)
        raise ValidationError(
            "ThreadResponse 'overflow' must hold sorted, unique chunk indices."
        )

    log.debug(
        "Validation succeeded - chunks=%d overflow=%d",
        len(chunks), len(overflow),
    )
    return ThreadResponse(**response)  # type: ignore[typeddict-item]
