"""
segmenter/measure.py
--------------------
Length measurement for short-message budgets.

`weighted_length()` delegates to `twitter_text.parse_tweet`, the Python port
of the platform's own counting library: text is NFC-normalised, emoji
sequences (ZWJ families, skin tones, flags) count as one wide character,
code points outside the light ranges weigh two units, and every URL the
platform would link, with or without a scheme, weighs a fixed number of
units no matter how long it is.

`code_point_length()` is the plain alternative for callers that do not want
platform weighting. It counts code points only, so URLs and wide characters
are measured literally and lines get split at different places.
"""

import functools
from typing import Any, Callable, Dict

from twitter_text import parse_tweet

MeasureFn = Callable[[str], int]


# ── Constants ──────────────────────────────────────────────────────────────────
URL_LENGTH = 23
# version 3 counting configuration, used when the URL weight is overridden
TWEET_CONFIG: Dict[str, Any] = {
    "version":                3,
    "max_weighted_tweet_length": 280,
    "scale":                  100,
    "default_weight":         200,
    "emoji_parsing_enabled":  True,
    "transformed_url_length": URL_LENGTH,
    "ranges": [
        {"start": 0x0000, "end": 0x10FF, "weight": 100},
        {"start": 0x2000, "end": 0x200D, "weight": 100},
        {"start": 0x2010, "end": 0x201F, "weight": 100},
        {"start": 0x2032, "end": 0x2037, "weight": 100},
    ],
}
# ──────────────────────────────────────────────────────────────────────────────


def weighted_length(text: str) -> int:
    """Measures text exactly as the platform counts a tweet."""
    if not text:
        return 0
    return parse_tweet(text).weightedLength


def _weighted_length_with(text: str, options: Dict[str, Any]) -> int:
    if not text:
        return 0
    return parse_tweet(text, options).weightedLength


def code_point_length(text: str) -> int:
    """Counts code points, with no platform weighting."""
    return len(text or "")


def make_measurer(url_length: int = URL_LENGTH) -> MeasureFn:
    """
    Returns a weighted measurer charging `url_length` units per URL.

    Raises:
        ValueError: If url_length is negative.
    """
    if url_length < 0:
        raise ValueError("url_length must be >= 0.")
    if url_length == URL_LENGTH:
        return weighted_length
    options = dict(TWEET_CONFIG, transformed_url_length=url_length)
    return functools.partial(_weighted_length_with, options=options)


MEASURERS: Dict[str, MeasureFn] = {
    "weighted": weighted_length,
    "plain":    code_point_length,
}
