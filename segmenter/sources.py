"""
segmenter/sources.py
--------------------
Resolution of the text to segment from a single `resource` string.

A resource may be a path to a file, an http(s) URL, or the text itself. The
three interpretations are attempted concurrently and all of them are allowed
to settle; the first one that produced non-blank text wins, in the order
file > remote > param. Because the param origin always succeeds, a resource
that is neither a readable file nor a reachable URL is segmented literally.

The core pipeline never sees this race: it receives the resolved string.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Optional
from urllib.parse import urlparse

from segmenter._http import http_get
from segmenter.logging_config import get_logger

log = get_logger(__name__)

# ── Constants ──────────────────────────────────────────────────────────────────
ENCODING      = "utf-8"
FETCH_TIMEOUT = 10
# ──────────────────────────────────────────────────────────────────────────────


def read_file(resource: str, timeout: float = FETCH_TIMEOUT) -> str:
    """Reads resource as a UTF-8 text file."""
    return Path(resource).expanduser().read_text(encoding=ENCODING)


def read_remote(resource: str, timeout: float = FETCH_TIMEOUT) -> str:
    """
    Downloads resource when it is an http(s) URL.

    Raises:
        ValueError:      If resource is not an http(s) URL.
        ConnectionError: If the download fails (propagated from _http).
    """
    parsed = urlparse(resource.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"not an http(s) URL: {resource[:60]!r}")
    return http_get(resource.strip(), timeout=timeout)


def read_param(resource: str, timeout: float = FETCH_TIMEOUT) -> str:
    """The resource is the text."""
    return resource


ORIGINS: Dict[str, Callable[[str, float], str]] = {
    "file":   read_file,
    "remote": read_remote,
    "param":  read_param,
}


def resolve_text(
    resource: Optional[str],
    timeout: float = FETCH_TIMEOUT,
    origins: Optional[Dict[str, Callable[[str, float], str]]] = None,
) -> str:
    """
    Races every origin on resource and returns the preferred non-blank text.

    Args:
        resource: File path, URL or literal text.
        timeout:  Timeout handed to every origin (used by the remote one).
        origins:  Ordered name -> reader mapping, defaults to ORIGINS.

    Returns:
        The text of the first origin, in mapping order, that succeeded with
        non-blank content; "" when none did.
    """
    if not resource:
        return ""

    origins = ORIGINS if origins is None else origins

    with ThreadPoolExecutor(max_workers=len(origins)) as executor:
        futures = {
            name: executor.submit(reader, resource, timeout)
            for name, reader in origins.items()
        }

    # leaving the executor waits for every origin to settle
    for name, future in futures.items():
        error = future.exception()
        if error is not None:
            log.debug("Origin '%s' did not resolve: %s", name, error)
            continue
        text = future.result()
        if text and text.strip():
            log.info("Resolved text from origin '%s' (%d chars)", name, len(text))
            return text
        log.debug("Origin '%s' resolved to blank text", name)

    return ""
