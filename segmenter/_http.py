"""
segmenter/_http.py
------------------
HTTP transport used to fetch text from a remote origin.

`http_get()` is the single place that deals with timeouts, charset decoding
and error translation, so the origin resolver never touches urllib itself.
"""

import urllib.error
import urllib.request

_USER_AGENT    = "tweet-segmenter/1.0"
MAX_BODY_BYTES = 1_000_000


def http_get(url: str, timeout: float = 10) -> str:
    """
    Fetches url and returns its body decoded as text.

    Args:
        url:     Absolute http(s) URL.
        timeout: Socket timeout in seconds.

    Returns:
        The response body, decoded with the charset the server announced
        (UTF-8 when none).

    Raises:
        ConnectionError: If the host is unreachable or answers with an
                         HTTP error status.
        RuntimeError:    If the body is larger than MAX_BODY_BYTES or cannot
                         be decoded.
    """
    request = urllib.request.Request(
        url,
        headers={"User-Agent": _USER_AGENT},
        method="GET",
    )

    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            charset = response.headers.get_content_charset() or "utf-8"
            payload = response.read(MAX_BODY_BYTES + 1)

    except urllib.error.HTTPError as exc:
        raise ConnectionError(f"GET {url} failed with HTTP {exc.code}.") from exc

    except urllib.error.URLError as exc:
        raise ConnectionError(
            f"{url} is not reachable.\n"
            f"  Original error: {exc.reason}"
        ) from exc

    if len(payload) > MAX_BODY_BYTES:
        raise RuntimeError(
            f"Response from {url} exceeds the {MAX_BODY_BYTES} byte limit."
        )

    try:
        return payload.decode(charset)
    except (LookupError, UnicodeDecodeError) as exc:
        raise RuntimeError(f"Could not decode response from {url}: {exc}") from exc
