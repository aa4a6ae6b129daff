import time

import requests

from app.core.config import settings

DEFAULT_ACCEPT = "application/json, text/plain, */*"

# Buffered reads block until the whole chunk has arrived; single-byte reads
# return as soon as anything is on the socket, so the deadline is checked often.
DEADLINE_READ_CHUNK = 1


def build_session(
    user_agent: str = settings.user_agent,
    max_redirects: int = settings.normalizer_max_redirects,
) -> requests.Session:
    """requests session that presents itself as a desktop browser."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": DEFAULT_ACCEPT,
        "Accept-Language": "en-US,en;q=0.9",
    })
    session.max_redirects = max_redirects
    return session


def read_text_before(response: requests.Response, deadline: float) -> str:
    """
    Read a streamed response body, giving up at `deadline` (a `time.monotonic()` value).

    `timeout=` in requests bounds each socket operation, not the whole body, so a
    server that trickles bytes would otherwise hold the call open indefinitely.
    Raises `requests.Timeout` when the deadline passes.
    """
    body = bytearray()
    if time.monotonic() > deadline:
        raise requests.Timeout("no response before the deadline")
    for chunk in response.iter_content(chunk_size=DEADLINE_READ_CHUNK):
        body += chunk
        if time.monotonic() > deadline:
            raise requests.Timeout("response body not received before the deadline")

    raw = bytes(body)
    try:
        return raw.decode(response.encoding or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")
