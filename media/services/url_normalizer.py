import logging
import re
import time
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests

logger = logging.getLogger(__name__)

_CANONICAL_RE = re.compile(r"tiktok\.com/@[^/?#]+/(?:video|photo)/\d+", re.IGNORECASE)
_SHORT_RE = re.compile(
    r"^(?:https?://)?(?:(?:vt|vm)\.tiktok\.com/[^/?#]+|(?:www\.|m\.)?tiktok\.com/t/[^/?#]+)",
    re.IGNORECASE,
)


def is_canonical(url: str) -> bool:
    return bool(_CANONICAL_RE.search(url or ""))


def is_short_link(url: str) -> bool:
    return bool(_SHORT_RE.match(url or ""))


def _strip_query(url: str) -> str:
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class UrlNormalizer:
    """
    Expands TikTok short links (vt./vm.tiktok.com, tiktok.com/t/...) into the
    canonical `tiktok.com/@user/video/<id>` form. Never raises: on any failure
    the input comes back unchanged.
    """

    def __init__(self, session: requests.Session, timeout: float = 10.0):
        self.session = session
        self.timeout = timeout

    def normalize(self, url: str) -> str:
        if is_canonical(url) or not is_short_link(url):
            return url

        target = url if url.lower().startswith(("http://", "https://")) else f"https://{url}"
        try:
            final_url = self._follow_redirects(target)
        except requests.RequestException as e:
            logger.warning("Short link expansion failed for %s: %s", url, e)
            return url

        if final_url and is_canonical(final_url):
            canonical = _strip_query(final_url)
            logger.info("Expanded %s -> %s", url, canonical)
            return canonical

        logger.info("Short link %s resolved to non-canonical %s; keeping original", url, final_url)
        return url

    def _follow_redirects(self, url: str) -> str:
        """
        Walk the redirect chain hop by hop, reading headers only. The whole walk
        shares one deadline of `timeout` seconds and at most `max_redirects` hops.
        """
        deadline = time.monotonic() + self.timeout
        for _ in range(self.session.max_redirects + 1):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise requests.Timeout(f"short link not resolved within {self.timeout}s")
            response = self.session.get(url, allow_redirects=False, timeout=remaining, stream=True)
            try:
                location = response.headers.get("Location") if response.is_redirect else None
                current = response.url or url
            finally:
                response.close()
            if not location:
                return current
            url = urljoin(current, location)
        raise requests.TooManyRedirects(f"more than {self.session.max_redirects} redirects")
