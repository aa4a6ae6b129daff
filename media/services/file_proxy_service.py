import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import requests

from media.domain.errors import FileFetchFailed, InvalidDownloadUrl, InvalidRequest
from media.services.result_filter import is_valid_download_url

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192
DEFAULT_FILENAME = "tiktok-video.mp4"
DEFAULT_CONTENT_TYPE = "video/mp4"

MEDIA_ACCEPT = "video/mp4,video/webm,video/*;q=0.9,audio/mp3,audio/*;q=0.8,image/*;q=0.8,*/*;q=0.5"
MEDIA_HEADERS = {
    "Accept": MEDIA_ACCEPT,
    "Referer": "https://www.tiktok.com/",
    "Origin": "https://www.tiktok.com",
    "Sec-Fetch-Dest": "video",
    "Sec-Fetch-Mode": "no-cors",
    "Sec-Fetch-Site": "cross-site",
}


def sanitize_filename(name: Optional[str], default: str = DEFAULT_FILENAME) -> str:
    """ASCII-only, header-safe file name."""
    if not name:
        return default
    name = name.replace("\\", "/").rsplit("/", 1)[-1]
    name = re.sub(r"[^A-Za-z0-9._ -]", "_", name).strip(" .")
    return name[:120] or default


@dataclass
class ProxiedFile:
    chunks: Iterator[bytes]
    content_type: str
    filename: str
    close: Callable[[], None]


class FileProxyService:
    """
    Streams a resolved media file through the server with a download disposition.
    Owns its session: it is closed once the stream is drained or abandoned.
    """

    def __init__(self, session: requests.Session, timeout: float = 45.0):
        self.session = session
        self.timeout = timeout

    def open(self, url: Optional[str], filename: Optional[str] = None) -> ProxiedFile:
        url = (url or "").strip()
        if not url:
            self.session.close()
            raise InvalidRequest("URL is required")
        if not is_valid_download_url(url):
            self.session.close()
            raise InvalidDownloadUrl()

        try:
            response = self.session.get(url, headers=MEDIA_HEADERS, stream=True, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("File fetch failed for %s: %s", url, e)
            self.session.close()
            raise FileFetchFailed(str(e) or e.__class__.__name__)

        def _close() -> None:
            response.close()
            self.session.close()

        def _chunks() -> Iterator[bytes]:
            try:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        yield chunk
            finally:
                _close()

        return ProxiedFile(
            chunks=_chunks(),
            content_type=response.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE,
            filename=sanitize_filename(filename),
            close=_close,
        )
