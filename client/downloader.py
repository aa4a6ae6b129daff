from __future__ import annotations

import logging
import os
import re
import time
import webbrowser
from typing import Callable, List, Optional

import requests
from pydantic import ValidationError

from media.domain.entities import ResolvedMedia

logger = logging.getLogger(__name__)

EXTENSIONS = {"video": "mp4", "audio": "mp3", "image": "jpg"}
MEDIA_CONTENT_PREFIXES = ("video/", "audio/", "image/", "application/octet-stream", "binary/octet-stream")
CHUNK_SIZE = 64 * 1024


class ResolveFailed(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class UnusableFile(Exception):
    pass


def safe_filename(title: Optional[str], media_type: str = "video") -> str:
    stem = re.sub(r"[^a-zA-Z0-9]", "_", title or "tiktok") or "tiktok"
    return f"{stem[:100]}.{EXTENSIONS.get(media_type, 'bin')}"


def _is_media_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        # CDNs sometimes omit it; the body check still applies
        return True
    return content_type.lower().startswith(MEDIA_CONTENT_PREFIXES)


class ResolverClient:
    """Talks to the resolver API (`POST /api/download`)."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def resolve(self, url: str, media_type: str = "video") -> ResolvedMedia:
        try:
            response = self.session.post(
                f"{self.base_url}/api/download",
                json={"url": url, "mediaType": media_type},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ResolveFailed(0, f"Could not reach the resolver: {e}")

        try:
            body = response.json()
        except ValueError:
            raise ResolveFailed(response.status_code, "Unexpected response from the resolver")

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise ResolveFailed(response.status_code, error or "Resolver returned an error")
        try:
            return ResolvedMedia.model_validate(body.get("data"))
        except ValidationError:
            raise ResolveFailed(response.status_code, "Unexpected response from the resolver")


class MediaDownloader:
    """
    Fetch-and-save for resolved links. One bounded GET per file; when the
    fetch fails (timeout, HTTP error, empty body, non-media content) the URL
    is handed to the browser instead.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        opener: Callable[[str], object] = webbrowser.open,
        timeout: float = 45.0,
        delay: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session or requests.Session()
        self.opener = opener
        self.timeout = timeout
        self.delay = delay
        self.sleep = sleep

    def save(self, url: str, dest: str) -> Optional[str]:
        """Returns the written path, or None when the browser fallback was used."""
        try:
            self._fetch_to(url, dest)
        except (requests.RequestException, UnusableFile, OSError) as e:
            logger.warning("Download failed for %s (%s); opening in browser", url, e)
            self.opener(url)
            return None
        return dest

    def _fetch_to(self, url: str, dest: str) -> None:
        response = self.session.get(url, stream=True, timeout=self.timeout)
        try:
            response.raise_for_status()
            content_type = response.headers.get("Content-Type")
            if not _is_media_content_type(content_type):
                raise UnusableFile(f"not a media file ({content_type})")

            directory = os.path.dirname(dest)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp = f"{dest}.part"
            try:
                written = 0
                with open(tmp, "wb") as fh:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            fh.write(chunk)
                            written += len(chunk)
                if written == 0:
                    raise UnusableFile("empty file")
                os.replace(tmp, dest)
            finally:
                # gone already after a successful replace
                if os.path.exists(tmp):
                    os.remove(tmp)
        finally:
            response.close()

    def save_media(self, media: ResolvedMedia, directory: str) -> List[str]:
        if media.type == "image":
            return self.save_all_images(media.images or [], media.title, directory)
        if not media.url:
            return []
        path = self.save(media.url, os.path.join(directory, safe_filename(media.title, media.type)))
        return [path] if path else []

    def save_all_images(self, images: List[str], title: Optional[str], directory: str) -> List[str]:
        """One image at a time, `delay` seconds apart."""
        stem = re.sub(r"[^a-zA-Z0-9]", "_", title or "tiktok")
        saved: List[str] = []
        for i, image_url in enumerate(images):
            dest = os.path.join(directory, f"{stem}_image_{i + 1}.jpg")
            path = self.save(image_url, dest)
            if path:
                saved.append(path)
            if i < len(images) - 1:
                self.sleep(self.delay)
        return saved
