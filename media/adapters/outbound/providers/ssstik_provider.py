from typing import Optional

from bs4 import BeautifulSoup

from media.adapters.outbound.providers.common import (
    FORM_CONTENT_TYPE,
    browser_headers,
    qualify_url,
)
from media.domain.entities import MediaResult, ProviderRequest
from media.ports.outbound.media_provider_port import MediaProviderPort

SSSTIK_ORIGIN = "https://ssstik.io"
SSSTIK_ACTION = f"{SSSTIK_ORIGIN}/abc?url=dl"

_NO_WATERMARK_MARKER = "without watermark"


def _is_audio_link(href: str, text: str) -> bool:
    haystack = f"{href} {text}".lower()
    return "mp3" in haystack or "music" in haystack


class SsstikProvider(MediaProviderPort):
    """ssstik.io answers with an HTML fragment instead of JSON."""

    name = "ssstik"

    def __init__(self, timeout: float = 15.0, locale: str = "en", token: str = "aGV5"):
        self.timeout = timeout
        self.locale = locale
        self.token = token

    def build_request(self, source_url: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=SSSTIK_ACTION,
            data={"id": source_url, "locale": self.locale, "tt": self.token},
            headers=browser_headers(**{"Content-Type": FORM_CONTENT_TYPE}),
        )

    def parse_response(self, body: str) -> Optional[MediaResult]:
        if not isinstance(body, str) or _NO_WATERMARK_MARKER not in body.lower():
            return None

        soup = BeautifulSoup(body, "html.parser")
        video_url = audio_url = None
        for a in soup.find_all("a", href=True):
            href = a.get("href") or ""
            if "download" not in href.lower():
                continue
            text = a.get_text(" ", strip=True)
            if _is_audio_link(href, text):
                audio_url = audio_url or qualify_url(SSSTIK_ORIGIN, href)
            else:
                video_url = video_url or qualify_url(SSSTIK_ORIGIN, href)

        thumbnail = None
        img = soup.find("img", src=True)
        if img is not None:
            thumbnail = qualify_url(SSSTIK_ORIGIN, img.get("src"))

        if not video_url and not audio_url:
            return None
        title_tag = soup.find("p", class_="maintext")
        title = title_tag.get_text(strip=True) if title_tag else None
        return MediaResult.build(
            video_url=video_url,
            audio_url=audio_url,
            thumbnail_url=thumbnail,
            title=title or None,
        )
