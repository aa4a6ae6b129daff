from typing import Optional

from media.adapters.outbound.providers.common import (
    FORM_CONTENT_TYPE,
    as_int,
    as_text,
    browser_headers,
    dig,
    load_json,
    qualify_all,
    qualify_url,
)
from media.domain.entities import MediaResult, ProviderRequest
from media.ports.outbound.media_provider_port import MediaProviderPort

TIKDOWN_ORIGIN = "https://www.tikdown.org"
TIKDOWN_AJAX = f"{TIKDOWN_ORIGIN}/api/ajaxSearch"

TIKDOWN_API_ORIGIN = "https://api.tikdown.org"
TIKDOWN_API = f"{TIKDOWN_API_ORIGIN}/download"


class TikdownProvider(MediaProviderPort):
    """tikdown.org ajax search (the endpoint its own web page calls)."""

    name = "tikdown"

    def __init__(self, timeout: float = 15.0, lang: str = "en"):
        self.timeout = timeout
        self.lang = lang

    def build_request(self, source_url: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=TIKDOWN_AJAX,
            data={"q": source_url, "lang": self.lang},
            headers=browser_headers(**{
                "Content-Type": f"{FORM_CONTENT_TYPE}; charset=UTF-8",
                "X-Requested-With": "XMLHttpRequest",
            }),
        )

    def parse_response(self, body: str) -> Optional[MediaResult]:
        data = dig(load_json(body), "data")
        if not isinstance(data, dict):
            return None
        return MediaResult.build(
            video_url=qualify_url(TIKDOWN_ORIGIN, dig(data, "videos", 0)),
            thumbnail_url=qualify_url(TIKDOWN_ORIGIN, dig(data, "covers", 0)),
            images=qualify_all(TIKDOWN_ORIGIN, data.get("images")),
            title=as_text(data.get("title")),
            duration=as_int(data.get("duration")),
        )


class TikdownApiProvider(MediaProviderPort):
    """api.tikdown.org plain GET endpoint."""

    name = "tikdown-api"

    def __init__(self, timeout: float = 15.0):
        self.timeout = timeout

    def build_request(self, source_url: str) -> ProviderRequest:
        return ProviderRequest(
            method="GET",
            url=TIKDOWN_API,
            params={"url": source_url},
            headers=browser_headers(),
        )

    def parse_response(self, body: str) -> Optional[MediaResult]:
        video = dig(load_json(body), "video")
        if not isinstance(video, dict):
            return None
        return MediaResult.build(
            video_url=qualify_url(TIKDOWN_API_ORIGIN, video.get("no_watermark")),
            audio_url=qualify_url(TIKDOWN_API_ORIGIN, video.get("music")),
            thumbnail_url=qualify_url(TIKDOWN_API_ORIGIN, video.get("cover")),
            title=as_text(video.get("title")),
            duration=as_int(video.get("duration")),
        )
