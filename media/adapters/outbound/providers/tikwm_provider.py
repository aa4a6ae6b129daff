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

TIKWM_ORIGIN = "https://www.tikwm.com"
TIKWM_API = f"{TIKWM_ORIGIN}/api/"


def parse_tikwm_payload(payload: Optional[dict], origin: str) -> Optional[MediaResult]:
    """
    Shared by every API speaking the tikwm shape:
    {"code": 0, "data": {"play", "hdplay", "music", "cover", "images", "title", "duration"}}
    Media paths may be relative to `origin`.
    """
    data = dig(payload, "data")
    if not isinstance(data, dict):
        return None
    return MediaResult.build(
        video_url=qualify_url(origin, data.get("play")) or qualify_url(origin, data.get("hdplay")),
        audio_url=qualify_url(origin, data.get("music")) or qualify_url(origin, dig(data, "music_info", "play")),
        thumbnail_url=qualify_url(origin, data.get("cover")) or qualify_url(origin, data.get("origin_cover")),
        images=qualify_all(origin, data.get("images")),
        title=as_text(data.get("title")),
        duration=as_int(data.get("duration")),
    )


class TikwmProvider(MediaProviderPort):
    name = "tikwm"

    def __init__(self, timeout: float = 15.0):
        self.timeout = timeout

    def build_request(self, source_url: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=TIKWM_API,
            data={"url": source_url, "hd": "1"},
            headers=browser_headers(**{"Content-Type": FORM_CONTENT_TYPE}),
        )

    def parse_response(self, body: str) -> Optional[MediaResult]:
        return parse_tikwm_payload(load_json(body), TIKWM_ORIGIN)
