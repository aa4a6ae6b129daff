from typing import Optional

from media.adapters.outbound.providers.common import (
    FORM_CONTENT_TYPE,
    as_int,
    as_text,
    browser_headers,
    load_json,
    qualify_url,
)
from media.domain.entities import MediaResult, ProviderRequest
from media.ports.outbound.media_provider_port import MediaProviderPort

SNAPTIK_ORIGIN = "https://snaptik.app"
SNAPTIK_ACTION = f"{SNAPTIK_ORIGIN}/action.php"


class SnaptikProvider(MediaProviderPort):
    name = "snaptik"

    def __init__(self, timeout: float = 15.0):
        self.timeout = timeout

    def build_request(self, source_url: str) -> ProviderRequest:
        return ProviderRequest(
            method="POST",
            url=SNAPTIK_ACTION,
            data={"url": source_url},
            headers=browser_headers(**{"Content-Type": FORM_CONTENT_TYPE}),
        )

    def parse_response(self, body: str) -> Optional[MediaResult]:
        # flat shape: {"url", "thumbnail", "title", "duration"}
        payload = load_json(body)
        if payload is None:
            return None
        video_url = qualify_url(SNAPTIK_ORIGIN, payload.get("url"))
        if not video_url:
            return None
        return MediaResult.build(
            video_url=video_url,
            thumbnail_url=qualify_url(SNAPTIK_ORIGIN, payload.get("thumbnail")),
            title=as_text(payload.get("title")),
            duration=as_int(payload.get("duration")),
        )
