from typing import Optional, Protocol

from media.domain.entities import MediaResult, ProviderRequest


class MediaProviderPort(Protocol):
    """One third-party downloader API: how to call it and how to read its answer."""

    name: str
    timeout: float

    def build_request(self, source_url: str) -> ProviderRequest: ...
    def parse_response(self, body: str) -> Optional[MediaResult]: ...
