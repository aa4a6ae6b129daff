from typing import Optional

from media.adapters.outbound.providers.common import browser_headers, load_json
from media.adapters.outbound.providers.tikwm_provider import parse_tikwm_payload
from media.domain.entities import MediaResult, ProviderRequest
from media.ports.outbound.media_provider_port import MediaProviderPort


class RapidApiProvider(MediaProviderPort):
    """
    Keyed RapidAPI mirror of the tikwm API. Only registered when a key is
    configured (`RAPIDAPI_KEY`); there is no default key.
    """

    name = "rapidapi"

    def __init__(self, api_key: str, host: str, timeout: float = 15.0):
        if not api_key:
            raise ValueError("rapidapi provider requires an API key")
        self.api_key = api_key
        self.host = host
        self.timeout = timeout

    @property
    def origin(self) -> str:
        return f"https://{self.host}"

    def build_request(self, source_url: str) -> ProviderRequest:
        return ProviderRequest(
            method="GET",
            url=f"{self.origin}/",
            params={"url": source_url, "hd": "1"},
            headers=browser_headers(**{
                "X-RapidAPI-Key": self.api_key,
                "X-RapidAPI-Host": self.host,
            }),
        )

    def parse_response(self, body: str) -> Optional[MediaResult]:
        return parse_tikwm_payload(load_json(body), self.origin)
