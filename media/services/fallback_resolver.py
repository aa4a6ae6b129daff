import logging
import time
from typing import List, Optional, Tuple

import requests

from media.adapters.outbound.http_session import read_text_before
from media.domain.entities import MediaRequest, MediaResult
from media.domain.errors import AllProvidersExhausted, ProviderCallFailed
from media.ports.outbound.media_provider_port import MediaProviderPort
from media.services.provider_registry import ProviderRegistry

logger = logging.getLogger(__name__)


class FallbackResolver:
    """
    Tries providers one after another, in registry order:
      - one attempt per provider, bounded by that provider's timeout
      - the first usable result wins and is returned as-is (no merging)
      - every failure is logged with the provider name
    """

    def __init__(self, registry: ProviderRegistry, session: requests.Session):
        self.registry = registry
        self.session = session

    def resolve(self, request: MediaRequest) -> MediaResult:
        attempts: List[Tuple[str, str]] = []

        for provider in self.registry:
            logger.info("Trying provider %s", provider.name)
            try:
                body = self._call(provider, request.source_url)
            except ProviderCallFailed as e:
                logger.warning("Provider %s failed: %s", e.provider, e.reason)
                attempts.append((e.provider, e.reason))
                continue

            result = self._parse(provider, body)
            if result is None:
                logger.warning("Provider %s failed: no usable media in response", provider.name)
                attempts.append((provider.name, "no usable media in response"))
                continue

            logger.info("Provider %s resolved %s", provider.name, request.source_url)
            return result

        logger.error("All providers failed for %s: %s", request.source_url, attempts)
        raise AllProvidersExhausted(attempts)

    def _call(self, provider: MediaProviderPort, source_url: str) -> str:
        req = provider.build_request(source_url)
        deadline = time.monotonic() + provider.timeout
        try:
            response = self.session.request(
                req.method,
                req.url,
                params=req.params,
                data=req.data,
                json=req.json_body,
                headers=req.headers,
                timeout=provider.timeout,
                stream=True,
            )
            try:
                response.raise_for_status()
                return read_text_before(response, deadline)
            finally:
                response.close()
        except requests.Timeout:
            raise ProviderCallFailed(provider.name, f"timed out after {provider.timeout}s")
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise ProviderCallFailed(provider.name, f"HTTP {status}")
        except requests.RequestException as e:
            raise ProviderCallFailed(provider.name, str(e) or e.__class__.__name__)

    @staticmethod
    def _parse(provider: MediaProviderPort, body: str) -> Optional[MediaResult]:
        try:
            return provider.parse_response(body)
        except Exception:
            # a raising parser counts as "no result"
            logger.exception("Provider %s parser raised", provider.name)
            return None
