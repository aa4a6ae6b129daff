from functools import lru_cache
from typing import Iterator

import requests
from fastapi import Depends

from app.core.config import settings
from media.adapters.outbound.http_session import build_session
from media.services.download_service import DownloadService
from media.services.fallback_resolver import FallbackResolver
from media.services.file_proxy_service import FileProxyService
from media.services.provider_registry import ProviderRegistry, build_default_registry
from media.services.url_normalizer import UrlNormalizer


@lru_cache(maxsize=1)
def get_provider_registry() -> ProviderRegistry:
    # read-only configuration, shared by every request
    return build_default_registry(settings)


def get_http_session() -> Iterator[requests.Session]:
    """One outbound session per request; closed when the request is done."""
    session = build_session()
    try:
        yield session
    finally:
        session.close()


def get_download_service(
    session: requests.Session = Depends(get_http_session),
    registry: ProviderRegistry = Depends(get_provider_registry),
) -> DownloadService:
    normalizer = UrlNormalizer(session, timeout=settings.normalizer_timeout_seconds)
    resolver = FallbackResolver(registry, session)
    return DownloadService(normalizer=normalizer, resolver=resolver)


def get_file_proxy_service() -> FileProxyService:
    # the streamed body outlives the handler, so the service closes its own session
    return FileProxyService(build_session(), timeout=settings.file_proxy_timeout_seconds)
