import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from media.domain.entities import MediaRequest, ResolvedMedia
from media.domain.errors import InvalidRequest
from media.services.fallback_resolver import FallbackResolver
from media.services.result_filter import select
from media.services.url_normalizer import UrlNormalizer

logger = logging.getLogger(__name__)


class DownloadService:
    """
    One download request end to end:
      trim/validate -> expand short link -> provider fallback -> facet selection.
    Nothing is kept between calls.
    """

    def __init__(self, normalizer: UrlNormalizer, resolver: FallbackResolver):
        self.normalizer = normalizer
        self.resolver = resolver

    def resolve_sync(self, url: Optional[str], media_type: Optional[str] = "video") -> ResolvedMedia:
        source_url = (url or "").strip() if isinstance(url, str) else ""
        if not source_url:
            raise InvalidRequest("URL is required")

        request = MediaRequest(source_url=self.normalizer.normalize(source_url), media_type=media_type or "video")
        logger.info("Processing %s (media type: %s)", request.source_url, request.media_type)

        result = self.resolver.resolve(request)
        return select(result, request.media_type)

    async def download(self, url: Optional[str], media_type: Optional[str] = "video") -> ResolvedMedia:
        # provider calls block on requests; keep them off the event loop
        return await run_in_threadpool(self.resolve_sync, url, media_type)
