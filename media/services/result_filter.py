from typing import Annotated, List, Optional

from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

from media.domain.entities import MediaResult, MediaType, ResolvedMedia
from media.domain.errors import InvalidDownloadUrl, MediaUnavailable

# absolute http(s) URL with a host, any length (signed CDN links exceed 2083 chars)
_HTTP_URL = TypeAdapter(Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)])

DEFAULT_TITLES = {
    "video": "TikTok Video",
    "audio": "TikTok Audio",
    "image": "TikTok Images",
}


def is_valid_download_url(url: Optional[str]) -> bool:
    """Absolute http(s) URL with a host."""
    if not url:
        return False
    try:
        _HTTP_URL.validate_python(url)
    except ValidationError:
        return False
    return True


def _require_valid(url: str) -> str:
    if not is_valid_download_url(url):
        raise InvalidDownloadUrl()
    return url


def select(result: MediaResult, media_type: MediaType) -> ResolvedMedia:
    """
    Pick one facet out of a resolved result.

    Image posts return the full ordered `images` list; the cover is never
    used as a stand-in image. A thumbnail that is not a valid URL is dropped
    rather than failing the request.
    """
    url: Optional[str] = None
    images: Optional[List[str]] = None

    if media_type == "video":
        if not result.video_url:
            raise MediaUnavailable("video")
        url = _require_valid(result.video_url)
    elif media_type == "audio":
        if not result.audio_url:
            raise MediaUnavailable("audio")
        url = _require_valid(result.audio_url)
    elif media_type == "image":
        if not result.images:
            raise MediaUnavailable("image")
        images = [_require_valid(i) for i in result.images]
    else:
        raise MediaUnavailable(str(media_type))

    thumbnail = result.thumbnail_url if is_valid_download_url(result.thumbnail_url) else None
    return ResolvedMedia(
        type=media_type,
        url=url,
        images=images,
        thumbnail=thumbnail,
        title=result.title or DEFAULT_TITLES[media_type],
        duration=result.duration,
    )
