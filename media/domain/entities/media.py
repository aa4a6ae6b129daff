from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MediaType = Literal["video", "audio", "image"]
HttpMethod = Literal["GET", "POST"]

MEDIA_TYPES = ("video", "audio", "image")


class MediaRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_url: str
    media_type: MediaType = "video"


class MediaResult(BaseModel):
    """Normalized provider output. Build through `MediaResult.build` so empty results never escape a parser."""

    model_config = ConfigDict(frozen=True)

    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    title: Optional[str] = None
    duration: Optional[int] = None

    @classmethod
    def build(
        cls,
        video_url: Optional[str] = None,
        audio_url: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
        images: Optional[List[str]] = None,
        title: Optional[str] = None,
        duration: Optional[int] = None,
    ) -> Optional["MediaResult"]:
        images = [i for i in (images or []) if i]
        if not (video_url or audio_url or thumbnail_url or images):
            return None
        return cls(
            video_url=video_url or None,
            audio_url=audio_url or None,
            thumbnail_url=thumbnail_url or None,
            images=images,
            title=title or None,
            duration=duration,
        )


class ResolvedMedia(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: MediaType
    url: Optional[str] = None              # video / audio
    images: Optional[List[str]] = None     # image posts, in post order
    thumbnail: Optional[str] = None
    title: Optional[str] = None
    duration: Optional[int] = None


class ProviderRequest(BaseModel):
    """Everything the resolver needs to issue one outbound call."""

    method: HttpMethod = "GET"
    url: str
    params: Optional[dict] = None
    data: Optional[dict] = None    # form-encoded body
    json_body: Optional[dict] = None
    headers: dict = Field(default_factory=dict)
