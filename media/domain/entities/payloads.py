from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from media.domain.entities.media import MediaType


class DownloadIn(BaseModel):
    # `url` stays optional here so a blank or missing value reaches the service
    # and is reported as "URL is required" rather than a schema error.
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"url": "https://www.tiktok.com/@user/video/7300000000000000000", "mediaType": "video"}
        },
    )

    url: Optional[str] = None
    media_type: Optional[MediaType] = Field(default="video", alias="mediaType")


class DownloadFileIn(BaseModel):
    url: Optional[str] = None
    filename: Optional[str] = None
