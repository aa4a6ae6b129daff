from typing import Any, Dict, Optional

from pydantic import BaseModel

from media.domain.entities import ResolvedMedia


class ApiResponse(BaseModel):
    """`{success, data}` on success, `{success, error}` on failure. Never both."""

    success: bool
    data: Optional[ResolvedMedia] = None
    error: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "data": {
                        "type": "video",
                        "url": "https://www.tikwm.com/video/media/play/7300000000000000000.mp4",
                        "thumbnail": "https://www.tikwm.com/video/cover/7300000000000000000.webp",
                        "title": "TikTok Video",
                        "duration": 15,
                    },
                },
                {"success": False, "error": "URL is required"},
            ]
        }
    }

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def ok(data: ResolvedMedia) -> Dict[str, Any]:
    return ApiResponse(success=True, data=data).to_json()


def fail(error: str) -> Dict[str, Any]:
    return ApiResponse(success=False, error=error).to_json()
