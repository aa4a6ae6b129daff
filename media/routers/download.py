import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from media.domain.entities import DownloadIn
from media.domain.errors import MediaResolverError
from media.services.download_service import DownloadService
from shared.entities.envelope import ApiResponse, ok
from shared.wiring import get_download_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["download"],
    responses={
        400: {
            "description": "Missing URL, malformed body or invalid resolved URL.",
            "content": {"application/json": {"example": {"success": False, "error": "URL is required"}}},
        },
        405: {"description": "Only POST (and OPTIONS) are allowed."},
    },
)


@router.post(
    "/download",
    summary="Resolve a TikTok URL to a direct download link",
    description=(
        "Expands short links, then asks the configured downloader APIs **one after another** "
        "until one returns usable media, and hands back the requested facet.\n\n"
        "### Body\n"
        "- `url`: TikTok post URL (`tiktok.com/@user/video/<id>`, `vt.tiktok.com/...`, `vm.tiktok.com/...`)\n"
        "- `mediaType`: `video` (default), `audio` or `image`\n\n"
        "Image posts return the full `images` list in post order."
    ),
    response_model=ApiResponse,
    responses={
        200: {"description": "Resolved."},
        404: {
            "description": "The requested media type is not available for this post.",
            "content": {
                "application/json": {
                    "example": {"success": False, "error": "Audio is not available for this URL"}
                }
            },
        },
        500: {
            "description": "Every provider failed, or an unexpected error.",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "Could not fetch media from this URL. Try a different URL.",
                    }
                }
            },
        },
    },
)
async def download(
    body: DownloadIn = Body(..., description="TikTok URL and the media type to extract."),
    svc: DownloadService = Depends(get_download_service),
):
    try:
        media = await svc.download(body.url, body.media_type)
    except MediaResolverError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Unexpected error while resolving %s", body.url)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MediaResolverError.default_message,
        )
    return JSONResponse(content=ok(media))


@router.options("/download", include_in_schema=False)
async def download_options():
    # CORS preflights are answered by the middleware; this covers bare OPTIONS
    return Response(status_code=status.HTTP_200_OK)
