from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from media.domain.entities import DownloadFileIn
from media.domain.errors import MediaResolverError
from media.services.file_proxy_service import FileProxyService
from shared.wiring import get_file_proxy_service

router = APIRouter(prefix="/api", tags=["files"])


@router.post(
    "/download-file",
    summary="Stream a resolved media file as an attachment",
    description=(
        "Fetches `url` server-side (browser-like headers, bounded timeout) and streams it back with "
        "`Content-Disposition: attachment`. Useful when the CDN refuses cross-origin fetches from the browser."
    ),
    response_class=StreamingResponse,
    responses={
        200: {"description": "File stream.", "content": {"video/mp4": {}, "audio/mpeg": {}, "image/jpeg": {}}},
        400: {"description": "Missing or invalid URL."},
        502: {
            "description": "Upstream fetch failed.",
            "content": {
                "application/json": {"example": {"success": False, "error": "Failed to download file: HTTP 403"}}
            },
        },
    },
)
async def download_file(
    body: DownloadFileIn = Body(...),
    svc: FileProxyService = Depends(get_file_proxy_service),
):
    try:
        proxied = await run_in_threadpool(svc.open, body.url, body.filename)
    except MediaResolverError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return StreamingResponse(
        proxied.chunks,
        media_type=proxied.content_type,
        headers={"Content-Disposition": f'attachment; filename="{proxied.filename}"'},
        background=BackgroundTask(proxied.close),
    )
