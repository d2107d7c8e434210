from typing import Optional

from fastapi import APIRouter, Query, Request

from ytclip.core.logging import log_info
from ytclip.models.request import DownloadRequest
from ytclip.services.pipeline import Pipeline
from ytclip.utils.locale import safe_url_for_log

router = APIRouter()

@router.get("/download")
async def download_video(
    request: Request,
    url: Optional[str] = Query(None, description="Video URL or 11-character id"),
    format: Optional[str] = Query(None, description="mp4, webm, mp3 or m4a"),
    quality: Optional[str] = Query(None, description="e.g. 480p, 1080p or highest"),
    start_time: Optional[str] = Query(None, alias="startTime", description="Clip start (H:MM:SS)"),
    end_time: Optional[str] = Query(None, alias="endTime", description="Clip end (H:MM:SS)"),
):
    """Download (and optionally trim) a video, streamed back as an attachment"""
    download_request = DownloadRequest(
        url=url,
        format=format,
        quality=quality,
        start_time=start_time,
        end_time=end_time,
    )
    log_info(
        request,
        f"Download requested: {safe_url_for_log(download_request.url)} "
        f"format={download_request.format} quality={download_request.quality}"
    )

    # PipelineError is rendered by the application exception handler
    return await Pipeline(download_request, request=request).run()
