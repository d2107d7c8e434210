from datetime import datetime, timezone

from fastapi import APIRouter

from ytclip.config.settings import config
from ytclip.core.state import state
from ytclip.i18n import i18n
from ytclip.services.cleanup import pending_removals

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint"""
    return {
        "status": i18n.get("response.status_running"),
        "service": config.api.title,
        "version": config.api.version,
        "ytdlp_version": state.ytdlp_version,
        "ffmpeg_version": state.ffmpeg_version,
    }


@router.get("/health")
async def health_check():
    """Lightweight health check"""
    return {
        "status": i18n.get("health.status"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "env": config.environment,
    }


@router.get("/health/full")
async def health_check_full():
    """Detailed health check"""
    return {
        "status": i18n.get("health.status"),
        "ytdlp_version": state.ytdlp_version,
        "ffmpeg_version": state.ffmpeg_version,
        "working_directory": str(config.downloads_dir()),
        "reaper_running": state.reaper is not None and state.reaper.running,
        "pending_removals": pending_removals(),
    }
