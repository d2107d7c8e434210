from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ytclip.services.cleanup import Reaper

@dataclass
class RuntimeState:
    """Centralized runtime state"""
    ytdlp_binary: str = "yt-dlp"
    ytdlp_version: str = "unknown"
    ffmpeg_version: str = "unknown"
    reaper: Optional["Reaper"] = None

state = RuntimeState()
