import re
from typing import Optional

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

VIDEO_ID_PATTERNS = (
    # Known hosting URL shapes; the id runs up to the next delimiter
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)([^&\n?#]+)"),
    # Bare 11-character id
    re.compile(r"\A([a-zA-Z0-9_-]{11})\Z"),
)

def extract_video_id(value: str) -> Optional[str]:
    """Return the video id contained in a URL or bare id, None if nothing matches"""
    if not isinstance(value, str) or not value:
        return None

    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None

def source_url(video_id: str) -> str:
    """Canonical watch URL handed to yt-dlp"""
    return WATCH_URL.format(video_id=video_id)
