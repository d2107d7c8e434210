from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

class ArtifactRole(str, Enum):
    TEMP = "temp"
    OUTPUT = "output"

class WorkingArtifact(BaseModel):
    """A file in the working directory owned by exactly one pipeline"""
    path: Path
    token: str
    role: ArtifactRole

class TrimRange(BaseModel):
    """Validated clip range (clock strings)"""
    start: str
    end: str
    duration: str

class MediaMetadata(BaseModel):
    """Media metadata for an output format"""
    ext: str
    media_type: str
    audio_only: bool
    audio_ext: Optional[str] = None

class CleanupResult(BaseModel):
    """Best-effort deletion outcome; callers may inspect or ignore it"""
    path: Path
    removed: bool
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

class ReaperReport(BaseModel):
    """Outcome of one reaper sweep"""
    scanned: int = 0
    removed: int = 0
    failed: int = 0

FORMATS = {
    "mp4": MediaMetadata(ext="mp4", media_type="video/mp4", audio_only=False, audio_ext="m4a"),
    "webm": MediaMetadata(ext="webm", media_type="video/webm", audio_only=False, audio_ext="webm"),
    "mp3": MediaMetadata(ext="mp3", media_type="audio/mpeg", audio_only=True),
    "m4a": MediaMetadata(ext="m4a", media_type="audio/mp4", audio_only=True),
}

SUPPORTED_FORMATS = tuple(FORMATS)

QUALITY_TIERS = ("144p", "240p", "360p", "480p", "720p", "1080p", "1440p", "2160p", "highest")
