from .internal import (
    FORMATS,
    QUALITY_TIERS,
    SUPPORTED_FORMATS,
    ArtifactRole,
    CleanupResult,
    MediaMetadata,
    ReaperReport,
    TrimRange,
    WorkingArtifact,
)
from .request import DownloadRequest

__all__ = [
    "FORMATS",
    "QUALITY_TIERS",
    "SUPPORTED_FORMATS",
    "ArtifactRole",
    "CleanupResult",
    "DownloadRequest",
    "MediaMetadata",
    "ReaperReport",
    "TrimRange",
    "WorkingArtifact",
]
