from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ytclip.config.settings import config
from ytclip.models.internal import QUALITY_TIERS, SUPPORTED_FORMATS

class DownloadRequest(BaseModel):
    """Query parameters of a download, normalized"""
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = Field(None, description="Video URL or bare 11-character id")
    format: str = Field(default_factory=lambda: config.download.default_format, description="Output format (mp4, webm, mp3, m4a)")
    quality: str = Field(default_factory=lambda: config.download.default_quality, description="Height tier (e.g. 480p) or 'highest'")
    start_time: Optional[str] = Field(None, alias="startTime", description="Clip start (H:MM:SS)")
    end_time: Optional[str] = Field(None, alias="endTime", description="Clip end (H:MM:SS)")

    @field_validator('format', mode='before')
    @classmethod
    def fallback_format(cls, v):
        """Unknown formats fall back to the default instead of failing"""
        v = str(v).strip().lower() if v else ""
        return v if v in SUPPORTED_FORMATS else config.download.default_format

    @field_validator('quality', mode='before')
    @classmethod
    def fallback_quality(cls, v):
        """Unknown qualities fall back to the default instead of failing"""
        v = str(v).strip().lower() if v else ""
        return v if v in QUALITY_TIERS else config.download.default_quality

    @field_validator('url', 'start_time', 'end_time', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def has_range(self) -> bool:
        return bool(self.start_time or self.end_time)
