import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_PATH = os.getenv("CONFIG_PATH", "config.json")

class WorkdirConfig(BaseModel):
    path: Optional[str] = Field(default=None, description="Working directory for temp/output artifacts")
    retention_seconds: int = Field(default=300, ge=1, description="Age after which the reaper deletes a file")
    sweep_interval_seconds: int = Field(default=300, ge=1, description="Reaper sweep interval")
    delivery_grace_seconds: float = Field(default=3.0, ge=0, description="Delay before deleting a delivered file")

class ProcessConfig(BaseModel):
    timeout_seconds: float = Field(default=300.0, gt=0, description="Hard timeout for yt-dlp/ffmpeg")
    max_output_bytes: int = Field(default=100 * 1024 * 1024, ge=1024, description="stdout/stderr buffer cap")

class YtDlpConfig(BaseModel):
    binary: Optional[str] = Field(default=None, description="yt-dlp executable (auto-detected if empty)")
    user_agent: str = Field(default="Mozilla/5.0", description="User-Agent header sent by yt-dlp")
    audio_quality: str = Field(default="0", description="--audio-quality for audio extraction")
    socket_timeout: int = Field(default=10, ge=1, description="Socket timeout for yt-dlp")
    retries: int = Field(default=3, ge=0, description="Number of retries for failed downloads")

class FfmpegConfig(BaseModel):
    binary: str = Field(default="ffmpeg", description="ffmpeg executable")
    video_preset: str = Field(default="ultrafast", description="x264 preset used when trimming")

class DownloadConfig(BaseModel):
    default_format: str = Field(default="mp4", description="Format used when none/unknown is requested")
    default_quality: str = Field(default="480p", description="Quality used when none/unknown is requested")

class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="[%(request_id)s] %(message)s", description="Log format (request_id is always available)")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @field_validator('level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

class I18nConfig(BaseModel):
    default_locale: str = Field(default="en", description="Default locale")
    supported_locales: list = Field(default=["en", "ja"], description="Supported locales")

class ApiConfig(BaseModel):
    title: str = Field(default="ytclip", description="API title")
    description: str = Field(default="Download and trim videos with yt-dlp and ffmpeg", description="API description")
    version: str = Field(default="1.0.0", description="API version")
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    debug: bool = Field(default=False, description="Enable debug mode")

class Config(BaseSettings):
    """Main configuration model"""
    model_config = SettingsConfigDict(env_prefix="YTCLIP_", env_nested_delimiter="__")

    environment: str = Field(default="development", description="development or production")
    workdir: WorkdirConfig = Field(default_factory=WorkdirConfig)
    process: ProcessConfig = Field(default_factory=ProcessConfig)
    ytdlp: YtDlpConfig = Field(default_factory=YtDlpConfig)
    ffmpeg: FfmpegConfig = Field(default_factory=FfmpegConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    def downloads_dir(self) -> Path:
        """Resolve the working directory (explicit path > production default > ./downloads)"""
        if self.workdir.path:
            return Path(self.workdir.path)
        if self.environment == "production":
            return Path("/tmp/downloads")
        return Path.cwd() / "downloads"

    @classmethod
    def load_from_file(cls, config_path: str = CONFIG_PATH) -> "Config":
        """Load configuration from JSON file, environment variables fill the gaps"""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
            logger.info(f"Configuration loaded from {config_path}")
            return cls(**config_data)
        except Exception as e:
            logger.error(f"Failed to load config from {config_path}: {str(e)}")
            logger.info("Using environment/default configuration")
            return cls()

def load_config() -> Config:
    """Load configuration with priority: config.json > env vars > defaults"""
    if os.path.exists(CONFIG_PATH):
        return Config.load_from_file(CONFIG_PATH)
    return Config()

config = load_config()
