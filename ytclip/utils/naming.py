import secrets
import time
from pathlib import Path

from ytclip.config.settings import config
from ytclip.utils.filename import sanitize_filename

def working_directory() -> Path:
    """Configured working directory, created if absent"""
    directory = config.downloads_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory

def make_token() -> str:
    """Per-request token: wall clock ms plus a random suffix"""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"

def temp_prefix(directory: Path, token: str) -> Path:
    """Raw fetch output path without extension (yt-dlp picks it)"""
    return Path(directory) / f"{token}_temp"

def output_path(directory: Path, token: str, media_format: str) -> Path:
    return Path(directory) / f"{token}_output.{media_format}"

def display_filename(video_id: str, media_format: str, trimmed: bool = False) -> str:
    name = f"{video_id}.{media_format}"
    if trimmed:
        name = f"trimmed_{name}"
    return sanitize_filename(name)
