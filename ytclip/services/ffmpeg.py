from pathlib import Path
from typing import List

from ytclip.config.settings import config
from ytclip.services.format import FormatDecision

class FFmpegCommandBuilder:
    """Build ffmpeg commands"""
    
    @staticmethod
    def build_version_command() -> List[str]:
        return [config.ffmpeg.binary, '-version']
    
    @staticmethod
    def codec_args(media_format: str) -> List[str]:
        """Speed-first video encode plus a codec the container accepts"""
        if media_format == "mp3":
            return ['-vn', '-c:a', 'libmp3lame']
        if media_format == "m4a":
            return ['-vn', '-c:a', 'aac']
        if media_format == "webm":
            return [
                '-c:v', 'libvpx-vp9', '-deadline', 'realtime', '-cpu-used', '8',
                '-c:a', 'libopus',
            ]
        return ['-c:v', 'libx264', '-preset', config.ffmpeg.video_preset, '-c:a', 'aac']
    
    @staticmethod
    def build_trim_command(
        source: Path,
        start_time: str,
        duration: str,
        output: Path,
        media_format: str
    ) -> List[str]:
        """Cut [start, start + duration) of source into output"""
        return [
            config.ffmpeg.binary,
            '-y',
            '-hide_banner',
            '-loglevel', 'error',
            '-i', str(source),
            '-ss', start_time,
            '-t', duration,
            *FFmpegCommandBuilder.codec_args(media_format),
            str(output),
        ]
