import os
from typing import List

from ytclip.config.settings import config
from ytclip.core.state import state
from ytclip.services.format import FormatDecision

LOCAL_BINARY = "./yt-dlp"

def resolve_ytdlp_binary() -> str:
    """Explicit config > ./yt-dlp next to the service > yt-dlp on PATH"""
    if config.ytdlp.binary:
        return config.ytdlp.binary
    if os.path.exists(LOCAL_BINARY):
        return LOCAL_BINARY
    return "yt-dlp"

class YTDLPCommandBuilder:
    """Build yt-dlp commands"""
    
    @staticmethod
    def build_version_command() -> List[str]:
        return [state.ytdlp_binary, '--version']
    
    @staticmethod
    def build_fetch_command(
        url: str,
        media_format: str,
        quality: str,
        output_template: str
    ) -> List[str]:
        """Build command downloading url into output_template (%(ext)s left to yt-dlp)"""
        meta = FormatDecision.get_metadata(media_format)
        cmd = [state.ytdlp_binary]
        
        if meta.audio_only:
            cmd.extend([
                '-x',
                '--audio-format', meta.ext,
                '--audio-quality', config.ytdlp.audio_quality,
            ])
        else:
            cmd.extend([
                '-f', FormatDecision.decide(media_format, quality),
                '--merge-output-format', meta.ext,
                # Single-file fallbacks may come in another container
                '--remux-video', meta.ext,
            ])
        
        cmd.extend([
            '--add-header', f'User-Agent:{config.ytdlp.user_agent}',
            '--no-playlist',
            '--no-progress',
            '--socket-timeout', str(config.ytdlp.socket_timeout),
            '--retries', str(config.ytdlp.retries),
            '-o', output_template,
            url,
        ])
        
        return cmd
