from ytclip.models.internal import FORMATS, MediaMetadata

class FormatDecision:
    """Make format decisions"""
    
    @staticmethod
    def get_metadata(media_format: str) -> MediaMetadata:
        """Metadata for a supported output format"""
        return FORMATS[media_format]
    
    @staticmethod
    def parse_height(quality: str) -> int:
        """'480p' -> 480"""
        return int(quality.lower().rstrip("p"))
    
    @staticmethod
    def decide(media_format: str, quality: str) -> str:
        """yt-dlp -f selection for a video container and quality tier"""
        meta = FormatDecision.get_metadata(media_format)
        container, audio_ext = meta.ext, meta.audio_ext
        
        if quality == "highest":
            # Container-matched best pair, then best single file in container, then anything
            return (
                f"bestvideo[ext={container}]+bestaudio[ext={audio_ext}]/"
                f"best[ext={container}]/best"
            )
        
        height = FormatDecision.parse_height(quality)
        return (
            f"bestvideo[height<={height}][ext={container}]+bestaudio[ext={audio_ext}]/"
            f"best[height<={height}]"
        )
