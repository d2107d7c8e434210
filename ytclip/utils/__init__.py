from .filename import sanitize_filename
from .identifier import extract_video_id, source_url
from .timecode import calculate_duration, parse_clock

__all__ = ["calculate_duration", "extract_video_id", "parse_clock", "sanitize_filename", "source_url"]
