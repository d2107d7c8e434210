import re

CLOCK_PATTERN = re.compile(r"^(\d{1,2}):([0-5]\d):([0-5]\d)$")

def parse_clock(value: str) -> int:
    """Parse H:MM:SS (or HH:MM:SS) into seconds"""
    match = CLOCK_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid clock time: {value!r}")
    hours, minutes, seconds = (int(part) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds

def format_clock(total_seconds: int) -> str:
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

def calculate_duration(start_time: str, end_time: str) -> str:
    """
    Elapsed time between two clock strings as HH:MM:SS.
    Assumes end >= start; callers reject reversed ranges.
    """
    return format_clock(parse_clock(end_time) - parse_clock(start_time))
