import re
import unicodedata


def sanitize_filename(name: str, max_length: int = 200) -> str:
    """Sanitize a download filename for Content-Disposition and cross-platform saves"""
    name = unicodedata.normalize("NFKC", name)
    name = re.sub(r'[\\/:*?"<>|\x00-\x1f]', '_', name)

    stem = name.split(".", 1)[0]
    windows_reserved = {
        'CON', 'PRN', 'AUX', 'NUL',
        'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
        'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
    }
    if stem.upper() in windows_reserved:
        name = f"_{name}"

    return name[:max_length].strip()
