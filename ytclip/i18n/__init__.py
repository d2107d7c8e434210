import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ytclip.config.settings import config

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"

class I18n:
    """Client-facing messages, looked up by dotted key (e.g. "error.trim_failed")"""

    def __init__(self, locales_dir: Path = LOCALES_DIR):
        self.locales: Dict[str, Dict[str, Any]] = {}
        self.default_locale = config.i18n.default_locale
        self.load_locales(locales_dir)

    def load_locales(self, locales_dir: Path) -> None:
        if not locales_dir.is_dir():
            logger.warning(f"Locales directory not found at {locales_dir}")
            return

        for path in sorted(locales_dir.glob("*.json")):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    self.locales[path.stem] = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Error loading locale {path.stem}: {e}")

    def _lookup(self, key: str, locale: str) -> Optional[str]:
        value: Any = self.locales.get(locale, {})
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value if isinstance(value, str) else None

    def get(self, key: str, locale: Optional[str] = None, **kwargs) -> str:
        """Translated message; falls back to the default locale, then to the key itself"""
        message = self._lookup(key, locale or self.default_locale)
        if message is None and locale != self.default_locale:
            message = self._lookup(key, self.default_locale)
        if message is None:
            return key

        try:
            return message.format(**kwargs)
        except (KeyError, IndexError):
            return message

i18n = I18n()
