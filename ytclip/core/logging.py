import logging
from typing import Any, Optional

from fastapi import Request
from rich.logging import RichHandler

from ytclip.config.settings import config

logger = logging.getLogger(__name__)

class RequestIdFilter(logging.Filter):
    """Give every record a request_id so formats may reference it ('-' outside requests)"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True

def setup_logging() -> None:
    """Configure root logging from config (rich console handler when enabled)"""
    if config.logging.enable_rich:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(config.logging.format))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(config.logging.level)

def log_with_context(
    request: Optional[Request],
    level: int,
    message: str,
    **kwargs: Any
) -> None:
    """
    Log with request context.
    Automatically includes request_id for tracing.
    """
    request_state = getattr(request, "state", None)
    extra = {
        "request_id": getattr(request_state, "request_id", "unknown"),
        **kwargs
    }
    logger.log(level, message, extra=extra)

def log_info(request: Optional[Request], message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.INFO, message, **kwargs)

def log_error(request: Optional[Request], message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.ERROR, message, **kwargs)

def log_warning(request: Optional[Request], message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.WARNING, message, **kwargs)

def log_debug(request: Optional[Request], message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.DEBUG, message, **kwargs)
