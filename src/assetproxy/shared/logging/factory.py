import logging
import sys
import threading
from typing import Optional

from assetproxy.shared.settings import app_settings
from .base import AssetProxyLogger
from .handlers import LogStreamHandler

logging.setLoggerClass(AssetProxyLogger)

# Loggers may be requested from worker threads serving calls
_configure_lock = threading.Lock()


def get_logger(
        name: Optional[str] = None,
        use_stream: bool = True,
        level: Optional[int | str] = None
) -> logging.Logger:
    """
    Get a logger that tags records with the call being served

    The first request for a name sets its level and handlers; later requests
    return the logger unchanged.

    Args:
        name: Logger name. If None, uses calling module's __name__
        use_stream: Whether to write to stderr through LogStreamHandler
        level: Logging level, defaults to LOG_LEVEL

    Returns:
        Configured logger
    """
    if name is None:
        name = sys._getframe(1).f_globals.get("__name__", "assetproxy")

    logger = logging.getLogger(name)
    with _configure_lock:
        if not _has_stream_handler(logger):
            logger.setLevel(level or app_settings.log_level)
            logger.propagate = False
            if use_stream:
                logger.addHandler(LogStreamHandler())
    return logger


def _has_stream_handler(logger: logging.Logger) -> bool:
    return any(isinstance(handler, LogStreamHandler) for handler in logger.handlers)
