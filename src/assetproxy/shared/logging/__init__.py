from .base import AssetProxyLogger, AssetProxyLogRecord
from .factory import get_logger
from .handlers import LogStreamFormatter, LogStreamHandler
from .utils import replace_uvicorn_loggers

__all__ = [
    "AssetProxyLogger",
    "AssetProxyLogRecord",
    "LogStreamFormatter",
    "LogStreamHandler",
    "get_logger",
    "replace_uvicorn_loggers",
]
