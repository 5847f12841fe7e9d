import logging
import sys
from datetime import datetime

__all__ = [
    "LogStreamFormatter",
    "LogStreamHandler",
]


class LogStreamFormatter(logging.Formatter):
    """
    Formatter for stream output. Adds the RPC call being served, when there
    is one, and colors messages based on level.
    """
    LEVEL_COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[97m",
        "WARNING": "\033[38;5;208m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[91m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]

        call_context = getattr(record, "call_context", None)
        if call_context is not None:
            formatted_message = (
                f"{timestamp} - {record.levelname} - {record.name} - "
                f"[{call_context.call_name}] - {record.getMessage()}"
            )
        else:
            formatted_message = f"{timestamp} - {record.levelname} - {record.name} - {record.getMessage()}"

        if record.exc_info:
            formatted_message = f"{formatted_message}\n{self.formatException(record.exc_info)}"

        if not self.use_colors:
            return formatted_message
        return self._colorize(record.levelname, formatted_message)

    def _colorize(self, level: str, message: str) -> str:
        color = self.LEVEL_COLORS.get(level, self.LEVEL_COLORS["INFO"])
        return f"{color}{message}{self.RESET}"


class LogStreamHandler(logging.StreamHandler):
    """
    StreamHandler writing to stderr with LogStreamFormatter. Colors are only
    used when the stream is a terminal.
    """

    def __init__(self, stream=None):
        super().__init__(stream if stream is not None else sys.stderr)
        is_tty = getattr(self.stream, "isatty", lambda: False)()
        self.setFormatter(LogStreamFormatter(use_colors=is_tty))
