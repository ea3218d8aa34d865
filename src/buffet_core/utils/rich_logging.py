"""Console logging with compact, coloured formatting."""

import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER_NAME = "buffet_core"


class BuffetLogFormatter(logging.Formatter):
    """Formatter with timestamp, coloured level and component tag."""

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        # "buffet_core.formatting.numbers" -> "numbers"
        component = record.name.rsplit(".", 1)[-1]

        error_context = ""
        if hasattr(record, "error_code"):
            error_context = f"[{record.error_code}] "

        if self.use_colors:
            level_colors = {
                "DEBUG": "\033[36m",      # Cyan
                "INFO": "\033[32m",       # Green
                "WARNING": "\033[33m",    # Yellow
                "ERROR": "\033[31m",      # Red
                "CRITICAL": "\033[35m",   # Magenta
            }
            reset = "\033[0m"
            level_color = level_colors.get(record.levelname, "")
        else:
            level_color = ""
            reset = ""

        return (
            f"{timestamp} {level_color}{record.levelname:8s}{reset} "
            f"[{component}] {error_context}{record.getMessage()}"
        )


def setup_logging(
    log_level: str = "INFO",
    use_colors: bool = True,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_colors: Emit ANSI colour codes (disabled automatically when the
            stream is not a terminal)
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Close existing handlers before clearing so repeated setup doesn't duplicate output
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    stream = stream or sys.stderr
    is_tty = stream.isatty() if hasattr(stream, "isatty") else False

    handler = logging.StreamHandler(stream)
    handler.setFormatter(BuffetLogFormatter(use_colors=use_colors and is_tty))
    logger.addHandler(handler)

    return logger
