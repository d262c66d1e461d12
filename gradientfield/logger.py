"""
Logger - Central logging setup for gradientfield

Usage:
    from gradientfield.logger import logger

    logger.debug("Detailed debug info")
    logger.info("Normal operation")
    logger.warning("Something unexpected")

    # With context
    logger.info("Frame written", component="EXPORT", details=str(path))

Library modules log through logging.getLogger(__name__); those records
reach the handlers configured here because they sit under the
"gradientfield" logger.
"""

import logging
import sys
from enum import IntEnum
from typing import Optional

LOGGER_NAME = "gradientfield"


class LogLevel(IntEnum):
    """Log levels matching Python logging."""
    DEBUG = logging.DEBUG      # 10
    INFO = logging.INFO        # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR      # 40


class _StdoutHandler(logging.StreamHandler):
    """Writes to whatever sys.stdout is at emit time (survives stream swaps)."""

    def __init__(self):
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stdout


class GradientFieldLogger:
    """
    Central logger.

    Features:
    - Component tagging for filtering
    - Console (terminal) output
    - Optional file output
    """

    def __init__(self):
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)  # Capture all, filter on handlers
        self._logger.propagate = False  # Don't pass to root logger

        self._console_handler = _StdoutHandler()
        self._console_handler.setLevel(logging.WARNING)  # Quiet unless asked
        self._console_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S"
        ))
        self._logger.addHandler(self._console_handler)

        self._file_handler: Optional[logging.FileHandler] = None

    @property
    def level(self) -> int:
        return self._console_handler.level

    def set_level(self, level: LogLevel):
        """Set minimum log level for console output."""
        self._console_handler.setLevel(level)

    def enable_file_logging(self, filepath: str):
        """Enable logging to file."""
        if self._file_handler:
            self.disable_file_logging()

        self._file_handler = logging.FileHandler(filepath, encoding="utf-8")
        self._file_handler.setLevel(logging.DEBUG)
        self._file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        ))
        self._logger.addHandler(self._file_handler)

    def disable_file_logging(self):
        """Disable file logging."""
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

    def _format_message(self, msg: str, component: Optional[str] = None,
                        details: Optional[str] = None) -> str:
        """Format message with optional component tag and details."""
        parts = []
        if component:
            parts.append(f"[{component}]")
        parts.append(msg)
        if details:
            parts.append(f"- {details}")
        return " ".join(parts)

    def debug(self, msg: str, component: Optional[str] = None,
              details: Optional[str] = None):
        self._logger.debug(self._format_message(msg, component, details))

    def info(self, msg: str, component: Optional[str] = None,
             details: Optional[str] = None):
        self._logger.info(self._format_message(msg, component, details))

    def warning(self, msg: str, component: Optional[str] = None,
                details: Optional[str] = None):
        self._logger.warning(self._format_message(msg, component, details))

    def error(self, msg: str, component: Optional[str] = None,
              details: Optional[str] = None):
        self._logger.error(self._format_message(msg, component, details))

    def render(self, msg: str, details: Optional[str] = None):
        """Convenience: log render-pipeline message."""
        self.info(msg, component="RENDER", details=details)


# Global logger instance
logger = GradientFieldLogger()


def set_log_level(level: LogLevel):
    """Set the console log level."""
    logger.set_level(level)
