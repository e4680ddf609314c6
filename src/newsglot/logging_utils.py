"""Custom logging utilities for the newsglot application."""
# src/newsglot/logging_utils.py

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path

from . import paths


def _format_utc_time(ct: time.struct_time, created: float, datefmt: str | None, default_format: str) -> str:
    """Format a record timestamp with 6-digit microseconds and a 'Z' suffix."""
    s = time.strftime(datefmt, ct) if datefmt else time.strftime(default_format, ct)
    microseconds = int((created - int(created)) * 1_000_000)
    return f"{s}.{microseconds:06d}Z"


class ConsoleFormatter(logging.Formatter):
    """A custom formatter for console output to provide clean, user-friendly logs."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the application version.

        Args:
            version: The newsglot application version.

        """
        super().__init__(
            fmt=f"%(asctime)s | newsglot - {version} | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc_time(self.converter(record.created), record.created, datefmt, self.default_time_format)


class FileFormatter(logging.Formatter):
    """A detailed formatter for debug log files, aimed at developers."""

    def __init__(self) -> None:
        """Initialize the detailed file formatter."""
        super().__init__(
            fmt="%(asctime)s | %(name)-20s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        return _format_utc_time(self.converter(record.created), record.created, datefmt, self.default_time_format)


def setup_logging(version: str, *, debug: bool = False, log_dir: Path | None = None) -> None:
    """
    Configure the root logger for the newsglot application.

    This function sets up a dual-logging system:
    1.  Console: User-facing messages. Level is INFO by default, DEBUG if debug=True.
    2.  File (DEBUG): Developer-facing, detailed logs written to 'debug.log'
        in the project's log directory when debug=True.

    Args:
        version: The application version, included in console logs.
        debug: If True, enables detailed file logging and sets console level to DEBUG.
        log_dir: Directory for the debug log. Defaults to the project's log directory.

    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_level = logging.DEBUG if debug else logging.INFO
    root_logger.setLevel(console_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if debug:
        try:
            log_file_path = log_dir / paths.LOG_FILE_NAME if log_dir else paths.get_log_file()
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = FileHandler(log_file_path, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)

            logging.getLogger().info(
                "Debug mode enabled. Console level set to DEBUG. Detailed logs will be written to %s",
                log_file_path,
            )
        except (FileNotFoundError, OSError):
            # Console logging keeps working without the file.
            logging.getLogger().exception("Failed to create debug log file. Continuing with console logging only.")
