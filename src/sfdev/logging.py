"""Logging configuration for sfdev."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "sfdev"


class SfdevLogger:
    """Centralized logging for an sfdev session.

    Every module logs through ``logging.getLogger(__name__)``; this class
    attaches handlers to the ``sfdev`` parent logger so those records land in
    the session file and, when verbose, on stdout.
    """

    def __init__(
        self,
        logs_dir: Optional[Path] = None,
        session_id: Optional[str] = None,
        verbose: bool = False,
        level: str = "INFO",
    ):
        self.session_id = session_id or datetime.now().strftime("%Y%m%d_%H%M%S")
        self.verbose = verbose
        self.log_file: Optional[Path] = None

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # Clear existing handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        # File handler - always log everything to file
        if logs_dir is not None:
            logs_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = logs_dir / f"session_{self.session_id}.log"
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            self.logger.addHandler(file_handler)
            # The file gets debug records even when the console stays quiet
            self.logger.setLevel(logging.DEBUG)

        # Console handler - only if verbose
        if verbose:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.DEBUG)
            console_handler.setFormatter(logging.Formatter("%(levelname)-8s | %(message)s"))
            self.logger.addHandler(console_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def info(self, message: str) -> None:
        self.logger.info(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def operation(self, name: str, success: bool, detail: str = "") -> None:
        """Log the outcome of a host operation."""
        if success:
            self.info(f"{name}: OK{f' ({detail})' if detail else ''}")
        else:
            self.error(f"{name}: FAILED{f' ({detail})' if detail else ''}")

    def get_log_path(self) -> Optional[Path]:
        """Get the path to the current log file."""
        return self.log_file


# Global logger instance
_logger: Optional[SfdevLogger] = None


def get_logger() -> Optional[SfdevLogger]:
    """Get the global logger instance."""
    return _logger


def init_logger(
    logs_dir: Optional[Path] = None,
    session_id: Optional[str] = None,
    verbose: bool = False,
    level: str = "INFO",
) -> SfdevLogger:
    """Initialize and return a new logger."""
    global _logger
    _logger = SfdevLogger(logs_dir, session_id, verbose, level)
    return _logger
