from __future__ import annotations

"""
Logging Configuration Models.

Severity names accepted from the command line and the frozen settings
object consumed by configure_logging().
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one logging bootstrap.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records on stderr, keeping stdout free for the prompt.
        log_file: Optional path of a rotating diagnostic file.
        max_bytes: Size at which the diagnostic file rolls over.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the diagnostic file. Includes the thread
            name so background folder scans can be told apart.
        datefmt: Timestamp layout in the diagnostic file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Console-first settings used by the command-line entry point."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)
