from __future__ import annotations

"""
Logging Handler Factories.

Builds the sink handlers that sit behind the queue listener and tags them,
so that reconfiguration only ever removes handlers this package installed
and leaves those of test harnesses or embedding applications alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_promptnormalizer_handler"

# -----------------------------------------------------------------------------
# TAGGING
# -----------------------------------------------------------------------------

def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))

# -----------------------------------------------------------------------------
# SINK FACTORIES
# -----------------------------------------------------------------------------

def _create_console_handler(level_int: int, fmt: str) -> logging.StreamHandler:
    """stderr sink; stdout carries the generated prompt."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(logging.Formatter(fmt))
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the diagnostic file sink, creating its folder when missing.

    On failure a warning goes to stderr and no file sink is installed.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Record formatter.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Returns:
        Optional[RotatingFileHandler]: The sink, or None if it cannot be opened.
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Log file '{log_file}' unavailable, console only: {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
