from __future__ import annotations

"""
Logging Core Orchestrator.

Installs a single QueueHandler on the root logger and drains it on a
QueueListener thread, so that sink I/O never runs on the thread that is
scanning a folder or assembling a prompt. Configuration is idempotent; the
listener is stopped, and its queue flushed, at interpreter exit.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from promptnormalizer.infra.fs import get_user_data_dir
from promptnormalizer.infra.logging.config import _LEVEL_MAP, LoggingConfig
from promptnormalizer.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_promptnormalizer_configured"
_QUEUE_LISTENER_ATTR: str = "_promptnormalizer_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "promptnormalizer.log") -> str:
    """Diagnostic log location: '<user data dir>/logs/<file_name>'."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route all records through a queue to the sinks described by ``cfg``.

    Calls after the first are no-ops unless ``force`` is set; a forced call
    replaces the sinks and listener installed previously.

    Args:
        cfg: Sink and level settings.
        force: Re-install even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    _detach(root)

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    sinks = _build_sinks(cfg, level_int)
    if not sinks:
        return root

    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(records)
    _tag_handler(queue_handler)

    listener = QueueListener(records, *sinks, respect_handler_level=True)
    listener.start()
    atexit.register(_safe_stop_listener, listener)

    root.addHandler(queue_handler)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def shutdown_logging() -> None:
    """Flush pending records, close our sinks and mark logging unconfigured."""
    root = logging.getLogger()
    _detach(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _build_sinks(cfg: LoggingConfig, level_int: int) -> List[logging.Handler]:
    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(_create_console_handler(level_int, cfg.console_fmt))
    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh is not None:
            sinks.append(fh)
    return sinks


def _detach(root: logging.Logger) -> None:
    """Stop our listener (draining its queue), then drop our root handlers."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _safe_stop_listener(listener)
        for sink in listener.handlers:
            sink.close()
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    # stop() on an already stopped listener fails; atexit may run after shutdown_logging()
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
