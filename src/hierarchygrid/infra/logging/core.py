from __future__ import annotations

"""
Logging lifecycle.

Records from every thread (GUI fetch workers included) go through one
QueueHandler on the root logger; a QueueListener writes them to the sinks
off the calling thread. Configuration is idempotent and can be torn down
explicitly when the window closes.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from hierarchygrid.infra.fs import get_user_data_dir
from hierarchygrid.infra.logging.config import LoggingConfig
from hierarchygrid.infra.logging.handlers import build_sinks, is_tagged, tag

_CONFIGURED_FLAG_ATTR: str = "_hierarchygrid_configured"
_QUEUE_LISTENER_ATTR: str = "_hierarchygrid_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "hierarchygrid.log") -> str:
    """Diagnostics file inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route the root logger through a queue into the configured sinks.

    Later calls are no-ops unless 'force' is set. When the setup itself
    fails, a plain stderr handler is installed instead.

    Args:
        cfg: Where diagnostics go and at which level.
        force: Tear down and rebuild an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    shutdown_logging()
    try:
        root.setLevel(cfg.level_number)
        sinks = build_sinks(cfg)
        if sinks:
            _attach_queue(root, sinks)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
    except Exception:
        shutdown_logging()
        emergency = logging.StreamHandler(sys.stderr)
        emergency.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        root.addHandler(tag(emergency))
        root.warning("Logging setup failed. Falling back to the console.")
    return root


def shutdown_logging() -> None:
    """Flush pending records and detach every handler the application installed."""
    root = logging.getLogger()

    listener: Optional[QueueListener] = getattr(root, _QUEUE_LISTENER_ATTR, None)
    _stop_listener(listener)
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if is_tagged(h)]:
        root.removeHandler(handler)
        handler.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """Acquire a named logger (usually __name__)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _attach_queue(root: logging.Logger, sinks: List[logging.Handler]) -> None:
    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()

    root.addHandler(tag(QueueHandler(log_queue)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    atexit.register(_stop_listener, listener)


def _stop_listener(listener: Optional[QueueListener]) -> None:
    # stop() on an already stopped listener raises on older interpreters
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
