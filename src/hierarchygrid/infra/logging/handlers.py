from __future__ import annotations

"""
Logging sinks.

Builds the handlers the queue listener drains into. Every handler created
here is tagged so teardown only touches what the application installed.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from hierarchygrid.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_hierarchygrid_handler"


def tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_tagged(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_sinks(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the console and file handlers requested by the configuration.

    A log file that cannot be opened is reported on stderr and skipped, so
    the grid still loads with console diagnostics only.

    Returns:
        List[logging.Handler]: Tagged handlers, possibly empty.
    """
    sinks: List[logging.Handler] = []
    level = cfg.level_number

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        console.setLevel(level)
        sinks.append(tag(console))

    if cfg.log_file:
        file_sink = _open_rotating_file(cfg)
        if file_sink is not None:
            file_sink.setLevel(level)
            sinks.append(tag(file_sink))

    return sinks


def _open_rotating_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    path = os.path.abspath(cfg.log_file or "")
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None

    handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return handler
