from __future__ import annotations

"""
Logging Configuration Models.

A frozen description of where diagnostics go, with the two presets used by
the entrypoints: a quiet console for the CLI and a rotating file plus
console for the desktop window.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable specification for the logging subsystem initialization.

    Attributes:
        level: Minimum severity name ('DEBUG', 'INFO', 'WARNING', ...).
        console: Emit to stderr.
        log_file: Optional path of the rotating diagnostics file.
        max_bytes: Size of one log segment before rotation.
        backup_count: Rotated segments kept on disk.
        console_fmt: Format for terminal output.
        file_fmt: Format for file entries.
        datefmt: Timestamp format for file entries.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_number(self) -> int:
        """Numeric level; unknown or blank names resolve to INFO."""
        name = str(self.level or "").strip().upper()
        if name == "WARN":
            name = "WARNING"
        value = logging.getLevelName(name) if name else None
        return value if isinstance(value, int) else logging.INFO

    @classmethod
    def for_cli(cls, debug: bool = False) -> LoggingConfig:
        """Console only; fetch tracing is shown with --debug."""
        return cls(level="DEBUG" if debug else "WARNING", console=True, log_file=None)

    @classmethod
    def for_gui(cls, log_file: str) -> LoggingConfig:
        """Console plus the persistent diagnostics file."""
        return cls(level="INFO", console=True, log_file=log_file)
