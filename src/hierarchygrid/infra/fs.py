from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the application data directory and
path normalization helpers used by the configuration and logging layers.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "HierarchyGrid"
UNIX_APP_DIR_NAME = ".hierarchygrid"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/HierarchyGrid
    - Linux/Mac: ~/.hierarchygrid

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        try:
            home = os.path.expanduser("~")
            path = os.path.join(home, UNIX_APP_DIR_NAME)
        except Exception:
            path = os.path.abspath(UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a file path string into an absolute filesystem path.

    Handles environment variable expansion and user home shortcuts.
    Empty input resolves to the fallback, which may itself be empty.

    Args:
        path: Raw input path string.
        fallback: Value returned when the input is blank.

    Returns:
        str: Normalized absolute path, or the fallback.
    """
    p = (path or "").strip()
    if not p:
        return fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))
