from __future__ import annotations

"""
Main Application Window Factory.

Initializes the root CustomTkinter window, applies the persisted theme and
lays out the primary grid: configuration form on the left, tree grid on
the right.
"""

from typing import Any, Dict

import customtkinter as ctk

from hierarchygrid.domain import constants as const
from hierarchygrid.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ROOT WINDOW CONSTRUCTION
# -----------------------------------------------------------------------------

def create_main_window(app_settings: Dict[str, Any]) -> ctk.CTk:
    """
    Instantiate and configure the primary application window.

    Args:
        app_settings: Persisted UI preferences ('theme').

    Returns:
        ctk.CTk: The configured root application instance.
    """
    ctk.set_appearance_mode(app_settings.get("theme", "System"))
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()

    app.title(f"{i18n.t('gui.window_title')} - v{const.CURRENT_CONFIG_VERSION}")
    app.geometry("1100x680")

    # Column 0 (Form), Column 1 (Grid)
    app.grid_columnconfigure(1, weight=1)
    app.grid_rowconfigure(0, weight=1)

    return app
