from __future__ import annotations

"""
Internationalization (i18n) Utility.

Singleton translation manager with dot-notation lookup over nested JSON
locale files and keyword interpolation, shared by the CLI and the GUI.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")


class I18n:
    """
    Resource manager for locale-specific strings.

    Missing keys resolve to an explicit default when given, else to the key.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    def load_locale(self, locale: str) -> None:
        """
        Load a translation dictionary from the locales directory.

        Args:
            locale: ISO identifier for the target language.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Fallback active.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
            self._locale = locale
            self.is_loaded = True
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False

    def t(self, key: str, default: Optional[str] = None, **kwargs: Any) -> str:
        """
        Resolve and format a translation string.

        Args:
            key: Dot-separated path (e.g., 'gui.grid.loading').
            default: Text used when the key is missing.
            **kwargs: Interpolation variables.

        Returns:
            str: The formatted string.
        """
        current: Any = self._translations
        for k in key.split("."):
            current = current.get(k) if isinstance(current, dict) else None

        if not isinstance(current, str):
            current = default if default is not None else key

        if not kwargs:
            return current
        try:
            return current.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Interpolation error for '{key}': {e}")
            return current


i18n = I18n(DEFAULT_LOCALE)
