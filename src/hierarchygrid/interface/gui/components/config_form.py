from __future__ import annotations

"""
Configuration Form UI Component.

Entry widgets for the hierarchy parameters plus the load trigger. Values
are read and written by the GridController; the frame holds no state.
"""

from typing import Any, List, Tuple

import customtkinter as ctk

from hierarchygrid.utils.i18n import i18n

# (config key, i18n key, attribute name, masked)
_FORM_FIELDS: List[Tuple[str, str, str, bool]] = [
    ("record_id", "gui.form.record_id", "entry_record_id", False),
    ("object_api_name", "gui.form.object", "entry_object", False),
    ("parent_field_api_name", "gui.form.parent_field", "entry_parent_field", False),
    ("field_list", "gui.form.fields", "entry_fields", False),
    ("instance_url", "gui.form.instance_url", "entry_instance_url", False),
    ("access_token", "gui.form.token", "entry_token", True),
]


class ConfigFormFrame(ctk.CTkFrame):
    """Left-hand panel holding one labeled entry per configuration key."""

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, width=280, corner_radius=0, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        row = 0
        for _key, label_key, attr, masked in _FORM_FIELDS:
            ctk.CTkLabel(self, text=i18n.t(label_key), anchor="w").grid(
                row=row, column=0, sticky="ew", padx=20, pady=(12 if row == 0 else 6, 0)
            )
            entry = ctk.CTkEntry(self, show="*" if masked else "")
            entry.grid(row=row + 1, column=0, sticky="ew", padx=20)
            setattr(self, attr, entry)
            row += 2

        self.btn_load = ctk.CTkButton(
            self,
            text=i18n.t("gui.form.btn_load"),
            height=40,
            font=ctk.CTkFont(size=14, weight="bold"),
        )
        self.btn_load.grid(row=row, column=0, sticky="ew", padx=20, pady=20)

    def entries(self) -> List[Tuple[str, ctk.CTkEntry]]:
        """Pairs of (config key, entry widget) in display order."""
        return [(key, getattr(self, attr)) for key, _label, attr, _masked in _FORM_FIELDS]
