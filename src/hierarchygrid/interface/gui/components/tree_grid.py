from __future__ import annotations

"""
Tree Grid UI Component.

CustomTkinter frame wrapping a themed ttk.Treeview. The first grid column
lives in the tree column so nesting is visible; the remaining columns are
plain Treeview columns. Link cells open their deep link on double-click.
"""

import logging
import tkinter as tk
import webbrowser
from tkinter import ttk
from typing import Any, Dict, List, Optional, Sequence

import customtkinter as ctk

from hierarchygrid.domain import constants as const
from hierarchygrid.domain.grid_models import ColumnSpec, Forest, TreeNode
from hierarchygrid.utils.i18n import i18n

logger = logging.getLogger(__name__)

_VARIANT_COLORS = {
    const.BRAND_VARIANT: "#1F6AA5",
    const.NEUTRAL_VARIANT: "gray40",
}
_CURRENT_TAG = "current_record"
_CURRENT_PREFIX = "★ "


class TreeGridFrame(ctk.CTkFrame):
    """
    Rendering surface for a forest.

    Owns the expand/collapse state of every row; the controller drives it
    through 'load', 'expand_all' and 'collapse_all'.
    """

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, corner_radius=10, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._columns: List[ColumnSpec] = []
        self._nodes: Dict[str, TreeNode] = {}

        # --- Header ---
        self.lbl_title = ctk.CTkLabel(
            self, text=const.DEFAULT_TITLE, font=ctk.CTkFont(size=18, weight="bold"), anchor="w"
        )
        self.lbl_title.grid(row=0, column=0, sticky="w", padx=10, pady=(10, 5))

        self.btn_toggle = ctk.CTkButton(self, text="", state="disabled")
        self.btn_toggle.grid(row=1, column=0, sticky="w", padx=10, pady=(0, 10))

        # --- Grid ---
        container = ctk.CTkFrame(self)
        container.grid(row=2, column=0, sticky="nsew", padx=10)
        container.grid_columnconfigure(0, weight=1)
        container.grid_rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(container, selectmode="browse")
        self.tree.grid(row=0, column=0, sticky="nsew")
        scroll = ttk.Scrollbar(container, orient="vertical", command=self.tree.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        self.tree.configure(yscrollcommand=scroll.set)
        self.tree.tag_configure(_CURRENT_TAG, font=("TkDefaultFont", 10, "bold"))
        self.tree.bind("<Double-1>", self._on_double_click)

        # --- Status ---
        self.lbl_status = ctk.CTkLabel(self, text="", anchor="w", text_color="gray")
        self.lbl_status.grid(row=3, column=0, sticky="ew", padx=10, pady=(5, 0))

        self.lbl_error = ctk.CTkLabel(self, text="", anchor="w", text_color="#E04F5F")
        self.lbl_error.grid(row=4, column=0, sticky="ew", padx=10, pady=(0, 10))

    # ==========================================================================
    # PUBLIC UPDATE METHODS (Called by Controllers)
    # ==========================================================================

    def load(self, columns: Sequence[ColumnSpec], forest: Forest) -> None:
        """
        Replace the grid contents with a freshly built forest.

        Args:
            columns: Grid columns in display order.
            forest: Root nodes to render, collapsed.
        """
        self._columns = list(columns)
        self._nodes = {}
        self.tree.delete(*self.tree.get_children())

        extra_ids = [f"c{i}" for i in range(1, len(self._columns))]
        self.tree.configure(columns=extra_ids)

        first_label = self._columns[0].label if self._columns else const.ID_FIELD
        self.tree.heading("#0", text=first_label, anchor="w")
        self.tree.column("#0", width=260, stretch=True)
        for col_id, spec in zip(extra_ids, self._columns[1:]):
            self.tree.heading(col_id, text=spec.label, anchor="w")
            self.tree.column(col_id, width=180, stretch=True)

        self._insert_level("", forest)
        self.lbl_status.configure(
            text="" if forest else i18n.t("gui.grid.empty")
        )
        logger.debug(f"UI: Tree grid loaded with {len(self._nodes)} rows.")

    def expand_all(self) -> None:
        self._set_open_state(True)

    def collapse_all(self) -> None:
        self._set_open_state(False)

    def set_title(self, title: str) -> None:
        self.lbl_title.configure(text=title)

    def set_toggle(self, label: str, variant: str, enabled: bool = True) -> None:
        """Mirror the expand toggle state onto the button."""
        self.btn_toggle.configure(
            text=label,
            fg_color=_VARIANT_COLORS.get(variant, _VARIANT_COLORS[const.BRAND_VARIANT]),
            state="normal" if enabled else "disabled",
        )

    def show_loading(self) -> None:
        self.lbl_status.configure(text=i18n.t("gui.grid.loading"))
        self.lbl_error.configure(text="")

    def show_error(self, error: str) -> None:
        self.lbl_status.configure(text="")
        self.lbl_error.configure(text=i18n.t("gui.grid.error", error=error) if error else "")

    # ==========================================================================
    # PRIVATE HELPERS
    # ==========================================================================

    def _insert_level(self, parent_iid: str, nodes: Forest) -> None:
        for node in nodes:
            values = [self._cell(node, spec) for spec in self._columns]
            text = values[0] if values else str(node.get(const.ID_FIELD, ""))
            tags = ()
            if node.get(const.CURRENT_RECORD_FIELD):
                text = _CURRENT_PREFIX + text
                tags = (_CURRENT_TAG,)

            iid = self.tree.insert(parent_iid, "end", text=text, values=values[1:], tags=tags, open=False)
            self._nodes[iid] = node

            children = node.get(const.CHILDREN_KEY)
            if children:
                self._insert_level(iid, children)

    def _set_open_state(self, is_open: bool) -> None:
        for iid in self._nodes:
            if self.tree.get_children(iid):
                self.tree.item(iid, open=is_open)

    @staticmethod
    def _cell(node: TreeNode, spec: ColumnSpec) -> str:
        value = node.get(spec.display_key())
        return "" if value is None else str(value)

    def _on_double_click(self, event: tk.Event) -> None:
        iid = self.tree.identify_row(event.y)
        col = self.tree.identify_column(event.x)
        if not iid or not col:
            return

        index = int(col.lstrip("#") or 0)
        spec: Optional[ColumnSpec] = self._columns[index] if index < len(self._columns) else None
        if spec is None or not spec.is_link:
            return

        url = self._nodes.get(iid, {}).get(spec.link_field_name or "")
        if url:
            logger.info(f"UI: Opening record link {url}")
            webbrowser.open(url)
