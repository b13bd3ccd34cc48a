from __future__ import annotations

"""
Tree Grid Controller.

Bridges the configuration form and the tree grid with the HierarchyGrid
state holder. Collaborator calls run on daemon threads; their completions
are marshaled back onto the Tk main loop with 'app.after' before touching
any state. Field metadata is cached per source and entity type for the session.
"""

import logging
import threading
import tkinter.messagebox as mb
from typing import Any, Callable, Dict, Optional, Tuple

from hierarchygrid.core.grid.toggle import ExpandToggle
from hierarchygrid.core.grid.validator import ensure_fetchable, validate_config
from hierarchygrid.core.services.hierarchy import HierarchyGrid
from hierarchygrid.core.services.providers import (
    MetadataProvider,
    RecordProvider,
    build_providers,
)
from hierarchygrid.domain.errors import ConfigurationError
from hierarchygrid.domain.grid_models import FieldDescriptor
from hierarchygrid.interface.gui import threads
from hierarchygrid.utils.i18n import i18n

logger = logging.getLogger(__name__)


class GridController:
    """
    Controller for the single tree grid view.

    Attributes:
        app: Root window, used to schedule work on the main loop.
        config: Active session configuration (mutated by form sync).
        state: Hierarchy state of the latest load, None before the first one.
        toggle: Expand/collapse button state.
    """

    def __init__(self, app: Any, config: Dict[str, Any], app_state: Dict[str, Any]):
        self.app = app
        self.config = config
        self.app_state = app_state

        self.form_view: Any = None
        self.grid_view: Any = None

        self.state: Optional[HierarchyGrid] = None
        self.toggle = ExpandToggle()

        self._providers: Optional[Tuple[MetadataProvider, RecordProvider]] = None
        self._records_requested = False
        self._object_info_cache: Dict[Tuple[str, str, str], Dict[str, FieldDescriptor]] = {}

    # -------------------------------------------------------------------------
    # VIEW REGISTRATION
    # -------------------------------------------------------------------------

    def register_views(self, form: Any, grid: Any) -> None:
        self.form_view = form
        self.grid_view = grid

    # -------------------------------------------------------------------------
    # CONFIGURATION SYNCHRONIZATION
    # -------------------------------------------------------------------------

    def sync_view_from_config(self) -> None:
        """Populate the form entries from the configuration."""
        if not self.form_view:
            return

        for key, widget in self.form_view.entries():
            value = self.config.get(key, "")
            if isinstance(value, (list, tuple)):
                value = ", ".join(value)
            widget.delete(0, "end")
            widget.insert(0, str(value or ""))

        if self.grid_view:
            self.grid_view.set_title(self.config.get("title", ""))

    def sync_config_from_view(self) -> None:
        """Copy the form entries back into the configuration."""
        if not self.form_view:
            return
        for key, widget in self.form_view.entries():
            self.config[key] = widget.get()

    # -------------------------------------------------------------------------
    # LOADING LIFECYCLE
    # -------------------------------------------------------------------------

    def load_hierarchy(self) -> None:
        """
        Start a fresh load of the configured hierarchy.

        Metadata is requested first so the record query can select the
        relationship display fields; a cached description skips that call.
        """
        self.sync_config_from_view()
        clean_conf, warnings = validate_config(self.config, strict=False)
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

        try:
            ensure_fetchable(clean_conf)
        except ConfigurationError as e:
            mb.showerror(i18n.t("gui.dialogs.error_title"), str(e))
            return

        self.config.update(clean_conf)
        self.state = HierarchyGrid(clean_conf)
        self.toggle = ExpandToggle()
        self._providers = build_providers(clean_conf)
        self._records_requested = False

        if self.grid_view:
            self.grid_view.set_title(clean_conf["title"])
            self.grid_view.set_toggle(self.toggle.button_label, self.toggle.button_variant, enabled=False)
            self.grid_view.show_loading()
        if self.form_view:
            self.form_view.btn_load.configure(state="disabled")

        object_name = clean_conf["object_api_name"]
        cached = self._object_info_cache.get(self._cache_key(clean_conf))
        if cached is not None:
            logger.debug(f"Using cached object info for {object_name}.")
            self.state.handle_object_info(cached)
            self._request_records(self.state)
            return

        metadata_provider, _ = self._providers
        self._start_worker(
            threads.fetch_object_info_task,
            metadata_provider,
            object_name,
            self._marshal(self._apply_object_info, self.state),
        )

    def on_toggle(self) -> None:
        """Expand or collapse every row of the rendered grid."""
        surface = self.grid_view if (self.state and self.state.has_data) else None
        self.toggle.toggle(surface)
        if self.grid_view:
            self.grid_view.set_toggle(
                self.toggle.button_label,
                self.toggle.button_variant,
                enabled=surface is not None,
            )

    # -------------------------------------------------------------------------
    # COMPLETION HANDLERS (Main Loop)
    # -------------------------------------------------------------------------

    def _apply_object_info(
            self,
            state: HierarchyGrid,
            fields: Optional[Dict[str, FieldDescriptor]],
            error: Optional[BaseException],
    ) -> None:
        if state is not self.state:
            logger.debug("Discarding object info of a superseded load.")
            return

        state.handle_object_info(fields, error)
        if fields and error is None:
            self._object_info_cache[self._cache_key(state.config)] = fields

        if state.records_received:
            self.refresh_view()
        elif not self._records_requested:
            self._request_records(state)

    def _apply_records(
            self,
            state: HierarchyGrid,
            records: Optional[list],
            error: Optional[BaseException],
    ) -> None:
        if state is not self.state:
            logger.debug("Discarding records of a superseded load.")
            return

        state.handle_records(records, error)
        if self.form_view:
            self.form_view.btn_load.configure(state="normal")
        self.refresh_view()

    def refresh_view(self) -> None:
        """Push the current state onto the tree grid."""
        if not self.grid_view or self.state is None:
            return

        state = self.state
        self.grid_view.load(state.grid_columns, state.tree_data)
        self.grid_view.show_error(state.error)

        self.toggle = ExpandToggle()
        if state.has_data and state.config.get("expand_on_load"):
            self.toggle.toggle(self.grid_view)
        self.grid_view.set_toggle(
            self.toggle.button_label,
            self.toggle.button_variant,
            enabled=state.has_data,
        )

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _request_records(self, state: HierarchyGrid) -> None:
        if self._providers is None:
            return
        _, record_provider = self._providers
        self._records_requested = True
        cfg = state.config
        self._start_worker(
            threads.fetch_records_task,
            record_provider,
            cfg["object_api_name"],
            cfg["record_id"],
            cfg["field_list"],
            cfg["parent_field_api_name"],
            state.relationship_paths,
            self._marshal(self._apply_records, state),
        )

    def _marshal(self, handler: Callable[..., None], state: HierarchyGrid) -> Callable[[Any, Any], None]:
        """Wrap a main-loop handler into a thread-safe worker callback."""
        def callback(payload: Any, error: Optional[BaseException]) -> None:
            self.app.after(0, lambda: handler(state, payload, error))
        return callback

    @staticmethod
    def _cache_key(config: Dict[str, Any]) -> Tuple[str, str, str]:
        """Object info is only reusable for the same org or snapshot file."""
        return (
            config.get("instance_url") or "",
            config.get("metadata_file") or "",
            config["object_api_name"],
        )

    @staticmethod
    def _start_worker(target: Callable[..., None], *args: Any) -> None:
        threading.Thread(target=target, args=args, daemon=True).start()
