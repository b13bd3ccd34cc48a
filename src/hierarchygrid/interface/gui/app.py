from __future__ import annotations

"""
GUI Entrypoint and Application Lifecycle Orchestrator.

Initializes the CustomTkinter environment, restores the last session,
assembles the form and tree grid views and binds them to the
GridController. The session is persisted when the window closes.
"""

import logging

from hierarchygrid.domain import config as cfg
from hierarchygrid.domain import constants as const
from hierarchygrid.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    shutdown_logging,
)
from hierarchygrid.interface.gui.components.config_form import ConfigFormFrame
from hierarchygrid.interface.gui.components.main_window import create_main_window
from hierarchygrid.interface.gui.components.tree_grid import TreeGridFrame
from hierarchygrid.interface.gui.controllers.grid_controller import GridController

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# MAIN APPLICATION LOOP
# -----------------------------------------------------------------------------

def main() -> None:
    """
    Initialize and launch the Graphical User Interface.
    """
    # PHASE 1: Diagnostics
    configure_logging(LoggingConfig.for_gui(get_default_log_path()))
    logger.info(f"GUI Lifecycle: Initializing v{const.CURRENT_CONFIG_VERSION}")

    # PHASE 2: Persistent state recovery
    try:
        app_state = cfg.load_app_state()
        config = cfg.load_config()
    except Exception as e:
        logger.error(f"State Error: Failure during config deserialization: {e}")
        app_state = cfg.get_default_app_state()
        config = cfg.get_default_config()

    # PHASE 3: View construction
    app = create_main_window(app_state.get("app_settings", {}))

    form_frame = ConfigFormFrame(app)
    form_frame.grid(row=0, column=0, sticky="nsew")

    grid_frame = TreeGridFrame(app)
    grid_frame.grid(row=0, column=1, sticky="nsew", padx=20, pady=20)

    # PHASE 4: Controller binding
    controller = GridController(app, config, app_state)
    controller.register_views(form_frame, grid_frame)
    controller.sync_view_from_config()

    form_frame.btn_load.configure(command=controller.load_hierarchy)
    grid_frame.btn_toggle.configure(command=controller.on_toggle)
    grid_frame.set_toggle(controller.toggle.button_label, controller.toggle.button_variant, enabled=False)

    # PHASE 5: Lifecycle finalization
    def on_closing() -> None:
        """Persist session state and terminate the process."""
        controller.sync_config_from_view()
        app_state["last_session"] = config
        cfg.save_app_state(app_state)
        logger.info("GUI Lifecycle: Window closed.")
        shutdown_logging()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_closing)

    app.mainloop()


if __name__ == "__main__":
    main()
