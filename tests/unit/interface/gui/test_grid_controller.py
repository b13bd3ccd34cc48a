from __future__ import annotations

"""
Unit tests for the Tree Grid Controller.

The Tk root and the views are mocked; 'app.after' runs callbacks inline and
worker threads are replaced by direct calls so the flow is deterministic.
"""

from typing import Any, Dict, List
from unittest.mock import MagicMock, patch

import pytest

from hierarchygrid.domain.errors import RecordFetchError
from hierarchygrid.interface.gui.controllers.grid_controller import GridController


def _inline_app() -> MagicMock:
    app = MagicMock()
    app.after.side_effect = lambda _delay, fn: fn()
    return app


@pytest.fixture
def controller(grid_config: Dict[str, Any]) -> GridController:
    ctrl = GridController(_inline_app(), dict(grid_config), {})
    form = MagicMock()
    form.entries.return_value = []
    ctrl.register_views(form, MagicMock())
    return ctrl


def _run_inline(target, *args) -> None:
    target(*args)


def test_load_flow_renders_forest(controller, object_fields, sample_records) -> None:
    """TC-01: Metadata then records end in a loaded grid."""
    metadata, records = MagicMock(), MagicMock()
    metadata.fetch_object_info.return_value = object_fields
    records.fetch_records.return_value = sample_records

    target = "hierarchygrid.interface.gui.controllers.grid_controller.build_providers"
    with patch(target, return_value=(metadata, records)), \
            patch.object(GridController, "_start_worker", staticmethod(_run_inline)):
        controller.load_hierarchy()

    records.fetch_records.assert_called_once()
    assert records.fetch_records.call_args.kwargs["relationship_paths"] == ["Parent.Name"]

    columns, forest = controller.grid_view.load.call_args.args
    assert [c.field_name for c in columns] == ["Name_link", "ParentId_link"]
    assert forest[0]["Id"] == "1"
    controller.grid_view.show_error.assert_called_with("")
    controller.form_view.btn_load.configure.assert_called_with(state="normal")


def test_object_info_is_cached_per_type(controller, object_fields, sample_records) -> None:
    """TC-02: A second load of the same entity type skips the metadata call."""
    metadata, records = MagicMock(), MagicMock()
    metadata.fetch_object_info.return_value = object_fields
    records.fetch_records.return_value = sample_records

    target = "hierarchygrid.interface.gui.controllers.grid_controller.build_providers"
    with patch(target, return_value=(metadata, records)), \
            patch.object(GridController, "_start_worker", staticmethod(_run_inline)):
        controller.load_hierarchy()
        controller.load_hierarchy()

    assert metadata.fetch_object_info.call_count == 1
    assert records.fetch_records.call_count == 2


def test_object_info_cache_follows_source(controller, object_fields, sample_records) -> None:
    """TC-02b: Switching org or metadata file fetches the descriptors again."""
    metadata, records = MagicMock(), MagicMock()
    metadata.fetch_object_info.return_value = object_fields
    records.fetch_records.return_value = sample_records

    target = "hierarchygrid.interface.gui.controllers.grid_controller.build_providers"
    with patch(target, return_value=(metadata, records)), \
            patch.object(GridController, "_start_worker", staticmethod(_run_inline)):
        controller.load_hierarchy()
        controller.config["instance_url"] = "https://sandbox.example.my.site.com"
        controller.load_hierarchy()
        controller.config["instance_url"] = "https://example.my.site.com"
        controller.load_hierarchy()

    assert metadata.fetch_object_info.call_count == 2
    assert records.fetch_records.call_count == 3


def test_record_failure_is_displayed(controller, object_fields) -> None:
    """TC-03: A fetch error reaches the error label."""
    metadata, records = MagicMock(), MagicMock()
    metadata.fetch_object_info.return_value = object_fields
    records.fetch_records.side_effect = RecordFetchError("denied")

    target = "hierarchygrid.interface.gui.controllers.grid_controller.build_providers"
    with patch(target, return_value=(metadata, records)), \
            patch.object(GridController, "_start_worker", staticmethod(_run_inline)):
        controller.load_hierarchy()

    assert controller.state.error == "denied"
    controller.grid_view.show_error.assert_called_with("denied")


def test_invalid_config_shows_dialog(grid_config) -> None:
    """TC-04: Missing keys abort the load with an error dialog."""
    ctrl = GridController(_inline_app(), dict(grid_config, record_id=""), {})

    with patch("hierarchygrid.interface.gui.controllers.grid_controller.mb") as mock_mb:
        ctrl.load_hierarchy()

    mock_mb.showerror.assert_called_once()
    assert ctrl.state is None


def test_stale_completion_is_discarded(controller, sample_records) -> None:
    """TC-05: Results of a superseded load never touch the current state."""
    from hierarchygrid.core.services.hierarchy import HierarchyGrid

    old = HierarchyGrid(controller.config)
    controller.state = HierarchyGrid(controller.config)

    controller._apply_records(old, sample_records, None)

    assert controller.state.records_received is False
    controller.grid_view.load.assert_not_called()


def test_toggle_without_data_does_nothing(controller) -> None:
    """TC-06: The toggle keeps its state when nothing is rendered."""
    controller.on_toggle()

    assert controller.toggle.button_msg == "Expand All"
    controller.grid_view.expand_all.assert_not_called()


def test_toggle_expands_rendered_grid(controller, object_fields, sample_records) -> None:
    """TC-07: With data the toggle drives the tree grid and its button."""
    from hierarchygrid.core.services.hierarchy import HierarchyGrid

    controller.state = HierarchyGrid(controller.config)
    controller.state.handle_object_info(object_fields)
    controller.state.handle_records(sample_records)

    controller.on_toggle()

    controller.grid_view.expand_all.assert_called_once_with()
    controller.grid_view.set_toggle.assert_called_with(
        "Click Here to Collapse All Rows", "Neutral", enabled=True
    )


def test_expand_on_load(controller, object_fields, sample_records) -> None:
    """TC-08: The expand option presses the toggle once after rendering."""
    from hierarchygrid.core.services.hierarchy import HierarchyGrid

    controller.state = HierarchyGrid(dict(controller.config, expand_on_load=True))
    controller.state.handle_records(sample_records)
    controller.refresh_view()

    controller.grid_view.expand_all.assert_called_once_with()
    assert controller.toggle.is_expanded is True


def test_view_sync_round_trip(grid_config) -> None:
    """TC-09: Form entries are filled from and read back into the config."""
    entries: List[MagicMock] = [MagicMock(), MagicMock()]
    form = MagicMock()
    form.entries.return_value = [("record_id", entries[0]), ("field_list", entries[1])]

    ctrl = GridController(_inline_app(), dict(grid_config), {})
    ctrl.register_views(form, MagicMock())
    ctrl.sync_view_from_config()

    entries[0].insert.assert_called_with(0, "1")
    entries[1].insert.assert_called_with(0, "Name, ParentId")

    entries[0].get.return_value = "002"
    entries[1].get.return_value = "Name"
    ctrl.sync_config_from_view()

    assert ctrl.config["record_id"] == "002"
    assert ctrl.config["field_list"] == "Name"
