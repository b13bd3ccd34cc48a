from __future__ import annotations

"""
Unit tests for the Expand/Collapse Toggle.

Verifies the two-state label/variant cycle and the bulk operations invoked
on the rendering surface.
"""

from unittest.mock import MagicMock

from hierarchygrid.core.grid.toggle import ExpandToggle


def test_initial_state() -> None:
    """TC-01: The toggle starts in the 'Expand All' / 'Brand' state."""
    toggle = ExpandToggle()

    assert toggle.button_msg == "Expand All"
    assert toggle.button_variant == "Brand"
    assert toggle.button_label == "Click Here to Expand All Rows"
    assert toggle.is_expanded is False


def test_first_toggle_expands() -> None:
    """TC-02: Toggling from the initial state expands every row."""
    surface = MagicMock()
    toggle = ExpandToggle()

    toggle.toggle(surface)

    surface.expand_all.assert_called_once_with()
    surface.collapse_all.assert_not_called()
    assert toggle.button_label == "Click Here to Collapse All Rows"
    assert toggle.button_variant == "Neutral"


def test_double_toggle_restores_state() -> None:
    """TC-03: Two toggles return label and variant to their original values."""
    surface = MagicMock()
    toggle = ExpandToggle()
    original = (toggle.button_label, toggle.button_variant)

    toggle.toggle(surface)
    toggle.toggle(surface)

    assert (toggle.button_label, toggle.button_variant) == original
    surface.expand_all.assert_called_once_with()
    surface.collapse_all.assert_called_once_with()


def test_toggle_without_surface_is_noop() -> None:
    """TC-04: No rendered grid means no state change."""
    toggle = ExpandToggle()

    toggle.toggle(None)

    assert toggle.button_msg == "Expand All"
    assert toggle.button_variant == "Brand"
