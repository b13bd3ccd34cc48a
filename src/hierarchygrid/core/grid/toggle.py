from __future__ import annotations

"""
Expand/Collapse Toggle.

Two-state mirror of the bulk expand button: relabels itself and invokes the
matching bulk operation on the rendering surface. No data is recomputed.
"""

import logging
from typing import Optional, Protocol

from hierarchygrid.domain import constants as const

logger = logging.getLogger(__name__)


class ExpandableSurface(Protocol):
    """Rendering surface able to expand or collapse every row at once."""

    def expand_all(self) -> None: ...

    def collapse_all(self) -> None: ...


class ExpandToggle:
    """
    Button state for the expand-all / collapse-all action.

    Starts in the 'Expand All' state with the 'Brand' variant.
    """

    def __init__(self) -> None:
        self.button_msg: str = const.EXPAND_ALL_MSG
        self.button_variant: str = const.BRAND_VARIANT

    @property
    def button_label(self) -> str:
        return const.BUTTON_LABEL_TEMPLATE.format(msg=self.button_msg)

    @property
    def is_expanded(self) -> bool:
        return self.button_msg == const.COLLAPSE_ALL_MSG

    def toggle(self, surface: Optional[ExpandableSurface]) -> None:
        """
        Flip between the expanded and collapsed states.

        The state is left untouched when no surface is rendered yet.

        Args:
            surface: Target tree grid.
        """
        if surface is None:
            logger.debug("Expand toggle ignored: no tree grid rendered.")
            return

        if self.button_msg == const.EXPAND_ALL_MSG:
            surface.expand_all()
            self.button_msg = const.COLLAPSE_ALL_MSG
            self.button_variant = const.NEUTRAL_VARIANT
        else:
            surface.collapse_all()
            self.button_msg = const.EXPAND_ALL_MSG
            self.button_variant = const.BRAND_VARIANT
