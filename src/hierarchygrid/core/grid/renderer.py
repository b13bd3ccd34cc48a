from __future__ import annotations

"""
Text Tree Grid Renderer.

Converts a forest into an ASCII tree grid for terminal output. Acts as a
rendering surface for the expand toggle: collapsed output lists root rows
only, expanded output walks every level.
"""

from typing import Any, List, Sequence

from hierarchygrid.domain import constants as const
from hierarchygrid.domain.grid_models import ColumnSpec, Forest, TreeNode

CELL_SEPARATOR = " | "
CURRENT_RECORD_MARK = "*"


class TextTreeGrid:
    """
    Terminal tree grid.

    Attributes:
        columns: Grid columns driving the cell values.
        forest: Root nodes to render.
        expanded: Whether nested rows are visible.
    """

    def __init__(self, columns: Sequence[ColumnSpec], forest: Forest, expanded: bool = False):
        self.columns = list(columns)
        self.forest = forest
        self.expanded = expanded

    def expand_all(self) -> None:
        self.expanded = True

    def collapse_all(self) -> None:
        self.expanded = False

    def render(self) -> List[str]:
        """
        Render the header and every visible row.

        Returns:
            List[str]: Visual lines of the grid.
        """
        lines: List[str] = [self._header()]
        if not self.expanded:
            for node in self.forest:
                lines.append(self._row(node, prefix="", connector=""))
            return lines

        render_rows(self.forest, lines, self._row, prefix="")
        return lines

    # -------------------------------------------------------------------------
    # ROW FORMATTING
    # -------------------------------------------------------------------------

    def _header(self) -> str:
        labels = [c.label for c in self.columns] or [const.ID_FIELD]
        return "    " + CELL_SEPARATOR.join(labels)

    def _row(self, node: TreeNode, prefix: str, connector: str) -> str:
        children = node.get(const.CHILDREN_KEY)
        if not children:
            state = "   "
        else:
            state = "[-]" if self.expanded else "[+]"

        cells = [_cell_text(node.get(c.display_key())) for c in self.columns]
        if not cells:
            cells = [_cell_text(node.get(const.ID_FIELD))]
        if node.get(const.CURRENT_RECORD_FIELD):
            cells[0] = f"{CURRENT_RECORD_MARK} {cells[0]}"

        return f"{prefix}{connector}{state} {CELL_SEPARATOR.join(cells)}"


def render_rows(forest: Forest, lines: List[str], row_fn: Any, prefix: str = "") -> None:
    """
    Recursively append one line per node using tree connectors.

    Args:
        forest: Nodes of the current level.
        lines: Accumulator list for output strings.
        row_fn: Callable(node, prefix, connector) returning a line.
        prefix: Indentation prefix for the current recursion level.
    """
    total = len(forest)
    for i, node in enumerate(forest):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(row_fn(node, prefix, connector))

        children = node.get(const.CHILDREN_KEY)
        if children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_rows(children, lines, row_fn, prefix=new_prefix)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
