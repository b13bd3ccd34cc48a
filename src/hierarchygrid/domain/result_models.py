from __future__ import annotations

"""
Hierarchy Load Result Models.

Defines the result object exchanged between the loading service and the
interface layers (CLI/GUI), plus its factory functions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from hierarchygrid.domain.grid_models import Forest

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HierarchyResult:
    """
    Outcome of a complete metadata + record load.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        title: Display title of the widget.
        record_id: Identifier of the originating record.
        object_api_name: Entity type that was queried.
        columns: Serialized grid column definitions.
        tree_data: Forest of decorated nodes.
        record_count: Number of fetched records.
    """
    ok: bool
    error: str

    title: str
    record_id: str
    object_api_name: str

    columns: List[Dict[str, Any]] = field(default_factory=list)
    tree_data: Forest = field(default_factory=list)
    record_count: int = 0

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        cfg: Dict[str, Any],
        columns: List[Dict[str, Any]],
        tree_data: Forest,
        record_count: int,
) -> HierarchyResult:
    """Build a successful result from the active configuration."""
    return HierarchyResult(
        ok=True,
        error="",
        title=str(cfg.get("title", "")),
        record_id=str(cfg.get("record_id", "")),
        object_api_name=str(cfg.get("object_api_name", "")),
        columns=columns,
        tree_data=tree_data,
        record_count=record_count,
    )


def create_error_result(error: str, cfg: Dict[str, Any] | None = None) -> HierarchyResult:
    """Build a failure result, tolerating a missing configuration."""
    cfg = cfg or {}
    return HierarchyResult(
        ok=False,
        error=error,
        title=str(cfg.get("title", "")),
        record_id=str(cfg.get("record_id", "")),
        object_api_name=str(cfg.get("object_api_name", "")),
    )
