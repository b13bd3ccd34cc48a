from __future__ import annotations

"""
Hierarchy Tree Builder.

Reshapes the flat record list returned by the record fetch into a forest of
nested nodes. Each node is a decorated copy of its record carrying the
hyperlink and display keys expected by the grid columns.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from hierarchygrid.domain import constants as const
from hierarchygrid.domain.grid_models import Forest, RawRecord, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_deep_link(origin: str, record_id: Any) -> str:
    """Join the link origin and a record identifier."""
    return f"{origin}/{record_id}"


def build_forest(
        records: Optional[Iterable[RawRecord]],
        reference_paths: Mapping[str, str],
        parent_field: str,
        root_record_id: Optional[str],
        origin: str = "",
) -> Forest:
    """
    Build a fresh forest from a flat record list.

    A record is nested under the fetched record its parent field points to;
    every other record (empty parent, parent outside the fetch set, parent
    pointing to itself) is a root. Records caught in a parent cycle are
    unreachable from those roots; the first of each cycle in input order is
    detached from its parent and promoted to a root. Input order is kept at
    every level.

    Args:
        records: Flat records, each with an 'Id' and the parent field.
        reference_paths: Reference field name -> '<relationship>.<field>'.
        parent_field: Parent reference field API name.
        root_record_id: Identifier of the originating record.
        origin: Deep-link origin.

    Returns:
        Forest: Root nodes. Nodes without children have no children key.
    """
    record_list = list(records or [])
    node_map: Dict[Any, TreeNode] = {}
    ordered: List[TreeNode] = []

    # 1. Decoration pass
    for rec in record_list:
        node = _decorate(rec, reference_paths, root_record_id, origin)
        rec_id = node.get(const.ID_FIELD)
        if rec_id:
            if rec_id in node_map:
                logger.warning(f"Tree builder: duplicate record '{rec_id}' ignored.")
                continue
            node_map[rec_id] = node
        ordered.append(node)

    # 2. Linking pass
    forest: Forest = []
    for node in ordered:
        parent_id = node.get(parent_field)
        parent = node_map.get(parent_id) if parent_id else None

        if parent is None or parent is node:
            forest.append(node)
            continue

        parent.setdefault(const.CHILDREN_KEY, []).append(node)

    # 3. Cycle recovery
    _promote_unreached(ordered, node_map, parent_field, forest)

    logger.debug(f"Tree builder: {len(ordered)} nodes arranged under {len(forest)} roots.")
    return forest


def iter_nodes(forest: Forest) -> Iterable[TreeNode]:
    """Yield every node of a forest depth-first, in display order."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.get(const.CHILDREN_KEY) or []))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _decorate(
        rec: RawRecord,
        reference_paths: Mapping[str, str],
        root_record_id: Optional[str],
        origin: str,
) -> TreeNode:
    """Copy a record and inject link, display and marker keys."""
    node: TreeNode = dict(rec)
    # Children are derived here, never taken from the payload
    node.pop(const.CHILDREN_KEY, None)

    for field, path in reference_paths.items():
        rel_obj, _, rel_field = path.partition(".")
        value = node.get(field)
        node[f"{field}{const.LINK_SUFFIX}"] = build_deep_link(origin, value) if value else ""

        related = node.get(rel_obj)
        display = related.get(rel_field) if isinstance(related, Mapping) else None
        node[f"{rel_obj}{const.NAME_FIELD}"] = display or ""

    rec_id = node.get(const.ID_FIELD)
    if node.get(const.NAME_FIELD):
        link = build_deep_link(origin, rec_id)
        node[const.NAME_LINK_FIELD] = link
        node[const.RECORD_ID_LINK_FIELD] = link

    if rec_id is not None and rec_id == root_record_id:
        node[const.CURRENT_RECORD_FIELD] = const.CURRENT_RECORD_ICON

    return node


def _promote_unreached(
        ordered: List[TreeNode],
        node_map: Dict[Any, TreeNode],
        parent_field: str,
        forest: Forest,
) -> None:
    """Break parent cycles so every node hangs below some root."""
    reached = {id(n) for n in iter_nodes(forest)}
    for node in ordered:
        if id(node) in reached:
            continue

        parent = node_map[node.get(parent_field)]
        siblings = [n for n in parent[const.CHILDREN_KEY] if n is not node]
        if siblings:
            parent[const.CHILDREN_KEY] = siblings
        else:
            del parent[const.CHILDREN_KEY]

        logger.warning(
            f"Tree builder: parent cycle at record '{node.get(const.ID_FIELD)}', promoted to root."
        )
        forest.append(node)
        reached.update(id(n) for n in iter_nodes([node]))
