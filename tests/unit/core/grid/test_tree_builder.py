from __future__ import annotations

"""
Unit tests for the Hierarchy Tree Builder.

Verifies:
1. Nesting of records under their fetched parent.
2. Root placement for empty, unknown and self-referencing parents.
3. Link and display decoration driven by the reference path mapping.
4. Exactly-once placement of every record.
"""

from typing import Any, Dict, List

from hierarchygrid.core.grid.tree_builder import build_deep_link, build_forest, iter_nodes

ORIGIN = "https://org.example.com"
PATHS = {"ParentId": "Parent.Name"}


def _ids(nodes: List[Dict[str, Any]]) -> List[str]:
    return [n["Id"] for n in nodes]


def test_worked_example() -> None:
    """TC-01: Two-record hierarchy produces the documented forest."""
    records = [
        {"Id": "1", "Name": "A", "ParentId": None},
        {"Id": "2", "Name": "B", "ParentId": "1", "Parent": {"Name": "A"}},
    ]
    forest = build_forest(records, PATHS, "ParentId", "1", origin=ORIGIN)

    assert len(forest) == 1
    root = forest[0]
    assert root["Id"] == "1"
    assert root["isCurrentRecord"] == "standard:choice"
    assert root["Name_link"] == f"{ORIGIN}/1"
    assert root["RecordId_link"] == f"{ORIGIN}/1"
    assert root["ParentId_link"] == ""
    assert root["ParentName"] == ""

    child = root["children"][0]
    assert child["Id"] == "2"
    assert child["ParentId_link"] == f"{ORIGIN}/1"
    assert child["ParentName"] == "A"
    assert child["Name_link"] == f"{ORIGIN}/2"
    assert "isCurrentRecord" not in child
    assert "children" not in child


def test_nesting_keeps_input_order(sample_records: List[Dict[str, Any]]) -> None:
    """TC-02: Children are attached to their exact parent in input order."""
    forest = build_forest(sample_records, PATHS, "ParentId", "1", origin=ORIGIN)

    assert _ids(forest) == ["1"]
    assert _ids(forest[0]["children"]) == ["2", "3"]
    assert _ids(forest[0]["children"][0]["children"]) == ["4"]
    assert "children" not in forest[0]["children"][1]


def test_every_record_placed_exactly_once(sample_records: List[Dict[str, Any]]) -> None:
    """TC-03: Roots plus all nested nodes cover each input Id once."""
    records = sample_records + [
        {"Id": "5", "Name": "E", "ParentId": "missing"},
        {"Id": "6", "Name": "F"},
    ]
    forest = build_forest(records, PATHS, "ParentId", "1", origin=ORIGIN)

    placed = [n["Id"] for n in iter_nodes(forest)]
    assert sorted(placed) == sorted(r["Id"] for r in records)
    assert len(placed) == len(set(placed))


def test_orphans_and_empty_parents_are_roots() -> None:
    """TC-04: Empty, absent or unknown parent values produce roots."""
    records = [
        {"Id": "a", "Name": "A", "ParentId": ""},
        {"Id": "b", "Name": "B"},
        {"Id": "c", "Name": "C", "ParentId": "zzz"},
    ]
    forest = build_forest(records, PATHS, "ParentId", "a", origin=ORIGIN)

    assert _ids(forest) == ["a", "b", "c"]


def test_child_listed_before_parent() -> None:
    """TC-05: Parent lookup does not depend on record order."""
    records = [
        {"Id": "2", "Name": "B", "ParentId": "1"},
        {"Id": "1", "Name": "A", "ParentId": None},
    ]
    forest = build_forest(records, PATHS, "ParentId", "1", origin=ORIGIN)

    assert _ids(forest) == ["1"]
    assert _ids(forest[0]["children"]) == ["2"]


def test_self_parent_is_root() -> None:
    """TC-06: A record pointing to itself is placed at root level."""
    records = [{"Id": "1", "Name": "A", "ParentId": "1"}]
    forest = build_forest(records, PATHS, "ParentId", "1", origin=ORIGIN)

    assert _ids(forest) == ["1"]
    assert "children" not in forest[0]


def test_duplicate_ids_keep_first_occurrence() -> None:
    """TC-07: A repeated Id is ignored after its first occurrence."""
    records = [
        {"Id": "1", "Name": "A", "ParentId": None},
        {"Id": "1", "Name": "A-dup", "ParentId": None},
    ]
    forest = build_forest(records, {}, "ParentId", "1", origin=ORIGIN)

    assert len(forest) == 1
    assert forest[0]["Name"] == "A"


def test_only_root_record_is_marked(sample_records: List[Dict[str, Any]]) -> None:
    """TC-08: The current-record marker appears on the configured root only."""
    forest = build_forest(sample_records, PATHS, "ParentId", "2", origin=ORIGIN)

    marked = [n["Id"] for n in iter_nodes(forest) if "isCurrentRecord" in n]
    assert marked == ["2"]


def test_missing_relationship_data_degrades_to_empty() -> None:
    """TC-09: A reference value without nested data yields an empty display name."""
    records = [{"Id": "1", "Name": "A", "ParentId": "0", "Parent": None}]
    forest = build_forest(records, PATHS, "ParentId", None, origin=ORIGIN)

    assert forest[0]["ParentId_link"] == f"{ORIGIN}/0"
    assert forest[0]["ParentName"] == ""


def test_blank_name_has_no_record_link() -> None:
    """TC-10: Name links are only set for non-empty names."""
    forest = build_forest([{"Id": "1", "Name": ""}], {}, "ParentId", None, origin=ORIGIN)

    assert "Name_link" not in forest[0]
    assert "RecordId_link" not in forest[0]


def test_input_records_are_not_mutated(sample_records: List[Dict[str, Any]]) -> None:
    """TC-11: Nodes are copies of the fetched records."""
    snapshot = [dict(r) for r in sample_records]
    build_forest(sample_records, PATHS, "ParentId", "1", origin=ORIGIN)

    assert sample_records == snapshot


def test_rebuild_is_idempotent(sample_records: List[Dict[str, Any]]) -> None:
    """TC-12: Building twice from the same input gives the same forest."""
    first = build_forest(sample_records, PATHS, "ParentId", "1", origin=ORIGIN)
    second = build_forest(sample_records, PATHS, "ParentId", "1", origin=ORIGIN)

    assert first == second
    assert len(second) == 1


def test_empty_input_gives_empty_forest() -> None:
    """TC-13: No records, no roots."""
    assert build_forest([], PATHS, "ParentId", "1") == []
    assert build_forest(None, PATHS, "ParentId", "1") == []


def test_deep_link_is_plain_join() -> None:
    """TC-14: Deep links join origin and identifier with a slash."""
    assert build_deep_link(ORIGIN, "001xx") == f"{ORIGIN}/001xx"
    assert build_deep_link("", "001xx") == "/001xx"


def test_two_record_cycle_is_not_dropped() -> None:
    """TC-15: Mutually parented records still appear, the first one as root."""
    records = [{"Id": "1", "ParentId": "2"}, {"Id": "2", "ParentId": "1"}]
    forest = build_forest(records, {}, "ParentId", "1")

    assert _ids(forest) == ["1"]
    assert _ids(forest[0]["children"]) == ["2"]
    assert "children" not in forest[0]["children"][0]
    assert sorted(_ids(list(iter_nodes(forest)))) == ["1", "2"]


def test_root_nested_under_own_descendant() -> None:
    """TC-16: A root whose parent is its grandchild keeps the whole subtree."""
    records = [
        {"Id": "r", "ParentId": "c"},
        {"Id": "a", "ParentId": "r"},
        {"Id": "b", "ParentId": "r"},
        {"Id": "c", "ParentId": "a"},
        {"Id": "x", "ParentId": None},
    ]
    forest = build_forest(records, {}, "ParentId", "r")

    assert _ids(forest) == ["x", "r"]
    placed = _ids(list(iter_nodes(forest)))
    assert sorted(placed) == ["a", "b", "c", "r", "x"]
    assert len(placed) == len(set(placed))
    c_node = forest[1]["children"][0]["children"][0]
    assert c_node["Id"] == "c"
    assert "children" not in c_node
