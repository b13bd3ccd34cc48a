from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies:
1. Default injection and type coercion.
2. Field list parsing and parent field force-inclusion.
3. Pre-flight checks for fetchable configurations.
"""

import os
from typing import Any, Dict
from unittest.mock import patch

import pytest

from hierarchygrid.core.grid.validator import (
    ensure_fetchable,
    normalize_field_list,
    validate_config,
)
from hierarchygrid.domain.errors import ConfigurationError


def test_defaults_are_injected() -> None:
    """TC-01: An empty config resolves to documented defaults."""
    with patch.dict(os.environ, {}, clear=True):
        conf, warnings = validate_config({})

    assert conf["parent_field_api_name"] == "ParentId"
    assert conf["title"] == "Record Hierarchy"
    assert conf["field_list"] == ["Name", "ParentId"]
    assert conf["expand_on_load"] is False
    assert conf["access_token"] == ""
    assert warnings == []


def test_invalid_root_type_falls_back() -> None:
    """TC-02: A non-dict config is replaced by defaults with a warning."""
    conf, warnings = validate_config(["not", "a", "dict"])

    assert conf["field_list"] == ["Name", "ParentId"]
    assert any("Invalid config type" in w for w in warnings)


def test_strict_mode_raises_on_type_mismatch() -> None:
    """TC-03: Strict validation refuses to coerce."""
    with pytest.raises(TypeError):
        validate_config({"record_id": 123}, strict=True)


def test_string_fields_are_trimmed_and_coerced() -> None:
    """TC-04: Whitespace is trimmed and bool-like strings are converted."""
    conf, warnings = validate_config({
        "record_id": "  001  ",
        "instance_url": "https://org.example.com/",
        "expand_on_load": "yes",
    })

    assert conf["record_id"] == "001"
    assert conf["instance_url"] == "https://org.example.com"
    assert conf["expand_on_load"] is True
    assert any("expand_on_load" in w for w in warnings)


def test_custom_parent_field_is_force_included() -> None:
    """TC-05: The parent field is appended when the caller omits it."""
    conf, _ = validate_config({
        "parent_field_api_name": "Manager__c",
        "field_list": ["Name", "Title"],
    })

    assert conf["field_list"] == ["Name", "Title", "Manager__c"]


def test_comma_delimited_field_list() -> None:
    """TC-06: A comma string is split and each segment trimmed."""
    assert normalize_field_list(" Name , Industry,, ParentId ", "ParentId") == [
        "Name", "Industry", "ParentId",
    ]


def test_field_list_duplicates_are_dropped() -> None:
    """TC-07: Repeated names keep their first position only."""
    assert normalize_field_list(["Name", "ParentId", "Name"], "ParentId") == ["Name", "ParentId"]


@pytest.mark.parametrize("value", [None, "", []])
def test_missing_field_list_defaults(value: Any) -> None:
    """TC-08: Omitted field lists default to [Name, parent]."""
    assert normalize_field_list(value, "Boss__c") == ["Name", "Boss__c"]


def test_non_string_items_are_discarded() -> None:
    """TC-09: Invalid items raise a warning in lenient mode."""
    warnings = []
    fields = normalize_field_list(["Name", 7], "ParentId", warnings)

    assert fields == ["Name", "ParentId"]
    assert len(warnings) == 1


def test_access_token_env_fallback() -> None:
    """TC-10: The token is read from the environment when not configured."""
    with patch.dict(os.environ, {"HIERARCHYGRID_ACCESS_TOKEN": " env-token "}):
        conf, _ = validate_config({})

    assert conf["access_token"] == "env-token"


def test_snapshot_paths_are_absolute(tmp_path) -> None:
    """TC-11: Snapshot file paths are normalized."""
    conf, _ = validate_config({"records_file": str(tmp_path / "r.json"), "metadata_file": ""})

    assert os.path.isabs(conf["records_file"])
    assert conf["metadata_file"] == ""


def test_ensure_fetchable_accepts_complete_config(grid_config: Dict[str, Any]) -> None:
    """TC-12: A complete REST configuration passes."""
    ensure_fetchable(grid_config)


def test_ensure_fetchable_lists_missing_keys() -> None:
    """TC-13: All missing keys are reported at once."""
    with pytest.raises(ConfigurationError) as exc:
        ensure_fetchable({"record_id": "", "object_api_name": ""})

    msg = str(exc.value)
    for key in ("record_id", "object_api_name", "instance_url", "access_token"):
        assert key in msg


def test_ensure_fetchable_offline_needs_no_credentials() -> None:
    """TC-14: Two snapshot files replace the REST credentials."""
    ensure_fetchable({
        "record_id": "1",
        "object_api_name": "Account",
        "metadata_file": "/tmp/meta.json",
        "records_file": "/tmp/records.json",
    })
