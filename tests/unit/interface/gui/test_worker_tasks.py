from __future__ import annotations

"""
Unit tests for the GUI background tasks.

Verifies that each task reports exactly once, with either its payload or
the raised exception.
"""

from unittest.mock import MagicMock

from hierarchygrid.domain.errors import MetadataFetchError
from hierarchygrid.interface.gui.threads import fetch_object_info_task, fetch_records_task


def test_object_info_task_success(object_fields) -> None:
    """TC-01: The field mapping is passed to the callback."""
    provider = MagicMock()
    provider.fetch_object_info.return_value = object_fields
    callback = MagicMock()

    fetch_object_info_task(provider, "Account", callback)

    callback.assert_called_once_with(object_fields, None)


def test_object_info_task_failure() -> None:
    """TC-02: Exceptions are handed to the callback instead of escaping."""
    provider = MagicMock()
    error = MetadataFetchError("offline")
    provider.fetch_object_info.side_effect = error
    callback = MagicMock()

    fetch_object_info_task(provider, "Account", callback)

    callback.assert_called_once_with(None, error)


def test_records_task_forwards_query(sample_records) -> None:
    """TC-03: Query arguments reach the provider unchanged."""
    provider = MagicMock()
    provider.fetch_records.return_value = sample_records
    callback = MagicMock()

    fetch_records_task(provider, "Account", "1", ["Name"], "ParentId", ("Parent.Name",), callback)

    provider.fetch_records.assert_called_once_with(
        "Account", "1", ["Name"], "ParentId", relationship_paths=["Parent.Name"]
    )
    callback.assert_called_once_with(sample_records, None)


def test_records_task_unexpected_error() -> None:
    """TC-04: Even unexpected failures are reported through the callback."""
    provider = MagicMock()
    provider.fetch_records.side_effect = RuntimeError("socket closed")
    callback = MagicMock()

    fetch_records_task(provider, "Account", "1", [], "ParentId", [], callback)

    payload, error = callback.call_args.args
    assert payload is None
    assert isinstance(error, RuntimeError)
