from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for field metadata, record sets and configuration.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from hierarchygrid.domain.grid_models import FieldDescriptor  # noqa: E402

ORIGIN = "https://example.my.site.com"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def object_info_payload() -> Dict[str, Any]:
    """
    Return an object-info payload as served by the metadata endpoint.

    Returns:
        Dict[str, Any]: Payload with a 'fields' mapping.
    """
    return {
        "apiName": "Account",
        "fields": {
            "Name": {"apiName": "Name", "label": "Account Name", "dataType": "String"},
            "ParentId": {
                "apiName": "ParentId",
                "label": "Parent Account",
                "dataType": "Reference",
                "relationshipName": "Parent",
                "referenceToInfos": [{"apiName": "Account", "nameFields": ["Name"]}],
            },
            "Industry": {"apiName": "Industry", "label": "Industry", "dataType": "Picklist"},
            "OwnerId": {
                "apiName": "OwnerId",
                "label": "Owner",
                "dataType": "Reference",
                "relationshipName": "Owner",
                "referenceToInfos": [{"apiName": "User", "nameFields": ["Name"]}],
            },
        },
    }


@pytest.fixture
def object_fields(object_info_payload: Dict[str, Any]) -> Dict[str, FieldDescriptor]:
    """Field descriptors keyed by API name."""
    return {
        name: FieldDescriptor.from_object_info(name, raw)
        for name, raw in object_info_payload["fields"].items()
    }


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """
    Return a flat record set: one root, two children, one grandchild.

    Structure:
    1 (A)
      2 (B)
        4 (D)
      3 (C)
    """
    return [
        {"Id": "1", "Name": "A", "ParentId": None},
        {"Id": "2", "Name": "B", "ParentId": "1", "Parent": {"Name": "A"}},
        {"Id": "3", "Name": "C", "ParentId": "1", "Parent": {"Name": "A"}},
        {"Id": "4", "Name": "D", "ParentId": "2", "Parent": {"Name": "B"}},
    ]


@pytest.fixture
def grid_config() -> Dict[str, Any]:
    """
    Return a normalized widget configuration.

    Returns:
        Dict[str, Any]: Configuration as produced by validate_config.
    """
    return {
        "record_id": "1",
        "object_api_name": "Account",
        "parent_field_api_name": "ParentId",
        "title": "Account Hierarchy",
        "field_list": ["Name", "ParentId"],
        "instance_url": ORIGIN,
        "api_version": "59.0",
        "access_token": "token-123",
        "metadata_file": "",
        "records_file": "",
        "expand_on_load": False,
    }
