from __future__ import annotations

"""
JSON Snapshot Readers.

Offline counterparts of the REST collaborators: read previously exported
object-info and record payloads from disk.
"""

import json
import logging
from typing import Any, Dict, List

from hierarchygrid.domain.errors import MetadataFetchError, RecordFetchError
from hierarchygrid.domain.grid_models import FieldDescriptor, RawRecord
from hierarchygrid.infra.network.metadata_client import parse_object_info
from hierarchygrid.infra.network.records_client import strip_attributes

logger = logging.getLogger(__name__)


def load_object_info_snapshot(path: str) -> Dict[str, FieldDescriptor]:
    """
    Read field metadata from an object-info JSON file.

    Raises:
        MetadataFetchError: If the file is missing or malformed.
    """
    try:
        payload = _read_json(path)
    except (OSError, ValueError) as e:
        raise MetadataFetchError(f"Cannot read metadata snapshot '{path}': {e}") from e

    fields = parse_object_info(payload)
    logger.debug(f"Snapshot: {len(fields)} field descriptors loaded from {path}")
    return fields


def load_records_snapshot(path: str) -> List[RawRecord]:
    """
    Read a record list from a JSON file.

    Accepts a bare list or a query payload ('{"records": [...]}').

    Raises:
        RecordFetchError: If the file is missing or malformed.
    """
    try:
        payload = _read_json(path)
    except (OSError, ValueError) as e:
        raise RecordFetchError(f"Cannot read records snapshot '{path}': {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("records")
    if not isinstance(payload, list):
        raise RecordFetchError(f"Malformed records snapshot '{path}': expected a list of records.")

    records = [strip_attributes(r) for r in payload if isinstance(r, dict)]
    logger.debug(f"Snapshot: {len(records)} records loaded from {path}")
    return records


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
