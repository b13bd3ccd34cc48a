from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

import requests

from hierarchygrid.domain import constants as const
from hierarchygrid.domain.errors import RecordFetchError
from hierarchygrid.domain.grid_models import RawRecord
from hierarchygrid.infra.network.common import (
    DEFAULT_TIMEOUT,
    api_base,
    build_headers,
    extract_error_message,
)

logger = logging.getLogger(__name__)

# Identifiers in the IN clause of a single child query
ID_CHUNK_SIZE = 200

_FIELD_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")
_OBJECT_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def fetch_hierarchical_records(
        instance_url: str,
        access_token: str,
        object_api_name: str,
        record_id: str,
        fields: Sequence[str],
        parent_field: str,
        relationship_paths: Iterable[str] = (),
        api_version: str = const.DEFAULT_API_VERSION,
) -> List[RawRecord]:
    """
    Retrieve a record and all of its descendants under the parent field.

    Walks the hierarchy breadth-first: the root record first, then one
    query per level (chunked) for the records whose parent field points to
    the previous level. Each record appears once.
    """
    select = _build_select(object_api_name, fields, parent_field, relationship_paths)
    base = api_base(instance_url, api_version)
    headers = build_headers(access_token)

    root_soql = f"SELECT {select} FROM {object_api_name} WHERE Id = {_quote(record_id)}"
    records = _run_query(instance_url, base, headers, root_soql)
    if not records:
        logger.info(f"Network: Root record '{record_id}' not found.")
        return []

    seen = {r.get(const.ID_FIELD) for r in records}
    frontier = [r.get(const.ID_FIELD) for r in records]
    depth = 0

    while frontier:
        level: List[RawRecord] = []
        for chunk in _chunks(frontier, ID_CHUNK_SIZE):
            in_clause = ", ".join(_quote(i) for i in chunk)
            soql = f"SELECT {select} FROM {object_api_name} WHERE {parent_field} IN ({in_clause})"
            for rec in _run_query(instance_url, base, headers, soql):
                rec_id = rec.get(const.ID_FIELD)
                if rec_id in seen:
                    continue
                seen.add(rec_id)
                level.append(rec)

        records.extend(level)
        frontier = [r.get(const.ID_FIELD) for r in level]
        depth += 1

    logger.info(f"Network: Hierarchy fetched ({len(records)} records, {depth} levels).")
    return records


# -----------------------------------------------------------------------------
# QUERY HELPERS
# -----------------------------------------------------------------------------

def _run_query(
        instance_url: str,
        base: str,
        headers: Dict[str, str],
        soql: str,
) -> List[RawRecord]:
    """Execute a query and follow 'nextRecordsUrl' until the result is complete."""
    url: Optional[str] = f"{base}/query"
    params: Optional[Dict[str, str]] = {"q": soql}
    out: List[RawRecord] = []

    while url:
        try:
            response = requests.get(url, headers=headers, params=params, timeout=DEFAULT_TIMEOUT)
            if response.status_code != 200:
                raise RecordFetchError(f"Record query failed: {extract_error_message(response)}")
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise RecordFetchError(f"Record query timed out after {DEFAULT_TIMEOUT}s.") from e
        except requests.exceptions.JSONDecodeError as e:
            raise RecordFetchError(f"Malformed query payload: {e}") from e
        except requests.exceptions.RequestException as e:
            raise RecordFetchError(f"Communication error during record query: {e}") from e
        except ValueError as e:
            raise RecordFetchError(f"Malformed query payload: {e}") from e

        if not isinstance(data, dict):
            raise RecordFetchError("Malformed query payload (Root is not a dictionary).")

        out.extend(strip_attributes(r) for r in data.get("records") or [] if isinstance(r, dict))

        next_url = data.get("nextRecordsUrl")
        if next_url and not data.get("done", True):
            url = f"{instance_url.rstrip('/')}{next_url}"
            params = None
        else:
            url = None

    return out


def _build_select(
        object_api_name: str,
        fields: Sequence[str],
        parent_field: str,
        relationship_paths: Iterable[str],
) -> str:
    """Validate identifiers and assemble a de-duplicated SELECT list."""
    if not _OBJECT_RX.match(object_api_name or ""):
        raise RecordFetchError(f"Invalid object API name: '{object_api_name}'.")

    columns: List[str] = []
    for name in [const.ID_FIELD, *fields, parent_field, *relationship_paths]:
        if not _FIELD_RX.match(name or ""):
            raise RecordFetchError(f"Invalid field name: '{name}'.")
        if name.lower() not in (c.lower() for c in columns):
            columns.append(name)
    return ", ".join(columns)


def _quote(value: Any) -> str:
    """Render a SOQL string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _chunks(items: List[Any], size: int) -> Iterable[List[Any]]:
    for i in range(0, len(items), size):
        yield items[i:i + size]


def strip_attributes(record: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the 'attributes' envelope from a record and its nested references."""
    out: Dict[str, Any] = {}
    for key, value in record.items():
        if key == "attributes":
            continue
        out[key] = strip_attributes(value) if isinstance(value, dict) else value
    return out
