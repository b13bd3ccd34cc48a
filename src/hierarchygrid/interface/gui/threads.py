from __future__ import annotations

"""
Background Worker Threads for GUI Operations.

Runs the two collaborator calls (field metadata lookup and hierarchical
record fetch) off the Tk main loop. Each task reports exactly once through
its callback, with either a payload or an exception; callers marshal the
callback back onto the main loop.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from hierarchygrid.core.services.providers import MetadataProvider, RecordProvider
from hierarchygrid.domain.grid_models import FieldDescriptor, RawRecord

logger = logging.getLogger(__name__)

ObjectInfoCallback = Callable[[Optional[Dict[str, FieldDescriptor]], Optional[BaseException]], None]
RecordsCallback = Callable[[Optional[List[RawRecord]], Optional[BaseException]], None]


# -----------------------------------------------------------------------------
# COLLABORATOR WORKERS
# -----------------------------------------------------------------------------

def fetch_object_info_task(
        provider: MetadataProvider,
        object_api_name: str,
        on_complete: ObjectInfoCallback,
) -> None:
    """
    Describe the fields of an entity type in a background thread.

    Args:
        provider: Metadata collaborator.
        object_api_name: Entity type to describe.
        on_complete: Receives (fields, None) or (None, error).
    """
    try:
        logger.debug(f"Metadata Task: Describing {object_api_name}...")
        fields = provider.fetch_object_info(object_api_name)
    except Exception as e:
        logger.error(f"Metadata Task: Lookup failed: {e}")
        on_complete(None, e)
        return
    on_complete(fields, None)


def fetch_records_task(
        provider: RecordProvider,
        object_api_name: str,
        record_id: str,
        fields: Sequence[str],
        parent_field: str,
        relationship_paths: Iterable[str],
        on_complete: RecordsCallback,
) -> None:
    """
    Fetch a record and its descendants in a background thread.

    Args:
        provider: Record collaborator.
        object_api_name: Entity type to query.
        record_id: Root record identifier.
        fields: Ordered field list.
        parent_field: Parent reference field.
        relationship_paths: Related display fields to select.
        on_complete: Receives (records, None) or (None, error).
    """
    try:
        logger.debug(f"Records Task: Fetching hierarchy of {record_id}...")
        records = provider.fetch_records(
            object_api_name,
            record_id,
            fields,
            parent_field,
            relationship_paths=list(relationship_paths),
        )
    except Exception as e:
        logger.error(f"Records Task: Fetch failed: {e}")
        on_complete(None, e)
        return
    on_complete(records, None)
