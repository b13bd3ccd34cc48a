from __future__ import annotations

"""
Grid Column Mapper.

Derives the ordered grid column definitions from object field metadata and
the requested field list. Reference fields and the Name field are rewritten
into hyperlink columns backed by synthetic node keys that the tree builder
fills in.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from hierarchygrid.domain import constants as const
from hierarchygrid.domain.grid_models import ColumnMapping, ColumnSpec, FieldDescriptor

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def map_columns(
        object_fields: Optional[Mapping[str, FieldDescriptor]],
        field_list: Sequence[str],
) -> ColumnMapping:
    """
    Build grid columns for the requested fields, in request order.

    Unknown field names produce no column. Only the column built from the
    first requested field carries the current-record icon.

    Args:
        object_fields: Field API name to descriptor, as returned by the
            metadata provider.
        field_list: Requested field API names.

    Returns:
        ColumnMapping: Columns plus the read-only reference path mapping
                       (field name -> '<relationshipName>.Name').
    """
    if not object_fields:
        logger.debug("Column mapping skipped: no field metadata available.")
        return ColumnMapping()

    columns: List[ColumnSpec] = []
    reference_paths: Dict[str, str] = {}

    for index, api_name in enumerate(field_list):
        descriptor = object_fields.get(api_name)
        if descriptor is None:
            logger.debug(f"Column mapping: field '{api_name}' not found in metadata, skipped.")
            continue

        column = ColumnSpec(
            label=descriptor.label,
            field_name=api_name,
            show_current_record_icon=(index == 0),
        )

        if descriptor.is_reference and descriptor.relationship_name:
            rel = descriptor.relationship_name
            reference_paths[api_name] = f"{rel}.{const.NAME_FIELD}"
            link_key = f"{api_name}{const.LINK_SUFFIX}"
            column = _as_link(column, link_key, link_key, f"{rel}{const.NAME_FIELD}")
        elif descriptor.is_reference:
            logger.debug(f"Column mapping: reference '{api_name}' has no relationship name.")

        if api_name.lower() == const.NAME_FIELD.lower():
            column = _as_link(
                column,
                const.NAME_LINK_FIELD,
                const.RECORD_ID_LINK_FIELD,
                const.NAME_FIELD,
            )

        columns.append(column)

    logger.debug(f"Column mapping produced {len(columns)} of {len(field_list)} requested columns.")
    return ColumnMapping(
        columns=tuple(columns),
        reference_paths=MappingProxyType(reference_paths),
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_link(column: ColumnSpec, field_name: str, url_field: str, label_field: str) -> ColumnSpec:
    """Rewrite a column into a hyperlink column."""
    return ColumnSpec(
        label=column.label,
        field_name=field_name,
        type="url",
        link_field_name=url_field,
        display_label_field_name=label_field,
        target=const.LINK_TARGET,
        show_current_record_icon=column.show_current_record_icon,
    )
