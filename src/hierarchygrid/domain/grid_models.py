from __future__ import annotations

"""
Tree Grid Data Models.

Defines the field metadata descriptors consumed by the column mapper, the
grid column definitions it produces, and the type aliases of the record
and tree structures handled by the tree builder.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from hierarchygrid.domain import constants as const

# -----------------------------------------------------------------------------
# RECORD STRUCTURES
# -----------------------------------------------------------------------------

RawRecord = Dict[str, Any]
TreeNode = Dict[str, Any]
Forest = List[TreeNode]

# -----------------------------------------------------------------------------
# FIELD METADATA
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldDescriptor:
    """
    Metadata for one field of the source entity type.

    Attributes:
        api_name: Field API name (e.g. 'ParentId').
        label: Human readable column label.
        data_type: Platform data type ('Reference', 'String', ...).
        relationship_name: Navigable relationship for reference fields.
    """
    api_name: str
    label: str
    data_type: str = "String"
    relationship_name: Optional[str] = None

    @property
    def is_reference(self) -> bool:
        """True when the field points to another entity instance."""
        return (self.data_type or "").strip().lower() == const.REFERENCE_DATA_TYPE

    @classmethod
    def from_object_info(cls, api_name: str, raw: Mapping[str, Any]) -> "FieldDescriptor":
        """
        Build a descriptor from one entry of an object-info 'fields' payload.

        Args:
            api_name: Key of the entry in the 'fields' mapping.
            raw: Field description as returned by the metadata endpoint.

        Returns:
            FieldDescriptor: Normalized descriptor.
        """
        return cls(
            api_name=str(raw.get("apiName") or api_name),
            label=str(raw.get("label") or api_name),
            data_type=str(raw.get("dataType") or "String"),
            relationship_name=raw.get("relationshipName") or None,
        )


# -----------------------------------------------------------------------------
# GRID COLUMNS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ColumnSpec:
    """
    One output grid column.

    Attributes:
        label: Header text.
        field_name: Key read from each node to render the cell.
        type: 'text' or 'url'.
        link_field_name: Node key holding the hyperlink target.
        display_label_field_name: Node key holding the hyperlink text.
        target: Browsing context for hyperlinks.
        show_current_record_icon: Leading icon flag, first column only.
    """
    label: str
    field_name: str
    type: str = "text"
    link_field_name: Optional[str] = None
    display_label_field_name: Optional[str] = None
    target: Optional[str] = None
    show_current_record_icon: bool = False

    @property
    def is_link(self) -> bool:
        return self.type == "url"

    def display_key(self) -> str:
        """Node key holding the human readable cell text."""
        if self.is_link and self.display_label_field_name:
            return self.display_label_field_name
        return self.field_name

    def to_dict(self) -> Dict[str, Any]:
        """Render the column definition expected by tree grid surfaces."""
        out: Dict[str, Any] = {
            "label": self.label,
            "fieldName": self.field_name,
            "type": self.type,
        }
        if self.is_link:
            out["typeAttributes"] = {
                "label": {"fieldName": self.display_label_field_name},
                "url": {"fieldName": self.link_field_name},
                "target": self.target or const.LINK_TARGET,
            }
        if self.show_current_record_icon:
            out["cellAttributes"] = {
                "iconName": {"fieldName": const.CURRENT_RECORD_FIELD},
                "iconPosition": "left",
                "iconAlternativeText": const.CURRENT_RECORD_ALT_TEXT,
            }
        else:
            out["cellAttributes"] = {}
        return out


@dataclass(frozen=True)
class ColumnMapping:
    """
    Result of a column derivation pass.

    Attributes:
        columns: Ordered grid columns.
        reference_paths: Read-only map of reference field name to the
            dotted '<relationshipName>.Name' path of its display text.
    """
    columns: Tuple[ColumnSpec, ...] = ()
    reference_paths: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def to_list(self) -> List[Dict[str, Any]]:
        return [c.to_dict() for c in self.columns]
