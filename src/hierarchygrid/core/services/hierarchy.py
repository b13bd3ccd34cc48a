from __future__ import annotations

"""
Hierarchy Grid State Holder.

Owns the widget state (columns, forest, error, loading flag) and joins the
two asynchronous collaborator completions. Completions may arrive in any
order: the forest is rebuilt from the latest records whenever either the
records or the column metadata change.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from hierarchygrid.core.grid.column_mapper import map_columns
from hierarchygrid.core.grid.tree_builder import build_forest
from hierarchygrid.core.services.providers import MetadataProvider, RecordProvider
from hierarchygrid.domain.errors import HierarchyGridError
from hierarchygrid.domain.grid_models import (
    ColumnMapping,
    ColumnSpec,
    FieldDescriptor,
    Forest,
    RawRecord,
)
from hierarchygrid.domain.result_models import (
    HierarchyResult,
    create_error_result,
    create_success_result,
)

logger = logging.getLogger(__name__)


class HierarchyGrid:
    """
    Widget state for one configured hierarchy.

    Attributes:
        config: Normalized configuration (see validate_config).
        object_info: Cached field metadata of the target entity type.
        grid_columns: Ordered grid columns, empty until metadata arrives.
        tree_data: Current forest.
        error: Record fetch failure message, empty on success.
        is_loading: True until the record fetch completes.
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.object_info: Optional[Mapping[str, FieldDescriptor]] = None
        self.column_mapping: ColumnMapping = ColumnMapping()
        self.tree_data: Forest = []
        self.error: str = ""
        self.is_loading: bool = True
        self._records: Optional[List[RawRecord]] = None

    # -------------------------------------------------------------------------
    # DERIVED STATE
    # -------------------------------------------------------------------------

    @property
    def grid_columns(self) -> List[ColumnSpec]:
        return list(self.column_mapping.columns)

    @property
    def has_data(self) -> bool:
        return len(self.tree_data) > 0

    @property
    def relationship_paths(self) -> List[str]:
        return list(self.column_mapping.reference_paths.values())

    @property
    def record_count(self) -> int:
        return len(self._records or [])

    @property
    def records_received(self) -> bool:
        return self._records is not None

    # -------------------------------------------------------------------------
    # COLLABORATOR COMPLETIONS
    # -------------------------------------------------------------------------

    def handle_object_info(
            self,
            fields: Optional[Mapping[str, FieldDescriptor]] = None,
            error: Optional[BaseException] = None,
    ) -> None:
        """
        Consume the metadata lookup result.

        A failure is logged and leaves the columns unset.
        """
        if error is not None:
            logger.error(f"Error retrieving object info: {error}")
            return
        if not fields:
            logger.warning("Object info returned no fields. Columns left unset.")
            return

        self.object_info = fields
        self.column_mapping = map_columns(fields, self.config.get("field_list", []))

        if self._records is not None:
            logger.debug("Metadata arrived after records. Re-formatting tree data.")
            self._format_tree_data()

    def handle_records(
            self,
            records: Optional[List[RawRecord]] = None,
            error: Optional[BaseException] = None,
    ) -> None:
        """
        Consume the record fetch result.

        A failure is exposed through 'error'. The loading flag is cleared
        in every case.
        """
        try:
            if error is not None:
                self.error = str(error) or type(error).__name__
                logger.error(f"Error fetching hierarchical records: {self.error}")
                return

            self.error = ""
            self._records = list(records or [])
            self._format_tree_data()
        finally:
            self.is_loading = False

    # -------------------------------------------------------------------------
    # SYNCHRONOUS LOADING
    # -------------------------------------------------------------------------

    def load(self, metadata_provider: MetadataProvider, record_provider: RecordProvider) -> HierarchyResult:
        """
        Run both collaborators in sequence and return the outcome.

        Metadata is requested first so that the record query can include
        the relationship display fields.
        """
        cfg = self.config
        self.is_loading = True

        try:
            fields = metadata_provider.fetch_object_info(cfg["object_api_name"])
        except HierarchyGridError as e:
            self.handle_object_info(error=e)
        else:
            self.handle_object_info(fields)

        try:
            records = record_provider.fetch_records(
                cfg["object_api_name"],
                cfg["record_id"],
                cfg["field_list"],
                cfg["parent_field_api_name"],
                relationship_paths=self.relationship_paths,
            )
        except HierarchyGridError as e:
            self.handle_records(error=e)
        else:
            self.handle_records(records)

        return self.to_result()

    def to_result(self) -> HierarchyResult:
        if self.error:
            return create_error_result(self.error, self.config)
        return create_success_result(
            self.config,
            columns=self.column_mapping.to_list(),
            tree_data=self.tree_data,
            record_count=self.record_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready snapshot of the current widget state."""
        return {
            "title": self.config.get("title", ""),
            "columns": self.column_mapping.to_list(),
            "tree_data": self.tree_data,
            "error": self.error,
            "record_count": self.record_count,
        }

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _format_tree_data(self) -> None:
        """Rebuild the forest from the latest records (never appended)."""
        self.tree_data = build_forest(
            self._records,
            self.column_mapping.reference_paths,
            self.config.get("parent_field_api_name", ""),
            self.config.get("record_id"),
            origin=self.config.get("instance_url", ""),
        )
        logger.info(f"Tree data formatted: {self.record_count} records, {len(self.tree_data)} roots.")
