from __future__ import annotations

"""
External Collaborator Providers.

Abstract interfaces of the two collaborators the widget depends on
(field metadata lookup and hierarchical record fetch) together with their
REST and JSON snapshot implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from hierarchygrid.domain.grid_models import FieldDescriptor, RawRecord
from hierarchygrid.infra import network
from hierarchygrid.infra.snapshots import load_object_info_snapshot, load_records_snapshot

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ABSTRACT INTERFACES
# -----------------------------------------------------------------------------

class MetadataProvider(ABC):
    """Source of object field descriptions."""

    @abstractmethod
    def fetch_object_info(self, object_api_name: str) -> Dict[str, FieldDescriptor]:
        """
        Describe the fields of an entity type.

        Raises:
            MetadataFetchError: When the description cannot be retrieved.
        """


class RecordProvider(ABC):
    """Source of hierarchical record sets."""

    @abstractmethod
    def fetch_records(
            self,
            object_api_name: str,
            record_id: str,
            fields: Sequence[str],
            parent_field: str,
            relationship_paths: Iterable[str] = (),
    ) -> List[RawRecord]:
        """
        Return the root record followed by all of its descendants.

        Raises:
            RecordFetchError: When the records cannot be retrieved.
        """

# -----------------------------------------------------------------------------
# REST IMPLEMENTATIONS
# -----------------------------------------------------------------------------

class RestMetadataProvider(MetadataProvider):
    def __init__(self, instance_url: str, access_token: str, api_version: str):
        self.instance_url = instance_url
        self.access_token = access_token
        self.api_version = api_version

    def fetch_object_info(self, object_api_name: str) -> Dict[str, FieldDescriptor]:
        return network.fetch_object_info(
            self.instance_url, self.access_token, object_api_name, self.api_version
        )


class RestRecordProvider(RecordProvider):
    def __init__(self, instance_url: str, access_token: str, api_version: str):
        self.instance_url = instance_url
        self.access_token = access_token
        self.api_version = api_version

    def fetch_records(
            self,
            object_api_name: str,
            record_id: str,
            fields: Sequence[str],
            parent_field: str,
            relationship_paths: Iterable[str] = (),
    ) -> List[RawRecord]:
        return network.fetch_hierarchical_records(
            self.instance_url,
            self.access_token,
            object_api_name,
            record_id,
            fields,
            parent_field,
            relationship_paths=relationship_paths,
            api_version=self.api_version,
        )

# -----------------------------------------------------------------------------
# SNAPSHOT IMPLEMENTATIONS
# -----------------------------------------------------------------------------

class SnapshotMetadataProvider(MetadataProvider):
    def __init__(self, path: str):
        self.path = path

    def fetch_object_info(self, object_api_name: str) -> Dict[str, FieldDescriptor]:
        return load_object_info_snapshot(self.path)


class SnapshotRecordProvider(RecordProvider):
    """Replays a stored record set; the query arguments are not applied."""

    def __init__(self, path: str):
        self.path = path

    def fetch_records(
            self,
            object_api_name: str,
            record_id: str,
            fields: Sequence[str],
            parent_field: str,
            relationship_paths: Iterable[str] = (),
    ) -> List[RawRecord]:
        return load_records_snapshot(self.path)

# -----------------------------------------------------------------------------
# FACTORY
# -----------------------------------------------------------------------------

def build_providers(config: Dict[str, Any]) -> Tuple[MetadataProvider, RecordProvider]:
    """
    Select collaborator implementations for a normalized configuration.

    Snapshot files take precedence over the REST endpoints, independently
    for each collaborator.
    """
    instance_url = config.get("instance_url", "")
    token = config.get("access_token", "")
    api_version = config.get("api_version", "")

    metadata: MetadataProvider
    records: RecordProvider

    if config.get("metadata_file"):
        metadata = SnapshotMetadataProvider(config["metadata_file"])
    else:
        metadata = RestMetadataProvider(instance_url, token, api_version)

    if config.get("records_file"):
        records = SnapshotRecordProvider(config["records_file"])
    else:
        records = RestRecordProvider(instance_url, token, api_version)

    logger.debug(
        f"Providers selected: metadata={type(metadata).__name__}, records={type(records).__name__}"
    )
    return metadata, records
