from __future__ import annotations

"""
Network Communication Infrastructure.

Exposes the REST clients behind the metadata and record fetch collaborators.
"""

from hierarchygrid.infra.network.metadata_client import fetch_object_info, parse_object_info
from hierarchygrid.infra.network.records_client import fetch_hierarchical_records

__all__ = [
    "fetch_object_info",
    "parse_object_info",
    "fetch_hierarchical_records",
]
