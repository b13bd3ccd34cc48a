from __future__ import annotations

"""
Domain Error Types.

Failures raised by the external collaborators (metadata lookup, record
fetch) and by strict configuration validation.
"""


class HierarchyGridError(Exception):
    """Base class for all application-level failures."""


class ConfigurationError(HierarchyGridError):
    """Raised when the configuration cannot drive a fetch."""


class MetadataFetchError(HierarchyGridError):
    """Raised when object field metadata cannot be retrieved."""


class RecordFetchError(HierarchyGridError):
    """Raised when the hierarchical record set cannot be retrieved."""
