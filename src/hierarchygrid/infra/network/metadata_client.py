from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

import requests

from hierarchygrid.domain.errors import MetadataFetchError
from hierarchygrid.domain.grid_models import FieldDescriptor
from hierarchygrid.infra.network.common import (
    DEFAULT_TIMEOUT,
    api_base,
    build_headers,
    extract_error_message,
)

logger = logging.getLogger(__name__)


def fetch_object_info(
        instance_url: str,
        access_token: str,
        object_api_name: str,
        api_version: str,
) -> Dict[str, FieldDescriptor]:
    """Retrieve the field descriptions of an entity type from the object-info endpoint."""
    url = f"{api_base(instance_url, api_version)}/ui-api/object-info/{object_api_name}"
    logger.debug(f"Network: Requesting object info for '{object_api_name}'.")

    try:
        response = requests.get(url, headers=build_headers(access_token), timeout=DEFAULT_TIMEOUT)
        if response.status_code != 200:
            raise MetadataFetchError(
                f"Object info request for '{object_api_name}' failed: {extract_error_message(response)}"
            )
        payload = response.json()

    except requests.exceptions.Timeout as e:
        raise MetadataFetchError(f"Object info request timed out after {DEFAULT_TIMEOUT}s.") from e
    except requests.exceptions.JSONDecodeError as e:
        raise MetadataFetchError(f"Malformed object info payload: {e}") from e
    except requests.exceptions.RequestException as e:
        raise MetadataFetchError(f"Communication error during object info request: {e}") from e
    except ValueError as e:
        raise MetadataFetchError(f"Malformed object info payload: {e}") from e

    fields = parse_object_info(payload)
    logger.info(f"Network: Object info for '{object_api_name}' synchronized ({len(fields)} fields).")
    return fields


def parse_object_info(payload: Any) -> Dict[str, FieldDescriptor]:
    """
    Convert an object-info payload into field descriptors.

    Accepts the full payload ('{"fields": {...}}') or the bare fields mapping.
    """
    if not isinstance(payload, Mapping):
        raise MetadataFetchError("Malformed object info payload (Root is not a dictionary).")

    raw_fields = payload.get("fields", payload)
    if not isinstance(raw_fields, Mapping):
        raise MetadataFetchError("Malformed object info payload ('fields' is not a dictionary).")

    return {
        name: FieldDescriptor.from_object_info(name, raw)
        for name, raw in raw_fields.items()
        if isinstance(raw, Mapping)
    }
