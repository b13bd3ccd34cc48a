from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the widget configuration before first use: type coercion,
default injection, field list parsing and force-inclusion of the parent
reference field, which the tree builder needs on every record.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from hierarchygrid.domain import constants as const
from hierarchygrid.domain.config import get_default_config
from hierarchygrid.domain.errors import ConfigurationError
from hierarchygrid.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        config = {}

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = [
        "record_id", "object_api_name", "parent_field_api_name", "title",
        "instance_url", "api_version", "access_token",
        "metadata_file", "records_file",
    ]
    bool_fields = ["expand_on_load"]

    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    # Deep-link origin: joined with '/<id>' later
    merged["instance_url"] = merged["instance_url"].rstrip("/")

    for field in ("metadata_file", "records_file"):
        merged[field] = normalize_path(merged[field])

    if not merged["access_token"]:
        merged["access_token"] = os.environ.get(const.ACCESS_TOKEN_ENV_VAR, "").strip()

    merged["field_list"] = normalize_field_list(
        merged.get("field_list"), merged["parent_field_api_name"], warnings, strict
    )

    return merged, warnings


def normalize_field_list(
        value: Any,
        parent_field: str,
        warnings: List[str] | None = None,
        strict: bool = False,
) -> List[str]:
    """
    Resolve the effective, ordered field list.

    Accepts a list or a single comma-delimited string (segments trimmed).
    Defaults to '[Name, <parent field>]' when omitted and appends the
    parent field when missing.

    Args:
        value: Raw field list.
        parent_field: Parent reference field API name.
        warnings: Accumulator for non-fatal issues.
        strict: Raise on invalid items instead of discarding them.

    Returns:
        List[str]: Field names without blanks or duplicates.
    """
    if warnings is None:
        warnings = []

    if value is None or value == "" or value == []:
        fields = [const.NAME_FIELD, parent_field]
    elif isinstance(value, str):
        fields = [x.strip() for x in value.split(",")]
    elif isinstance(value, (list, tuple)):
        fields = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                fields.append(item.strip())
                continue
            msg = f"Invalid item in 'field_list[{i}]': expected str."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Item discarded.")
    else:
        msg = f"Invalid field 'field_list': expected list[str] or str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        fields = [const.NAME_FIELD, parent_field]

    out: List[str] = []
    for f in fields:
        if f and f not in out:
            out.append(f)

    if parent_field not in out:
        out.append(parent_field)

    return out


def ensure_fetchable(config: Dict[str, Any]) -> None:
    """
    Verify that a normalized configuration can drive both collaborators.

    Raises:
        ConfigurationError: When required keys are missing.
    """
    missing: List[str] = []
    if not config.get("record_id"):
        missing.append("record_id")
    if not config.get("object_api_name"):
        missing.append("object_api_name")

    offline = bool(config.get("metadata_file")) and bool(config.get("records_file"))
    if not offline:
        if not config.get("instance_url"):
            missing.append("instance_url")
        if not config.get("access_token"):
            missing.append("access_token")

    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
