from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into widget configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from hierarchygrid.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the HierarchyGrid CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="hierarchygrid",
        description=i18n.t("app.description"),
    )

    # --- Target Hierarchy ---
    p.add_argument(
        "-r", "--record-id",
        dest="record_id",
        default=None,
        help=i18n.t("cli.args.record_id"),
    )
    p.add_argument(
        "-o", "--object",
        dest="object_api_name",
        default=None,
        help=i18n.t("cli.args.object"),
    )
    p.add_argument(
        "--parent-field",
        dest="parent_field_api_name",
        default=None,
        help=i18n.t("cli.args.parent_field"),
    )
    p.add_argument(
        "--fields",
        dest="field_list",
        default=None,
        help=i18n.t("cli.args.fields"),
    )
    p.add_argument(
        "--title",
        default=None,
        help=i18n.t("cli.args.title"),
    )

    # --- Remote Collaborators ---
    p.add_argument(
        "--instance-url",
        dest="instance_url",
        default=None,
        help=i18n.t("cli.args.instance_url"),
    )
    p.add_argument(
        "--token",
        dest="access_token",
        default=None,
        help=i18n.t("cli.args.token"),
    )
    p.add_argument(
        "--api-version",
        dest="api_version",
        default=None,
        help=i18n.t("cli.args.api_version"),
    )

    # --- Offline Collaborators ---
    p.add_argument(
        "--metadata-file",
        dest="metadata_file",
        default=None,
        help=i18n.t("cli.args.metadata_file"),
    )
    p.add_argument(
        "--records-file",
        dest="records_file",
        default=None,
        help=i18n.t("cli.args.records_file"),
    )

    # --- Presentation ---
    p.add_argument(
        "--expand",
        action="store_true",
        help=i18n.t("cli.args.expand"),
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.use_defaults"),
    )
    p.add_argument(
        "--save",
        action="store_true",
        help=i18n.t("cli.args.save"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug", default="Elevate logging verbosity to DEBUG."),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Unset options map to None and are ignored by the merge step.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["record_id"] = args.record_id
    overrides["object_api_name"] = args.object_api_name
    overrides["parent_field_api_name"] = args.parent_field_api_name
    overrides["title"] = args.title

    overrides["instance_url"] = args.instance_url
    overrides["access_token"] = args.access_token
    overrides["api_version"] = args.api_version

    overrides["metadata_file"] = args.metadata_file
    overrides["records_file"] = args.records_file

    if args.field_list:
        overrides["field_list"] = _split_csv(args.field_list)
    if args.expand:
        overrides["expand_on_load"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
