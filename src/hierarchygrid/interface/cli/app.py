from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge
(defaults, persisted session, CLI overrides), collaborator selection,
hierarchy loading and result rendering as text or JSON.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from hierarchygrid.core.grid.renderer import TextTreeGrid
from hierarchygrid.core.grid.toggle import ExpandToggle
from hierarchygrid.core.grid.validator import ensure_fetchable, validate_config
from hierarchygrid.core.services.hierarchy import HierarchyGrid
from hierarchygrid.core.services.providers import build_providers
from hierarchygrid.domain.config import get_default_config, load_config, save_config
from hierarchygrid.domain.errors import ConfigurationError
from hierarchygrid.domain.grid_models import ColumnSpec
from hierarchygrid.domain.result_models import HierarchyResult
from hierarchygrid.infra.logging import LoggingConfig, configure_logging, get_logger
from hierarchygrid.interface.cli import args as cli_args
from hierarchygrid.utils.i18n import i18n

logger = get_logger(__name__)

_MERGE_KEYS = [
    "record_id", "object_api_name", "parent_field_api_name", "title", "field_list",
    "instance_url", "access_token", "api_version",
    "metadata_file", "records_file", "expand_on_load",
]

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 load failure, 2 bad configuration,
        130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr only)
    configure_logging(LoggingConfig.for_cli(args.debug))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Base configuration (defaults vs persisted session)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 4. Merge and normalize
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        safe_conf = dict(clean_conf)
        if safe_conf.get("access_token"):
            safe_conf["access_token"] = "***"
        print(json.dumps(safe_conf, ensure_ascii=False, indent=2))
        return 0

    # 5. Pre-flight verification
    try:
        ensure_fetchable(clean_conf)
    except ConfigurationError as e:
        msg = i18n.t("cli.errors.config", error=str(e))
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    if args.save:
        save_config(clean_conf)

    # 6. Hierarchy loading phase
    logger.info(f"Loading hierarchy of {clean_conf['object_api_name']} {clean_conf['record_id']}")
    try:
        metadata_provider, record_provider = build_providers(clean_conf)
        grid = HierarchyGrid(clean_conf)
        result = grid.load(metadata_provider, record_provider)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = i18n.t("cli.errors.fetch", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 7. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_tree_grid(result, grid.grid_columns, clean_conf["expand_on_load"])

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known, non-None override values into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in _MERGE_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_tree_grid(result: HierarchyResult, columns: List[ColumnSpec], expand: bool) -> None:
    """
    Print the title, the tree grid and the toggle button state.

    Args:
        result: The load result to render.
        columns: Grid columns in display order.
        expand: Whether the toggle is pressed once before rendering.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(result.title)

    if not result.tree_data:
        print(i18n.t("cli.status.empty"))
        return

    surface = TextTreeGrid(columns, result.tree_data)
    toggle = ExpandToggle()
    if expand:
        toggle.toggle(surface)

    print(f"[{toggle.button_label}]")
    for line in surface.render():
        print(line)
    print(i18n.t("cli.status.summary", count=result.record_count, roots=len(result.tree_data)))
