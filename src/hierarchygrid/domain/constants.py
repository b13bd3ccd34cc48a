from __future__ import annotations

"""
Domain Constants.

Centralizes the synthetic field keys injected into tree nodes, the
configuration defaults of the widget and the labels of the expand toggle.
"""

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# RECORD KEYS
# -----------------------------------------------------------------------------
ID_FIELD = "Id"
NAME_FIELD = "Name"
LINK_SUFFIX = "_link"
NAME_LINK_FIELD = f"{NAME_FIELD}{LINK_SUFFIX}"
RECORD_ID_LINK_FIELD = f"RecordId{LINK_SUFFIX}"
CHILDREN_KEY = "children"

# Leading icon of the first column, set only on the originating record
CURRENT_RECORD_FIELD = "isCurrentRecord"
CURRENT_RECORD_ICON = "standard:choice"
CURRENT_RECORD_ALT_TEXT = "Current Record"

REFERENCE_DATA_TYPE = "reference"
LINK_TARGET = "_blank"

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_PARENT_FIELD = "ParentId"
DEFAULT_TITLE = "Record Hierarchy"
DEFAULT_API_VERSION = "59.0"
ACCESS_TOKEN_ENV_VAR = "HIERARCHYGRID_ACCESS_TOKEN"

# -----------------------------------------------------------------------------
# EXPAND TOGGLE
# -----------------------------------------------------------------------------
EXPAND_ALL_MSG = "Expand All"
COLLAPSE_ALL_MSG = "Collapse All"
BRAND_VARIANT = "Brand"
NEUTRAL_VARIANT = "Neutral"
BUTTON_LABEL_TEMPLATE = "Click Here to {msg} Rows"
