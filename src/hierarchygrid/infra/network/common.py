from __future__ import annotations

from typing import Any, Dict

import requests

USER_AGENT = "HierarchyGrid-Client/1.0.0"
DEFAULT_TIMEOUT = 10


def build_headers(access_token: str) -> Dict[str, str]:
    """Assemble the authenticated JSON request headers."""
    return {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
        "Authorization": f"Bearer {access_token}",
    }


def api_base(instance_url: str, api_version: str) -> str:
    """Resolve the versioned REST root of an instance."""
    return f"{instance_url.rstrip('/')}/services/data/v{api_version}"


def extract_error_message(response: requests.Response) -> str:
    """
    Read the most descriptive message from a failed REST response.

    Error bodies are either a list of '{message, errorCode}' objects or a
    single object with a 'message' key.
    """
    try:
        body: Any = response.json()
    except ValueError:
        body = None

    if isinstance(body, list) and body and isinstance(body[0], dict):
        msg = body[0].get("message")
        code = body[0].get("errorCode")
        if msg:
            return f"{code}: {msg}" if code else str(msg)
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])

    text = (getattr(response, "text", "") or "").strip()
    return text[:200] if text else f"HTTP {response.status_code}"
