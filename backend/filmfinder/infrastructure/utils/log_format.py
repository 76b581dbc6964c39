from __future__ import annotations

import json
from typing import Any, Mapping

REDACTED = "***"
_SECRET_PARAMS = frozenset({"apikey", "api_key", "token"})


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (str, list, tuple, dict)):
        # Quoted so spaces/symbols stay unambiguous on one line.
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(str(value), ensure_ascii=False)


def format_kv(**fields: Any) -> str:
    """
    Render a compact single-line key=value log string; None values are skipped.

    Example:
      event="search" query="batman" page=2 status=200
    """
    return " ".join(f"{key}={_format_value(value)}" for key, value in fields.items() if value is not None)


def redact_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of query params with credentials masked."""
    return {k: (REDACTED if k.lower() in _SECRET_PARAMS and v else v) for k, v in params.items()}


def preview(text: str, limit: int = 200) -> str:
    text = text or ""
    return text if len(text) <= limit else text[:limit] + "..."
