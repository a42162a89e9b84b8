"""Human/JSON output helpers.

The CLI renders ServiceResult for humans (``OK:``/``ERROR:`` headers with
key/value lines) or machines (--json).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sslctl.services.result import ServiceResult


def _compact(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def _format_data_human(data: Any) -> str:
    """Format result data as indented key-value pairs, or one line per list item."""
    if isinstance(data, dict):
        return "\n".join(f"  {key}: {_compact(value)}" for key, value in data.items())
    if isinstance(data, list):
        return "\n".join(f"  - {_compact(item)}" for item in data)
    return f"  {_compact(data)}"


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if result.ok:
        parts = [f"OK: {result.op}"]
        if result.data:
            parts.append(_format_data_human(result.data))
        return "\n".join(parts)
    if result.error is None:
        return f"ERROR: {result.op} - Unknown error"
    line = f"ERROR: {result.op} - {result.error.message}"
    if result.error.detail:
        line += f" {_compact(result.error.detail)}"
    return line
