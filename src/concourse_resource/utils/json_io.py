"""JSON helpers for concourse_resource.

Concourse expects compact JSON documents and human-readable metadata values,
so encoding never escapes non-ASCII characters.

Design principles:
- Compact output, matching what the host stores and replays
- Safe parsing returning ``(value, error_message)`` tuples instead of raising
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

COMPACT_SEPARATORS = (",", ":")


def dump_compact_json(value: Any) -> str:
    """Encode a JSON-compatible value without whitespace.

    Args:
        value: Python value made of dicts, lists, strings, numbers, booleans and None.

    Returns:
        Compact JSON text, e.g. ``{"ver":"1.1"}``.

    Raises:
        TypeError: If the value is not JSON serializable.
        ValueError: If the value contains NaN/Infinity or circular references.
    """
    return json.dumps(value, separators=COMPACT_SEPARATORS, ensure_ascii=False, allow_nan=False)


def parse_json_object(text: Optional[str]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Parse text expected to hold a JSON object.

    Args:
        text: Raw JSON text, possibly None.

    Returns:
        Tuple of (data, error_message):
        - data: Parsed dict if successful, otherwise None.
        - error_message: None if successful, human-readable error string on failure.

    Examples:
        >>> parse_json_object('{"branch": "main"}')
        ({'branch': 'main'}, None)
        >>> parse_json_object('[1, 2]')
        (None, 'Expected a JSON object, got list')
    """
    if text is None:
        return None, "No JSON text provided"

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return None, f"Failed to parse JSON: {exc}"

    if not isinstance(data, dict):
        return None, f"Expected a JSON object, got {type(data).__name__}"
    return data, None


__all__ = ["COMPACT_SEPARATORS", "dump_compact_json", "parse_json_object"]
