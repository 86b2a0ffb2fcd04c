"""
Filter codec — JSON transport encoding for list filters.

List filters (categories, materials, colors, styles) travel as JSON-encoded
array strings on the query-string transport and to the engine.
Version: 1.0.0
"""
import json
from typing import Any, List, Optional, Sequence


def encode_filter_list(values: Optional[Sequence[str]]) -> Optional[str]:
    """Encode a list filter for transport. Absent or empty means no constraint."""
    if not values:
        return None
    return json.dumps(list(values), ensure_ascii=False)


def decode_filter_list(raw: Any) -> Optional[List[str]]:
    """
    Decode a transported list filter.

    Accepts None/"" (no constraint), an already-decoded list, or a JSON array
    string. Raises ValueError for malformed JSON or non-string items so the
    failure surfaces as a validation error instead of a silent default.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"must be a JSON-encoded array of strings ({e.msg})")
    if not isinstance(raw, list):
        raise ValueError("must be a JSON-encoded array of strings")
    if not all(isinstance(item, str) for item in raw):
        raise ValueError("array items must be strings")
    return raw
