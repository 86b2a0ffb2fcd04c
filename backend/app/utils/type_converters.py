"""
Type converters — coercion of engine column values.

The engine returns numerics as JSON numbers or numeric strings depending on
column type (numeric/bigint), so row values are coerced before reshaping.
Version: 1.0.0
"""
from typing import Any, Optional


def to_float(value: Any) -> Optional[float]:
    """Convert value to float, returning None if missing or invalid."""
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Convert value to int, returning ``default`` if missing or invalid."""
    if value is None:
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        return default
