"""
Constants package — re-exports from domain-specific modules.

Centralized search constants.

Usage:
    from app.core.constants.search import PAGE_SIZES
    # or import the module:
    from app.core.constants import search
Version: 1.0.0
"""

from app.core.constants import search
from app.core.constants.search import (
    ENGINE_BUSINESS_ERROR_CODE,
    SEARCH_SECURABLE,
    PERMISSION_READ,
    PERMISSION_CREATE,
    SORT_KEYS,
    DEFAULT_SORT,
    PAGE_SIZES,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE,
    HISTORY_LIST_LIMIT,
)

__all__ = [
    "search",
    "ENGINE_BUSINESS_ERROR_CODE",
    "SEARCH_SECURABLE",
    "PERMISSION_READ",
    "PERMISSION_CREATE",
    "SORT_KEYS",
    "DEFAULT_SORT",
    "PAGE_SIZES",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_PAGE",
    "HISTORY_LIST_LIMIT",
]
