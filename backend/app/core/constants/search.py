"""
Search constants — engine procedure names, enumerations, and bounds.

Search engine constants.
Version: 1.0.0
"""

# Engine procedures (Supabase RPC functions)
PROC_SEARCH_PRODUCT_LIST: str = "search_product_list"
PROC_SEARCH_SUGGESTIONS_GET: str = "search_suggestions_get"
PROC_SEARCH_AUTOCOMPLETE: str = "search_autocomplete"
PROC_SEARCH_FILTER_OPTIONS_GET: str = "search_filter_options_get"
PROC_SEARCH_ALTERNATIVES_GET: str = "search_alternatives_get"
PROC_SEARCH_HISTORY_CREATE: str = "search_history_create"
PROC_SEARCH_HISTORY_LIST: str = "search_history_list"

# Engine-raised business rule violation (RAISE ... USING ERRCODE = '51000')
ENGINE_BUSINESS_ERROR_CODE: str = "51000"

# Securable checked on the internal surface
SEARCH_SECURABLE: str = "SEARCH"
PERMISSION_READ: str = "READ"
PERMISSION_CREATE: str = "CREATE"

SORT_KEYS: tuple[str, ...] = (
    "relevance",
    "name-asc",
    "name-desc",
    "price-asc",
    "price-desc",
    "newest",
)
DEFAULT_SORT: str = "relevance"

PAGE_SIZES: tuple[int, ...] = (12, 24, 36, 48)
DEFAULT_PAGE_SIZE: int = 24
DEFAULT_PAGE: int = 1

TERM_MIN_LENGTH: int = 2
TERM_MAX_LENGTH: int = 100
PRODUCT_CODE_MAX_LENGTH: int = 50
SESSION_ID_MAX_LENGTH: int = 100

DEFAULT_MAX_SUGGESTIONS: int = 10
MAX_SUGGESTIONS_CAP: int = 20

DEFAULT_ALTERNATIVE_SUGGESTIONS: int = 5
MAX_ALTERNATIVE_SUGGESTIONS: int = 10
DEFAULT_RELATED_PRODUCTS: int = 8
MAX_RELATED_PRODUCTS: int = 20

HISTORY_TERM_MAX_LENGTH: int = 100
HISTORY_FILTERS_MAX_LENGTH: int = 5000
HISTORY_LIST_LIMIT: int = 10

# Positional result sets returned by the multi-set procedures
FILTER_OPTION_SET_COUNT: int = 6
ALTERNATIVES_SET_COUNT: int = 2

# Facet name -> value column in the engine's facet row sets
FACET_VALUE_COLUMNS: dict[str, str] = {
    "categories": "category",
    "materials": "material",
    "colors": "color",
    "styles": "style",
}
