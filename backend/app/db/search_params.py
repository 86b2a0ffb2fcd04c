"""
Search procedure parameters — one typed struct per engine procedure.

Each struct maps its fields onto the exact argument names of the engine
function. Absent optionals are passed as explicit NULLs rather than omitted,
and list filters travel JSON-encoded.
Version: 1.0.0
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from app.core.constants.search import (
    DEFAULT_MAX_SUGGESTIONS,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT,
    HISTORY_LIST_LIMIT,
)
from app.utils.filter_codec import encode_filter_list


@dataclass(frozen=True)
class ProductSearchParams:
    account_id: Optional[int] = None
    search_term: Optional[str] = None
    product_code: Optional[str] = None
    categories: Tuple[str, ...] = ()
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    materials: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    styles: Tuple[str, ...] = ()
    height_min: Optional[float] = None
    height_max: Optional[float] = None
    width_min: Optional[float] = None
    width_max: Optional[float] = None
    depth_min: Optional[float] = None
    depth_max: Optional[float] = None
    sort_by: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None
    session_id: Optional[str] = None

    @property
    def effective_page(self) -> int:
        return self.page or DEFAULT_PAGE

    @property
    def effective_page_size(self) -> int:
        return self.page_size or DEFAULT_PAGE_SIZE

    def as_params(self) -> Dict[str, Any]:
        return {
            "p_account_id": self.account_id,
            "p_search_term": self.search_term,
            "p_product_code": self.product_code,
            "p_categories": encode_filter_list(self.categories),
            "p_price_min": self.price_min,
            "p_price_max": self.price_max,
            "p_materials": encode_filter_list(self.materials),
            "p_colors": encode_filter_list(self.colors),
            "p_styles": encode_filter_list(self.styles),
            "p_height_min": self.height_min,
            "p_height_max": self.height_max,
            "p_width_min": self.width_min,
            "p_width_max": self.width_max,
            "p_depth_min": self.depth_min,
            "p_depth_max": self.depth_max,
            "p_sort_by": self.sort_by or DEFAULT_SORT,
            "p_page": self.effective_page,
            "p_page_size": self.effective_page_size,
            "p_session_id": self.session_id,
        }


@dataclass(frozen=True)
class SuggestionParams:
    account_id: int
    partial_term: str
    max_suggestions: Optional[int] = None

    def as_params(self) -> Dict[str, Any]:
        return {
            "p_account_id": self.account_id,
            "p_partial_term": self.partial_term,
            "p_max_suggestions": self.max_suggestions or DEFAULT_MAX_SUGGESTIONS,
        }


@dataclass(frozen=True)
class AutocompleteParams:
    search_term: str
    max_suggestions: Optional[int] = None

    def as_params(self) -> Dict[str, Any]:
        return {
            "p_search_term": self.search_term,
            "p_max_suggestions": self.max_suggestions or DEFAULT_MAX_SUGGESTIONS,
        }


@dataclass(frozen=True)
class FilterOptionsParams:
    account_id: Optional[int] = None
    categories: Tuple[str, ...] = ()
    materials: Tuple[str, ...] = ()
    colors: Tuple[str, ...] = ()
    styles: Tuple[str, ...] = ()
    price_min: Optional[float] = None
    price_max: Optional[float] = None

    def as_params(self) -> Dict[str, Any]:
        return {
            "p_account_id": self.account_id,
            "p_categories": encode_filter_list(self.categories),
            "p_price_min": self.price_min,
            "p_price_max": self.price_max,
            "p_materials": encode_filter_list(self.materials),
            "p_colors": encode_filter_list(self.colors),
            "p_styles": encode_filter_list(self.styles),
        }


@dataclass(frozen=True)
class AlternativesParams:
    search_term: str
    max_suggestions: int
    max_products: int

    def as_params(self) -> Dict[str, Any]:
        return {
            "p_search_term": self.search_term,
            "p_max_suggestions": self.max_suggestions,
            "p_max_products": self.max_products,
        }


@dataclass(frozen=True)
class HistoryCreateParams:
    account_id: int
    search_term: str
    result_count: int
    filters: Optional[str] = None

    def as_params(self) -> Dict[str, Any]:
        return {
            "p_account_id": self.account_id,
            "p_search_term": self.search_term,
            # stored verbatim; an empty string carries no filters
            "p_filters": self.filters or None,
            "p_result_count": self.result_count,
        }


@dataclass(frozen=True)
class HistoryListParams:
    account_id: int
    max_results: int = HISTORY_LIST_LIMIT

    def as_params(self) -> Dict[str, Any]:
        return {
            "p_account_id": self.account_id,
            "p_max_results": self.max_results,
        }
