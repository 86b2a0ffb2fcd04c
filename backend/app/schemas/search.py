"""
Search schemas — request validation and response models.

Search request/response models.

Request models validate the raw query string or JSON body of each endpoint;
response models are the DTOs the forwarding layer reshapes engine rows into.
Version: 1.0.0
"""
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.core.constants.search import (
    DEFAULT_ALTERNATIVE_SUGGESTIONS,
    DEFAULT_MAX_SUGGESTIONS,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RELATED_PRODUCTS,
    HISTORY_FILTERS_MAX_LENGTH,
    HISTORY_TERM_MAX_LENGTH,
    MAX_ALTERNATIVE_SUGGESTIONS,
    MAX_RELATED_PRODUCTS,
    MAX_SUGGESTIONS_CAP,
    PAGE_SIZES,
    PRODUCT_CODE_MAX_LENGTH,
    SESSION_ID_MAX_LENGTH,
    TERM_MAX_LENGTH,
    TERM_MIN_LENGTH,
)
from app.schemas.common import CamelModel
from app.utils.filter_codec import decode_filter_list


SearchTerm = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=TERM_MIN_LENGTH, max_length=TERM_MAX_LENGTH),
]
NonNegative = Annotated[float, Field(ge=0, allow_inf_nan=False)]
SortKey = Literal["relevance", "name-asc", "name-desc", "price-asc", "price-desc", "newest"]
SuggestionType = Literal["product", "category", "term", "synonym"]


def _check_max_not_below_min(value: Optional[float], info: ValidationInfo) -> Optional[float]:
    low_name = info.field_name.replace("_max", "_min")
    low = info.data.get(low_name)
    if value is not None and low is not None and value < low:
        raise ValueError(f"must be greater than or equal to {to_camel(low_name)}")
    return value


# ---------------------------------------------------------------------------
# Product search
# ---------------------------------------------------------------------------

class SearchCriteria(CamelModel):
    """Fields shared by the public body and the internal query string."""
    search_term: Optional[SearchTerm] = Field(
        None, validation_alias=AliasChoices("searchTerm", "term", "search_term")
    )
    product_code: Optional[str] = Field(None, max_length=PRODUCT_CODE_MAX_LENGTH)
    categories: Optional[List[str]] = None
    price_min: Optional[NonNegative] = None
    price_max: Optional[NonNegative] = None
    materials: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    styles: Optional[List[str]] = None
    height_min: Optional[NonNegative] = None
    height_max: Optional[NonNegative] = None
    width_min: Optional[NonNegative] = None
    width_max: Optional[NonNegative] = None
    depth_min: Optional[NonNegative] = None
    depth_max: Optional[NonNegative] = None
    sort_by: SortKey = "relevance"
    page: int = Field(
        DEFAULT_PAGE, ge=1, validation_alias=AliasChoices("page", "pageNumber", "page_number")
    )
    page_size: int = DEFAULT_PAGE_SIZE

    @field_validator("categories", "materials", "colors", "styles", mode="before")
    @classmethod
    def _decode_list(cls, value):
        return decode_filter_list(value)

    @field_validator("price_max", "height_max", "width_max", "depth_max")
    @classmethod
    def _bounds_ordered(cls, value, info: ValidationInfo):
        return _check_max_not_below_min(value, info)

    @field_validator("page_size")
    @classmethod
    def _page_size_allowed(cls, value: int) -> int:
        if value not in PAGE_SIZES:
            raise ValueError(f"must be one of {', '.join(str(s) for s in PAGE_SIZES)}")
        return value


class PublicSearchRequest(SearchCriteria):
    """Body of POST /public/search."""
    session_id: Optional[str] = Field(None, max_length=SESSION_ID_MAX_LENGTH)


class ProductSearchQuery(SearchCriteria):
    """Query string of GET /search/products (list filters JSON-encoded)."""
    pass


class Product(CamelModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    material: Optional[str] = None
    color: Optional[str] = None
    style: Optional[str] = None
    price: float
    height: Optional[float] = None
    width: Optional[float] = None
    depth: Optional[float] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None


class SearchResultPage(CamelModel):
    """Forwarder output for a product search."""
    products: List[Product]
    total_results: int
    page_number: int
    page_size: int
    total_pages: int


class SearchMetadata(CamelModel):
    total_results: int
    page: int
    page_size: int
    total_pages: int


class PublicSearchResponse(CamelModel):
    products: List[Product]
    metadata: SearchMetadata


class ProductSearchResponse(CamelModel):
    products: List[Product]
    total_count: int
    page: int
    page_size: int
    total_pages: int


# ---------------------------------------------------------------------------
# Suggestions / autocomplete / alternatives
# ---------------------------------------------------------------------------

class AutocompleteQuery(CamelModel):
    search_term: SearchTerm
    max_suggestions: int = Field(DEFAULT_MAX_SUGGESTIONS, ge=1, le=MAX_SUGGESTIONS_CAP)


class SuggestionsQuery(CamelModel):
    partial_term: SearchTerm
    max_suggestions: int = Field(DEFAULT_MAX_SUGGESTIONS, ge=1, le=MAX_SUGGESTIONS_CAP)


class AlternativesQuery(CamelModel):
    search_term: SearchTerm
    max_suggestions: int = Field(
        DEFAULT_ALTERNATIVE_SUGGESTIONS, ge=1, le=MAX_ALTERNATIVE_SUGGESTIONS
    )
    max_products: int = Field(DEFAULT_RELATED_PRODUCTS, ge=1, le=MAX_RELATED_PRODUCTS)


class SearchSuggestion(CamelModel):
    """Suggestion row; keeps the engine's column names on the wire."""
    text: str = Field(alias="suggestion")
    type: SuggestionType
    priority: Union[int, float]


class RelatedProduct(CamelModel):
    id: int
    code: str
    name: str
    category: Optional[str] = None
    price: float
    image_url: Optional[str] = None


class SearchAlternatives(CamelModel):
    suggestions: List[str]
    related_products: List[RelatedProduct]


# ---------------------------------------------------------------------------
# Filter options
# ---------------------------------------------------------------------------

class PublicFilterOptionsQuery(CamelModel):
    applied_categories: Optional[List[str]] = None
    applied_materials: Optional[List[str]] = None
    applied_colors: Optional[List[str]] = None
    applied_styles: Optional[List[str]] = None

    @field_validator(
        "applied_categories", "applied_materials", "applied_colors", "applied_styles",
        mode="before",
    )
    @classmethod
    def _decode_list(cls, value):
        return decode_filter_list(value)


class FilterOptionsQuery(CamelModel):
    categories: Optional[List[str]] = None
    price_min: Optional[NonNegative] = None
    price_max: Optional[NonNegative] = None
    materials: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    styles: Optional[List[str]] = None

    @field_validator("categories", "materials", "colors", "styles", mode="before")
    @classmethod
    def _decode_list(cls, value):
        return decode_filter_list(value)

    @field_validator("price_max")
    @classmethod
    def _bounds_ordered(cls, value, info: ValidationInfo):
        return _check_max_not_below_min(value, info)


class FacetOption(CamelModel):
    value: str
    count: int


class PriceRange(CamelModel):
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class DimensionRanges(CamelModel):
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    min_depth: Optional[float] = None
    max_depth: Optional[float] = None


class FilterOptions(CamelModel):
    categories: List[FacetOption]
    materials: List[FacetOption]
    colors: List[FacetOption]
    styles: List[FacetOption]
    price_range: PriceRange
    dimension_ranges: DimensionRanges


# ---------------------------------------------------------------------------
# Search history
# ---------------------------------------------------------------------------

class SearchHistoryCreateRequest(CamelModel):
    search_term: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=HISTORY_TERM_MAX_LENGTH)
    ]
    filters: Optional[str] = Field(None, max_length=HISTORY_FILTERS_MAX_LENGTH)
    result_count: int = Field(..., ge=0)


class SearchHistoryCreated(CamelModel):
    id: int


class SearchHistoryEntry(CamelModel):
    id: int
    search_term: str
    filters: Optional[str] = None
    result_count: int
    created_at: Optional[datetime] = None
