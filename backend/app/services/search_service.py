"""
Search service — forwards validated queries to the engine and reshapes results.

Search Service — the forwarding layer.

Handles:
- Mapping validated request models onto typed procedure parameters
- Reading pagination metadata from the first product row
- Unpacking positional multi-set results into named facets
- Renaming engine columns into response DTOs
Version: 1.0.0
"""
import logging
from typing import Any, Dict, List, NamedTuple, Optional

from app.core.constants.search import (
    ALTERNATIVES_SET_COUNT,
    FACET_VALUE_COLUMNS,
    FILTER_OPTION_SET_COUNT,
    HISTORY_LIST_LIMIT,
    PROC_SEARCH_ALTERNATIVES_GET,
    PROC_SEARCH_FILTER_OPTIONS_GET,
    PROC_SEARCH_HISTORY_CREATE,
)
from app.core.exceptions import EngineResultShapeError
from app.db.search_params import (
    AlternativesParams,
    AutocompleteParams,
    FilterOptionsParams,
    HistoryCreateParams,
    HistoryListParams,
    ProductSearchParams,
    SuggestionParams,
)
from app.db.search_store import SearchStore
from app.schemas.search import (
    AlternativesQuery,
    AutocompleteQuery,
    DimensionRanges,
    FacetOption,
    FilterOptions,
    FilterOptionsQuery,
    PriceRange,
    Product,
    PublicFilterOptionsQuery,
    RelatedProduct,
    SearchAlternatives,
    SearchCriteria,
    SearchHistoryCreated,
    SearchHistoryCreateRequest,
    SearchHistoryEntry,
    SearchResultPage,
    SearchSuggestion,
    SuggestionsQuery,
)
from app.utils.type_converters import to_float, to_int

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class FilterOptionSets(NamedTuple):
    """Row sets of the filter-options procedure, in engine order."""
    categories: List[Row]
    materials: List[Row]
    colors: List[Row]
    styles: List[Row]
    price_range: List[Row]
    dimension_ranges: List[Row]

    @classmethod
    def unpack(cls, row_sets: List[List[Row]]) -> "FilterOptionSets":
        if len(row_sets) != FILTER_OPTION_SET_COUNT:
            raise EngineResultShapeError(
                PROC_SEARCH_FILTER_OPTIONS_GET,
                f"expected {FILTER_OPTION_SET_COUNT} row sets, got {len(row_sets)}",
            )
        return cls(*row_sets)


class AlternativeSets(NamedTuple):
    """Row sets of the alternatives procedure, in engine order."""
    suggestions: List[Row]
    related_products: List[Row]

    @classmethod
    def unpack(cls, row_sets: List[List[Row]]) -> "AlternativeSets":
        if len(row_sets) != ALTERNATIVES_SET_COUNT:
            raise EngineResultShapeError(
                PROC_SEARCH_ALTERNATIVES_GET,
                f"expected {ALTERNATIVES_SET_COUNT} row sets, got {len(row_sets)}",
            )
        return cls(*row_sets)


def _first_row(rows: List[Row]) -> Row:
    return rows[0] if rows else {}


class SearchService:
    """Forwarding layer between validated requests and the search engine."""

    def __init__(self, store: SearchStore) -> None:
        self._store = store

    # -- parameter mapping -------------------------------------------------

    @staticmethod
    def build_product_params(
        criteria: SearchCriteria,
        account_id: Optional[int] = None,
    ) -> ProductSearchParams:
        """Map a validated search request onto the product-list procedure."""
        return ProductSearchParams(
            account_id=account_id,
            search_term=criteria.search_term,
            product_code=criteria.product_code,
            categories=tuple(criteria.categories or ()),
            price_min=criteria.price_min,
            price_max=criteria.price_max,
            materials=tuple(criteria.materials or ()),
            colors=tuple(criteria.colors or ()),
            styles=tuple(criteria.styles or ()),
            height_min=criteria.height_min,
            height_max=criteria.height_max,
            width_min=criteria.width_min,
            width_max=criteria.width_max,
            depth_min=criteria.depth_min,
            depth_max=criteria.depth_max,
            sort_by=criteria.sort_by,
            page=criteria.page,
            page_size=criteria.page_size,
            session_id=getattr(criteria, "session_id", None),
        )

    # -- reshaping ---------------------------------------------------------

    @staticmethod
    def product_from_row(row: Row) -> Product:
        return Product(
            id=row["id_product"],
            code=row["product_code"],
            name=row["name"],
            description=row.get("description"),
            category=row.get("category"),
            material=row.get("material"),
            color=row.get("color"),
            style=row.get("style"),
            price=to_float(row.get("price")) or 0.0,
            height=to_float(row.get("height")),
            width=to_float(row.get("width")),
            depth=to_float(row.get("depth")),
            image_url=row.get("image_url"),
            created_at=row.get("date_created"),
        )

    @classmethod
    def page_from_rows(cls, rows: List[Row], params: ProductSearchParams) -> SearchResultPage:
        """
        Build a result page from the product rows.

        The engine embeds identical pagination metadata on every row, so it is
        read from the first row only. Page size is never echoed by the engine.
        """
        if not rows:
            return SearchResultPage(
                products=[],
                total_results=0,
                page_number=params.effective_page,
                page_size=params.effective_page_size,
                total_pages=0,
            )

        first = rows[0]
        return SearchResultPage(
            products=[cls.product_from_row(row) for row in rows],
            total_results=to_int(first.get("total_results"), 0),
            page_number=to_int(first.get("current_page"), params.effective_page),
            page_size=params.effective_page_size,
            total_pages=to_int(first.get("total_pages"), 0),
        )

    @staticmethod
    def _facet(rows: List[Row], facet: str) -> List[FacetOption]:
        column = FACET_VALUE_COLUMNS[facet]
        return [
            FacetOption(value=row[column], count=to_int(row.get("product_count"), 0))
            for row in rows
        ]

    @classmethod
    def filter_options_from_sets(cls, row_sets: List[List[Row]]) -> FilterOptions:
        sets = FilterOptionSets.unpack(row_sets)
        price = _first_row(sets.price_range)
        dims = _first_row(sets.dimension_ranges)
        return FilterOptions(
            categories=cls._facet(sets.categories, "categories"),
            materials=cls._facet(sets.materials, "materials"),
            colors=cls._facet(sets.colors, "colors"),
            styles=cls._facet(sets.styles, "styles"),
            price_range=PriceRange(
                min_price=to_float(price.get("min_price")),
                max_price=to_float(price.get("max_price")),
            ),
            dimension_ranges=DimensionRanges(
                **{key: to_float(dims.get(key)) for key in DimensionRanges.model_fields}
            ),
        )

    # -- operations --------------------------------------------------------

    async def search_products(self, params: ProductSearchParams) -> SearchResultPage:
        rows = await self._store.search_products(params)
        page = self.page_from_rows(rows, params)
        logger.info(
            f"Product search: term={params.search_term!r} page={page.page_number} "
            f"results={page.total_results}"
        )
        return page

    async def autocomplete(self, query: AutocompleteQuery) -> List[SearchSuggestion]:
        rows = await self._store.get_autocomplete(
            AutocompleteParams(search_term=query.search_term, max_suggestions=query.max_suggestions)
        )
        return [SearchSuggestion.model_validate(row) for row in rows]

    async def suggestions(self, query: SuggestionsQuery, account_id: int) -> List[SearchSuggestion]:
        rows = await self._store.get_suggestions(
            SuggestionParams(
                account_id=account_id,
                partial_term=query.partial_term,
                max_suggestions=query.max_suggestions,
            )
        )
        return [SearchSuggestion.model_validate(row) for row in rows]

    async def filter_options(
        self,
        query: FilterOptionsQuery | PublicFilterOptionsQuery,
        account_id: Optional[int] = None,
    ) -> FilterOptions:
        if isinstance(query, PublicFilterOptionsQuery):
            params = FilterOptionsParams(
                categories=tuple(query.applied_categories or ()),
                materials=tuple(query.applied_materials or ()),
                colors=tuple(query.applied_colors or ()),
                styles=tuple(query.applied_styles or ()),
            )
        else:
            params = FilterOptionsParams(
                account_id=account_id,
                categories=tuple(query.categories or ()),
                materials=tuple(query.materials or ()),
                colors=tuple(query.colors or ()),
                styles=tuple(query.styles or ()),
                price_min=query.price_min,
                price_max=query.price_max,
            )
        row_sets = await self._store.get_filter_options(params)
        return self.filter_options_from_sets(row_sets)

    async def alternatives(self, query: AlternativesQuery) -> SearchAlternatives:
        row_sets = await self._store.get_alternatives(
            AlternativesParams(
                search_term=query.search_term,
                max_suggestions=query.max_suggestions,
                max_products=query.max_products,
            )
        )
        sets = AlternativeSets.unpack(row_sets)
        return SearchAlternatives(
            suggestions=[row["suggestion"] for row in sets.suggestions],
            related_products=[
                RelatedProduct(
                    id=row["id_product"],
                    code=row["product_code"],
                    name=row["name"],
                    category=row.get("category"),
                    price=to_float(row.get("price")) or 0.0,
                    image_url=row.get("image_url"),
                )
                for row in sets.related_products
            ],
        )

    async def create_history(
        self, request: SearchHistoryCreateRequest, account_id: int
    ) -> SearchHistoryCreated:
        row = await self._store.create_history(
            HistoryCreateParams(
                account_id=account_id,
                search_term=request.search_term,
                filters=request.filters,
                result_count=request.result_count,
            )
        )
        if not row or row.get("id_search_history") is None:
            raise EngineResultShapeError(PROC_SEARCH_HISTORY_CREATE, "missing id_search_history")
        return SearchHistoryCreated(id=row["id_search_history"])

    async def list_history(
        self, account_id: int, limit: int = HISTORY_LIST_LIMIT
    ) -> List[SearchHistoryEntry]:
        rows = await self._store.list_history(
            HistoryListParams(account_id=account_id, max_results=limit)
        )
        return [
            SearchHistoryEntry(
                id=row["id_search_history"],
                search_term=row["search_term"],
                filters=row.get("filters"),
                result_count=to_int(row.get("result_count"), 0),
                created_at=row.get("date_created"),
            )
            for row in rows
        ]
