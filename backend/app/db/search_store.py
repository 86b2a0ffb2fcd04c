"""
Search store — engine procedure calls for search, facets, and history.

Search store – one method per engine procedure.
Version: 1.0.0
"""

import logging
from typing import Any, Dict, List, Optional

from app.core.constants.search import (
    PROC_SEARCH_ALTERNATIVES_GET,
    PROC_SEARCH_AUTOCOMPLETE,
    PROC_SEARCH_FILTER_OPTIONS_GET,
    PROC_SEARCH_HISTORY_CREATE,
    PROC_SEARCH_HISTORY_LIST,
    PROC_SEARCH_PRODUCT_LIST,
    PROC_SEARCH_SUGGESTIONS_GET,
)
from app.db.base_store import BaseStore, ExpectedReturn
from app.db.search_params import (
    AlternativesParams,
    AutocompleteParams,
    FilterOptionsParams,
    HistoryCreateParams,
    HistoryListParams,
    ProductSearchParams,
    SuggestionParams,
)

logger = logging.getLogger("search_store")

Row = Dict[str, Any]


class SearchStore(BaseStore):
    """Procedure calls against the search engine."""

    async def search_products(self, params: ProductSearchParams) -> List[Row]:
        return await self._rpc(
            PROC_SEARCH_PRODUCT_LIST, params.as_params(), ExpectedReturn.MULTIPLE
        )

    async def get_suggestions(self, params: SuggestionParams) -> List[Row]:
        """Internal suggestions (account-scoped)."""
        return await self._rpc(
            PROC_SEARCH_SUGGESTIONS_GET, params.as_params(), ExpectedReturn.MULTIPLE
        )

    async def get_autocomplete(self, params: AutocompleteParams) -> List[Row]:
        """Public autocomplete."""
        return await self._rpc(
            PROC_SEARCH_AUTOCOMPLETE, params.as_params(), ExpectedReturn.MULTIPLE
        )

    async def get_filter_options(self, params: FilterOptionsParams) -> List[List[Row]]:
        return await self._rpc(
            PROC_SEARCH_FILTER_OPTIONS_GET, params.as_params(), ExpectedReturn.MULTI
        )

    async def get_alternatives(self, params: AlternativesParams) -> List[List[Row]]:
        return await self._rpc(
            PROC_SEARCH_ALTERNATIVES_GET, params.as_params(), ExpectedReturn.MULTI
        )

    async def create_history(self, params: HistoryCreateParams) -> Optional[Row]:
        row = await self._rpc(
            PROC_SEARCH_HISTORY_CREATE, params.as_params(), ExpectedReturn.SINGLE
        )
        logger.info(
            "search history recorded account=%s results=%s",
            params.account_id,
            params.result_count,
        )
        return row

    async def list_history(self, params: HistoryListParams) -> List[Row]:
        return await self._rpc(
            PROC_SEARCH_HISTORY_LIST, params.as_params(), ExpectedReturn.MULTIPLE
        )
