"""
Search controller — drives fetches from state changes and owns result state.

Search controller.

Each fetch is tagged with the QuerySnapshot it was issued for; a response is
applied only if the state still has that snapshot when it arrives (last write
wins). Zero results is a normal outcome: with a term present, alternatives
are loaded for the empty-state view.
Version: 1.0.0
"""
import json
import logging
from typing import Any, Dict, List, Optional

from app.client.api_client import ApiRequestError, ApiValidationError, SearchApiClient
from app.client.state import QuerySnapshot, SearchState
from app.client.storage import SearchStateStorage
from app.core.constants.search import TERM_MIN_LENGTH

logger = logging.getLogger(__name__)


class SearchController:
    def __init__(
        self,
        state: SearchState,
        api: SearchApiClient,
        storage: Optional[SearchStateStorage] = None,
        record_history: Optional[bool] = None,
    ) -> None:
        self.state = state
        self._api = api
        self._storage = storage
        # Server-side history needs the internal surface
        self._record_history = api.authenticated if record_history is None else record_history

        self.products: List[Dict[str, Any]] = []
        self.total_results: int = 0
        self.total_pages: int = 0
        self.alternatives: Optional[Dict[str, Any]] = None
        self.filter_options: Optional[Dict[str, Any]] = None
        self.server_history: List[Dict[str, Any]] = []
        self.field_errors: Dict[str, str] = {}
        self.banner_error: Optional[str] = None
        self.loading: bool = False
        self.discarded: int = 0
        self._in_flight = 0

    def _is_current(self, snapshot: QuerySnapshot) -> bool:
        if self.state.snapshot() == snapshot:
            return True
        self.discarded += 1
        logger.debug("Discarding stale search response")
        return False

    def _reset_results(self) -> None:
        self.products = []
        self.total_results = 0
        self.total_pages = 0
        self.alternatives = None

    @property
    def authenticated(self) -> bool:
        return self._api.authenticated

    def save(self) -> None:
        """Persist the state's persisted fields, if storage is configured."""
        if self._storage is not None:
            self._storage.save(self.state)

    @property
    def is_empty_result(self) -> bool:
        return not self.loading and self.banner_error is None and not self.field_errors \
            and self.state.has_query() and self.total_results == 0

    async def search(self) -> bool:
        """
        Run the search for the current state.

        Returns True if a response was applied, False if there was nothing to
        search, the request failed, or the response went stale.
        """
        if not self.state.has_query():
            self._reset_results()
            self.field_errors = {}
            self.banner_error = None
            return False

        snapshot = self.state.snapshot()
        self._in_flight += 1
        self.loading = True
        try:
            return await self._search(snapshot)
        finally:
            self._in_flight -= 1
            self.loading = self._in_flight > 0

    async def _search(self, snapshot: QuerySnapshot) -> bool:
        try:
            data = await self._api.public_search(self.state.to_search_body())
        except ApiValidationError as e:
            if self._is_current(snapshot):
                self._reset_results()
                self.field_errors = e.field_errors
                self.banner_error = None
            return False
        except ApiRequestError as e:
            if self._is_current(snapshot):
                self._reset_results()
                self.field_errors = {}
                self.banner_error = e.message
            return False

        if not self._is_current(snapshot):
            return False

        self.field_errors = {}
        self.banner_error = None
        metadata = data.get("metadata") or {}
        self.products = data.get("products") or []
        self.total_results = metadata.get("totalResults", 0)
        self.total_pages = metadata.get("totalPages", 0)
        self.alternatives = None

        term = self.state.search_term.strip()
        if term:
            await self._record(term)
            if self.total_results == 0:
                await self._load_alternatives(term, snapshot)

        self.save()
        return True

    async def _record(self, term: str) -> None:
        self.state.add_to_history(term, self.total_results)
        if not self._record_history:
            return
        filters = self.state.filters.to_dict()
        try:
            await self._api.create_history(
                term, self.total_results, json.dumps(filters) if filters else None
            )
        except ApiRequestError as e:
            logger.warning(f"Failed to record search history: {e}")

    async def _load_alternatives(self, term: str, snapshot: QuerySnapshot) -> None:
        if len(term) < TERM_MIN_LENGTH:
            return
        try:
            alternatives = await self._api.alternatives(term)
        except ApiRequestError as e:
            logger.warning(f"Failed to load alternatives for {term!r}: {e}")
            return
        if self._is_current(snapshot):
            self.alternatives = alternatives

    async def _fetch_filter_options(self) -> Dict[str, Any]:
        filters = self.state.filters
        if self._api.authenticated:
            return await self._api.filter_options({
                "categories": filters.categories,
                "materials": filters.materials,
                "colors": filters.colors,
                "styles": filters.styles,
                "priceMin": filters.price_min,
                "priceMax": filters.price_max,
            })
        return await self._api.public_filter_options(
            categories=filters.categories,
            materials=filters.materials,
            colors=filters.colors,
            styles=filters.styles,
        )

    async def load_filter_options(self) -> bool:
        """
        Refresh facet options for the applied filters.

        Authenticated clients get the account-scoped facets, which also narrow
        by price; anonymous clients get the storefront facets.
        """
        snapshot = self.state.snapshot()
        try:
            options = await self._fetch_filter_options()
        except ApiRequestError as e:
            if self._is_current(snapshot):
                self.banner_error = e.message
            return False
        if not self._is_current(snapshot):
            return False
        self.filter_options = options
        return True

    async def autocomplete(self, partial: str) -> List[Dict[str, Any]]:
        """Completions for a partially typed term; empty below the minimum length."""
        partial = partial.strip()
        if len(partial) < TERM_MIN_LENGTH:
            return []
        try:
            if self._api.authenticated:
                return await self._api.suggestions(partial)
            return await self._api.autocomplete(partial)
        except ApiRequestError as e:
            logger.warning(f"Autocomplete failed for {partial!r}: {e}")
            return []

    async def load_server_history(self) -> List[Dict[str, Any]]:
        """Most recent searches recorded for the account; empty without a token."""
        if not self._api.authenticated:
            return []
        try:
            self.server_history = await self._api.list_history()
        except ApiRequestError as e:
            logger.warning(f"Failed to load search history: {e}")
            return []
        return self.server_history
