"""
Client search state — the single source of truth for the search UI.

Search state container.

Ephemeral (per session): search_term, filters, current_page.
Persisted (across sessions): view_mode, sort_by, page_size, search_history,
favorites.

Any change to the term, a filter, the sort key or the page size resets the
current page to 1. Page navigation touches nothing else. Listeners are called
synchronously after every mutation that changes the query.
Version: 1.0.0
"""
import json
import uuid
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from app.core.constants.search import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT,
    PAGE_SIZES,
    SORT_KEYS,
)

HISTORY_MAX_ITEMS = 10
FAVORITE_NAME_MIN_LENGTH = 3
FAVORITE_NAME_MAX_LENGTH = 50
VIEW_MODES = ("grid", "list")

LIST_FILTERS = ("categories", "materials", "colors", "styles")
RANGE_FILTERS = (
    "price_min", "price_max",
    "height_min", "height_max",
    "width_min", "width_max",
    "depth_min", "depth_max",
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SearchFilters:
    """Filter selection. Empty lists and None bounds mean no constraint."""
    categories: List[str] = field(default_factory=list)
    materials: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    height_min: Optional[float] = None
    height_max: Optional[float] = None
    width_min: Optional[float] = None
    width_max: Optional[float] = None
    depth_min: Optional[float] = None
    depth_max: Optional[float] = None

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in LIST_FILTERS) and all(
            getattr(self, name) is None for name in RANGE_FILTERS
        )

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dict with unset filters dropped (wire and storage form)."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value == []:
                continue
            out[_camel(f.name)] = list(value) if isinstance(value, list) else value
        return out

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SearchFilters":
        data = data or {}
        kwargs = {}
        for f in fields(cls):
            value = data.get(_camel(f.name), data.get(f.name))
            if value is None:
                continue
            kwargs[f.name] = list(value) if f.name in LIST_FILTERS else float(value)
        return cls(**kwargs)

    def copy(self) -> "SearchFilters":
        return SearchFilters.from_dict(self.to_dict())


@dataclass
class HistoryItem:
    term: str
    filters: Dict[str, Any]
    result_count: int
    searched_at: str = field(default_factory=_now_iso)


@dataclass
class Favorite:
    id: str
    name: str
    term: str
    filters: Dict[str, Any]
    created_at: str = field(default_factory=_now_iso)


@dataclass(frozen=True)
class QuerySnapshot:
    """Everything a result page depends on. Used to discard stale responses."""
    search_term: str
    filters: str
    sort_by: str
    page_size: int
    current_page: int


Listener = Callable[["SearchState"], None]


class SearchState:
    """Explicit state container, passed by reference to controller and views."""

    def __init__(self) -> None:
        self.search_term: str = ""
        self.filters = SearchFilters()
        self.current_page: int = DEFAULT_PAGE
        self.view_mode: str = "grid"
        self.sort_by: str = DEFAULT_SORT
        self.page_size: int = DEFAULT_PAGE_SIZE
        self.search_history: List[HistoryItem] = []
        self.favorites: List[Favorite] = []
        self._listeners: List[Listener] = []

    # -- listeners -----------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -- query-affecting transitions ----------------------------------------

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        self.current_page = 1
        self._notify()

    def set_filters(self, filters: SearchFilters) -> None:
        self.filters = filters.copy()
        self.current_page = 1
        self._notify()

    def update_filter(self, name: str, value: Any) -> None:
        if name in LIST_FILTERS:
            value = list(value or [])
        elif name not in RANGE_FILTERS:
            raise ValueError(f"Unknown filter: {name}")
        setattr(self.filters, name, value)
        self.current_page = 1
        self._notify()

    def clear_filters(self) -> None:
        self.filters = SearchFilters()
        self.current_page = 1
        self._notify()

    def set_sort_by(self, sort_by: str) -> None:
        if sort_by not in SORT_KEYS:
            raise ValueError(f"sort_by must be one of {', '.join(SORT_KEYS)}")
        self.sort_by = sort_by
        self.current_page = 1
        self._notify()

    def set_page_size(self, page_size: int) -> None:
        if page_size not in PAGE_SIZES:
            raise ValueError(f"page_size must be one of {', '.join(str(s) for s in PAGE_SIZES)}")
        self.page_size = page_size
        self.current_page = 1
        self._notify()

    def set_current_page(self, page: int) -> None:
        if page < 1:
            raise ValueError("page must be >= 1")
        self.current_page = page
        self._notify()

    # -- presentation only ---------------------------------------------------

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"view_mode must be one of {', '.join(VIEW_MODES)}")
        self.view_mode = mode

    # -- history -------------------------------------------------------------

    def add_to_history(self, term: str, result_count: int) -> HistoryItem:
        item = HistoryItem(term=term, filters=self.filters.to_dict(), result_count=result_count)
        self.search_history = [item, *self.search_history][:HISTORY_MAX_ITEMS]
        return item

    def remove_from_history(self, index: int) -> None:
        self.search_history = [h for i, h in enumerate(self.search_history) if i != index]

    def clear_history(self) -> None:
        self.search_history = []

    # -- favorites -----------------------------------------------------------

    def add_favorite(self, name: str) -> Favorite:
        """Save the current term and filters under ``name`` (3-50 characters)."""
        name = name.strip()
        if not FAVORITE_NAME_MIN_LENGTH <= len(name) <= FAVORITE_NAME_MAX_LENGTH:
            raise ValueError(
                f"Favorite name must be {FAVORITE_NAME_MIN_LENGTH}-{FAVORITE_NAME_MAX_LENGTH} characters"
            )
        favorite = Favorite(
            id=str(uuid.uuid4()),
            name=name,
            term=self.search_term,
            filters=self.filters.to_dict(),
        )
        self.favorites = [*self.favorites, favorite]
        return favorite

    def remove_favorite(self, favorite_id: str) -> None:
        self.favorites = [f for f in self.favorites if f.id != favorite_id]

    def load_favorite(self, favorite_id: str) -> bool:
        """Restore a favorite's term and filters. Returns False if it does not exist."""
        favorite = next((f for f in self.favorites if f.id == favorite_id), None)
        if favorite is None:
            return False
        self.search_term = favorite.term
        self.filters = SearchFilters.from_dict(favorite.filters)
        self.current_page = 1
        self._notify()
        return True

    # -- derived -------------------------------------------------------------

    def has_query(self) -> bool:
        return bool(self.search_term.strip()) or not self.filters.is_empty()

    def snapshot(self) -> QuerySnapshot:
        return QuerySnapshot(
            search_term=self.search_term,
            filters=json.dumps(self.filters.to_dict(), sort_keys=True),
            sort_by=self.sort_by,
            page_size=self.page_size,
            current_page=self.current_page,
        )

    def to_search_body(self) -> Dict[str, Any]:
        """Body for ``POST /public/search``."""
        body: Dict[str, Any] = {}
        term = self.search_term.strip()
        if term:
            body["searchTerm"] = term
        body.update(self.filters.to_dict())
        body["sortBy"] = self.sort_by
        body["page"] = self.current_page
        body["pageSize"] = self.page_size
        return body

    # -- persistence ---------------------------------------------------------

    def persisted(self) -> Dict[str, Any]:
        return {
            "viewMode": self.view_mode,
            "sortBy": self.sort_by,
            "pageSize": self.page_size,
            "searchHistory": [asdict(h) for h in self.search_history],
            "favorites": [asdict(f) for f in self.favorites],
        }

    def restore(self, data: Dict[str, Any]) -> None:
        """Apply persisted fields. Unknown or invalid values keep their defaults."""
        if data.get("viewMode") in VIEW_MODES:
            self.view_mode = data["viewMode"]
        if data.get("sortBy") in SORT_KEYS:
            self.sort_by = data["sortBy"]
        if data.get("pageSize") in PAGE_SIZES:
            self.page_size = data["pageSize"]
        self.search_history = [
            HistoryItem(**item) for item in data.get("searchHistory", [])
        ][:HISTORY_MAX_ITEMS]
        self.favorites = [Favorite(**item) for item in data.get("favorites", [])]
