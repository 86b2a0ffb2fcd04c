"""
Lazy DI container — singleton access to clients, stores, and services.

Lazy dependency-injection container.

Routes receive these through ``Depends`` so tests can swap them with
``app.dependency_overrides``. Nothing touches the engine until first use.
Version: 1.0.0
"""

from functools import lru_cache

from app.core.config import settings
from app.clients.supabase_client import SupabaseClient
from app.db.search_store import SearchStore
from app.services.search_service import SearchService


# -- Clients ---------------------------------------------------------------

@lru_cache(maxsize=1)
def get_supabase_client():
    return SupabaseClient(settings)


# -- DB Stores -------------------------------------------------------------

@lru_cache(maxsize=1)
def get_search_store():
    return SearchStore(get_supabase_client())


# -- Services --------------------------------------------------------------

@lru_cache(maxsize=1)
def get_search_service():
    return SearchService(get_search_store())
