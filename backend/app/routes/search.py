"""
Search routes — account-scoped internal search API.

Internal search routes.

Every call requires a Cognito access token naming an account, plus READ or
CREATE on the SEARCH securable.

Provides:
- GET  /search/products        – product search (JSON-encoded list filters)
- GET  /search/suggestions     – term suggestions
- GET  /search/filter-options  – facets refined by applied filters
- GET  /search/history         – most recent searches for the account
- POST /search/history         – record a completed search
Version: 1.0.0
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from app.container import get_search_service
from app.core.auth import require_permission
from app.core.config import settings
from app.core.constants.search import PERMISSION_CREATE, PERMISSION_READ, SEARCH_SECURABLE
from app.core.validation import validated_query
from app.schemas.common import ApiResponse
from app.schemas.search import (
    FilterOptions,
    FilterOptionsQuery,
    ProductSearchQuery,
    ProductSearchResponse,
    SearchHistoryCreated,
    SearchHistoryCreateRequest,
    SearchHistoryEntry,
    SearchSuggestion,
    SuggestionsQuery,
)
from app.services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

can_read = require_permission(SEARCH_SECURABLE, PERMISSION_READ)
can_create = require_permission(SEARCH_SECURABLE, PERMISSION_CREATE)


@router.get("/products", response_model=ApiResponse[ProductSearchResponse])
async def search_products(
    current_user: dict = Depends(can_read),
    query: ProductSearchQuery = Depends(validated_query(ProductSearchQuery)),
    service: SearchService = Depends(get_search_service),
):
    """Search the account's catalog."""
    params = service.build_product_params(query, account_id=current_user["account_id"])
    page = await service.search_products(params)
    return ApiResponse(
        data=ProductSearchResponse(
            products=page.products,
            total_count=page.total_results,
            page=page.page_number,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
    )


@router.get("/suggestions", response_model=ApiResponse[List[SearchSuggestion]])
async def search_suggestions(
    current_user: dict = Depends(can_read),
    query: SuggestionsQuery = Depends(validated_query(SuggestionsQuery)),
    service: SearchService = Depends(get_search_service),
):
    """Suggestions for a partial term, in engine order."""
    return ApiResponse(data=await service.suggestions(query, current_user["account_id"]))


@router.get("/filter-options", response_model=ApiResponse[FilterOptions])
async def search_filter_options(
    current_user: dict = Depends(can_read),
    query: FilterOptionsQuery = Depends(validated_query(FilterOptionsQuery)),
    service: SearchService = Depends(get_search_service),
):
    """Facet values and ranges for the account, refined by applied filters."""
    return ApiResponse(data=await service.filter_options(query, current_user["account_id"]))


@router.get("/history", response_model=ApiResponse[List[SearchHistoryEntry]])
async def list_search_history(
    current_user: dict = Depends(can_read),
    service: SearchService = Depends(get_search_service),
):
    """Most recent searches for the account, newest first."""
    entries = await service.list_history(
        current_user["account_id"], limit=settings.search_history_limit
    )
    return ApiResponse(data=entries)


@router.post("/history", response_model=ApiResponse[SearchHistoryCreated])
async def create_search_history(
    request: SearchHistoryCreateRequest,
    current_user: dict = Depends(can_create),
    service: SearchService = Depends(get_search_service),
):
    """Record a completed search. Filters are stored verbatim."""
    created = await service.create_history(request, current_user["account_id"])
    return ApiResponse(data=created)
