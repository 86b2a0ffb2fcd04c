"""
Public search routes — unauthenticated storefront search.

Public search routes.

Provides:
- POST /public/search                 – product search (JSON body)
- GET  /public/search/autocomplete    – term completions
- GET  /public/search/filter-options  – facets refined by applied filters
- GET  /public/search/alternatives    – zero-result fallback
Version: 1.0.0
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from app.container import get_search_service
from app.core.validation import validated_query
from app.schemas.common import ApiResponse
from app.schemas.search import (
    AlternativesQuery,
    AutocompleteQuery,
    FilterOptions,
    PublicFilterOptionsQuery,
    PublicSearchRequest,
    PublicSearchResponse,
    SearchAlternatives,
    SearchMetadata,
    SearchSuggestion,
)
from app.services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public/search", tags=["public-search"])


@router.post("", response_model=ApiResponse[PublicSearchResponse])
async def public_search(
    request: PublicSearchRequest,
    service: SearchService = Depends(get_search_service),
):
    """Search the catalog with a term, product code and/or filters."""
    params = service.build_product_params(request)
    page = await service.search_products(params)
    return ApiResponse(
        data=PublicSearchResponse(
            products=page.products,
            metadata=SearchMetadata(
                total_results=page.total_results,
                page=page.page_number,
                page_size=page.page_size,
                total_pages=page.total_pages,
            ),
        )
    )


@router.get("/autocomplete", response_model=ApiResponse[List[SearchSuggestion]])
async def autocomplete(
    query: AutocompleteQuery = Depends(validated_query(AutocompleteQuery)),
    service: SearchService = Depends(get_search_service),
):
    """Completions for a partially typed term, in engine order."""
    return ApiResponse(data=await service.autocomplete(query))


@router.get("/filter-options", response_model=ApiResponse[FilterOptions])
async def filter_options(
    query: PublicFilterOptionsQuery = Depends(validated_query(PublicFilterOptionsQuery)),
    service: SearchService = Depends(get_search_service),
):
    """Facet values and ranges still reachable from the applied filters."""
    return ApiResponse(data=await service.filter_options(query))


@router.get("/alternatives", response_model=ApiResponse[SearchAlternatives])
async def alternatives(
    query: AlternativesQuery = Depends(validated_query(AlternativesQuery)),
    service: SearchService = Depends(get_search_service),
):
    """Alternative terms and related products for a search that found nothing."""
    return ApiResponse(data=await service.alternatives(query))
