"""
Search API client — async HTTP access to both search surfaces.

Unwraps the ``{success, data, error, details}`` envelope and raises:
- ApiValidationError for 400 validationError responses (per-field details)
- ApiRequestError for every other failure, including transport errors
Version: 1.0.0
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from app.utils.filter_codec import encode_filter_list

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/external/public/search"
INTERNAL_PREFIX = "/internal/search"


class ApiRequestError(Exception):
    """Non-validation failure. ``status_code`` is 0 when no response arrived."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class ApiValidationError(ApiRequestError):
    """The server rejected one or more request fields."""

    def __init__(self, details: List[Dict[str, Any]]):
        self.details = details
        super().__init__(400, "validationError")

    @property
    def field_errors(self) -> Dict[str, str]:
        return {d.get("field", "request"): d.get("message", "") for d in self.details}


def _query(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset params and JSON-encode list filters for the query string."""
    out: Dict[str, Any] = {}
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            value = encode_filter_list(value)
        if value is not None:
            out[key] = value
    return out


class SearchApiClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        auth: bool = False,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if auth:
            if not self._token:
                raise ApiRequestError(401, "An access token is required for this request")
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Search API unreachable: {method} {path}: {e}")
            raise ApiRequestError(0, "Search service unavailable")

        try:
            body = resp.json()
        except ValueError:
            raise ApiRequestError(resp.status_code, resp.text or "Invalid response")
        if not isinstance(body, dict):
            raise ApiRequestError(resp.status_code, "Unexpected response shape")

        if resp.status_code >= 400 or not body.get("success"):
            error = body.get("error") or f"HTTP {resp.status_code}"
            if error == "validationError":
                raise ApiValidationError(body.get("details") or [])
            message = body.get("details") if isinstance(body.get("details"), str) else error
            raise ApiRequestError(resp.status_code, message)

        return body.get("data")

    # -- public surface ------------------------------------------------------

    async def public_search(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Returns ``{products, metadata}``."""
        return await self._request("POST", PUBLIC_PREFIX, json=body)

    async def autocomplete(self, search_term: str, max_suggestions: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self._request(
            "GET",
            f"{PUBLIC_PREFIX}/autocomplete",
            params=_query({"searchTerm": search_term, "maxSuggestions": max_suggestions}),
        )

    async def public_filter_options(
        self,
        categories: Iterable[str] = (),
        materials: Iterable[str] = (),
        colors: Iterable[str] = (),
        styles: Iterable[str] = (),
    ) -> Dict[str, Any]:
        return await self._request(
            "GET",
            f"{PUBLIC_PREFIX}/filter-options",
            params=_query({
                "appliedCategories": list(categories),
                "appliedMaterials": list(materials),
                "appliedColors": list(colors),
                "appliedStyles": list(styles),
            }),
        )

    async def alternatives(
        self,
        search_term: str,
        max_suggestions: Optional[int] = None,
        max_products: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Returns ``{suggestions, relatedProducts}``."""
        return await self._request(
            "GET",
            f"{PUBLIC_PREFIX}/alternatives",
            params=_query({
                "searchTerm": search_term,
                "maxSuggestions": max_suggestions,
                "maxProducts": max_products,
            }),
        )

    # -- internal surface ----------------------------------------------------

    async def suggestions(self, partial_term: str, max_suggestions: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self._request(
            "GET",
            f"{INTERNAL_PREFIX}/suggestions",
            params=_query({"partialTerm": partial_term, "maxSuggestions": max_suggestions}),
            auth=True,
        )

    async def filter_options(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "GET", f"{INTERNAL_PREFIX}/filter-options", params=_query(params), auth=True
        )

    async def list_history(self) -> List[Dict[str, Any]]:
        return await self._request("GET", f"{INTERNAL_PREFIX}/history", auth=True)

    async def create_history(
        self, search_term: str, result_count: int, filters: Optional[str] = None
    ) -> Dict[str, Any]:
        """Returns ``{id}``."""
        return await self._request(
            "POST",
            f"{INTERNAL_PREFIX}/history",
            json={"searchTerm": search_term, "filters": filters, "resultCount": result_count},
            auth=True,
        )
