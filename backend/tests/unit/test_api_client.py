"""
Unit tests for the search API client, using httpx.MockTransport.

Tests cover:
- Envelope unwrapping and request shape for both surfaces
- JSON encoding of list filters on query strings
- validationError -> ApiValidationError, anything else -> ApiRequestError
- Bearer token required for the internal surface

Version: 1.0.0
"""
import json

import httpx
import pytest

from app.client.api_client import ApiRequestError, ApiValidationError, SearchApiClient


pytestmark = pytest.mark.unit

BASE_URL = "http://search.test/api/v1"


def make_client(handler, token=None) -> SearchApiClient:
    return SearchApiClient(BASE_URL, token=token, transport=httpx.MockTransport(handler))


def ok(data) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "data": data})


class TestPublicSurface:

    @pytest.mark.asyncio
    async def test_public_search(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return ok({"products": [], "metadata": {"totalResults": 0}})

        api = make_client(handler)
        data = await api.public_search({"searchTerm": "sofa", "page": 1})

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/v1/external/public/search"
        assert seen["body"] == {"searchTerm": "sofa", "page": 1}
        assert seen["auth"] is None
        assert data["metadata"]["totalResults"] == 0

    @pytest.mark.asyncio
    async def test_filter_options_encodes_lists(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return ok({})

        await make_client(handler).public_filter_options(categories=["Sofas", "Chairs"])

        assert seen["params"] == {"appliedCategories": '["Sofas", "Chairs"]'}

    @pytest.mark.asyncio
    async def test_alternatives_drops_unset_params(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return ok({"suggestions": [], "relatedProducts": []})

        await make_client(handler).alternatives("sofa", max_products=4)

        assert seen["params"] == {"searchTerm": "sofa", "maxProducts": "4"}


class TestInternalSurface:

    @pytest.mark.asyncio
    async def test_token_required(self):
        api = make_client(lambda request: ok([]))
        assert not api.authenticated
        with pytest.raises(ApiRequestError) as exc_info:
            await api.list_history()
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_bearer_sent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return ok({"id": 42})

        api = make_client(handler, token="abc")
        data = await api.create_history("sofa", 37, '{"colors":["Grey"]}')

        assert seen["auth"] == "Bearer abc"
        assert seen["body"] == {"searchTerm": "sofa", "filters": '{"colors":["Grey"]}', "resultCount": 37}
        assert data == {"id": 42}

    @pytest.mark.asyncio
    async def test_filter_options_query(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return ok({"categories": []})

        await make_client(handler, token="abc").filter_options(
            {"categories": [], "materials": ["Oak"], "priceMin": None, "priceMax": 900.0}
        )

        assert seen["path"] == "/api/v1/internal/search/filter-options"
        assert seen["params"] == {"materials": '["Oak"]', "priceMax": "900.0"}

    @pytest.mark.asyncio
    async def test_suggestions_and_history_paths(self):
        paths = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append((request.method, request.url.path, dict(request.url.params)))
            return ok([])

        api = make_client(handler, token="abc")
        await api.suggestions("so")
        await api.list_history()

        assert paths == [
            ("GET", "/api/v1/internal/search/suggestions", {"partialTerm": "so"}),
            ("GET", "/api/v1/internal/search/history", {}),
        ]


class TestErrors:

    @pytest.mark.asyncio
    async def test_validation_error(self):
        details = [{"field": "pageSize", "message": "must be one of 12, 24, 36, 48", "type": "value_error"}]

        def handler(request):
            return httpx.Response(400, json={"success": False, "error": "validationError", "details": details})

        with pytest.raises(ApiValidationError) as exc_info:
            await make_client(handler).public_search({"pageSize": 7})
        assert exc_info.value.details == details
        assert exc_info.value.field_errors == {"pageSize": "must be one of 12, 24, 36, 48"}

    @pytest.mark.asyncio
    async def test_business_error_message(self):
        def handler(request):
            return httpx.Response(400, json={"success": False, "error": "Invalid filter combination"})

        with pytest.raises(ApiRequestError) as exc_info:
            await make_client(handler).public_search({})
        assert not isinstance(exc_info.value, ApiValidationError)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid filter combination"

    @pytest.mark.asyncio
    async def test_server_error(self):
        def handler(request):
            return httpx.Response(500, json={"success": False, "error": "Internal server error"})

        with pytest.raises(ApiRequestError) as exc_info:
            await make_client(handler).public_search({})
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(ApiRequestError) as exc_info:
            await make_client(handler).public_search({})
        assert exc_info.value.message == "Bad Gateway"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[1, 2], "ok", 42])
    async def test_non_object_json_response(self, payload):
        def handler(request):
            return httpx.Response(200, json=payload)

        with pytest.raises(ApiRequestError) as exc_info:
            await make_client(handler).public_search({})
        assert exc_info.value.message == "Unexpected response shape"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ApiRequestError) as exc_info:
            await make_client(handler).public_search({})
        assert exc_info.value.status_code == 0
