"""
Pytest configuration and shared fixtures for Furniture Search tests.

Provides mock engine clients, a mocked search service, auth overrides, and
sample engine rows.
Version: 1.0.0
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_settings():
    """Settings object with test defaults (no real credentials)."""
    from app.core.config import Settings
    return Settings(
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-supabase-key",
        cognito_user_pool_id="us-east-1_TestPool",
        cognito_app_client_id="test-client-id",
    )


# ---------------------------------------------------------------------------
# Engine client (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_supabase_client():
    """Mocked SupabaseClient whose rpc(...).execute() returns no data."""
    client = MagicMock()
    rpc_call = MagicMock()
    rpc_call.execute.return_value = MagicMock(data=[])
    client.client.rpc.return_value = rpc_call
    return client


# ---------------------------------------------------------------------------
# Search service (mocked) and app wiring
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_search_service():
    """Mocked SearchService; parameter mapping stays real."""
    from app.services.search_service import SearchService

    service = MagicMock()
    service.build_product_params = MagicMock(side_effect=SearchService.build_product_params)
    service.search_products = AsyncMock()
    service.autocomplete = AsyncMock(return_value=[])
    service.suggestions = AsyncMock(return_value=[])
    service.filter_options = AsyncMock()
    service.alternatives = AsyncMock()
    service.create_history = AsyncMock()
    service.list_history = AsyncMock(return_value=[])
    return service


@pytest.fixture
def mock_current_user():
    """Authenticated caller holding READ and CREATE on SEARCH."""
    return {
        "user_id": "test-user-id",
        "username": "tester",
        "email": "test@test.com",
        "account_id": 7,
        "groups": [],
        "permissions": ["SEARCH:READ", "SEARCH:CREATE"],
    }


@pytest.fixture
def app(mock_search_service):
    from app.main import app as fastapi_app
    from app.container import get_search_service

    fastapi_app.dependency_overrides[get_search_service] = lambda: mock_search_service
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client with the search service mocked and no auth override."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def authed_client(app, mock_current_user):
    """Test client whose bearer token always resolves to ``mock_current_user``."""
    from app.core.auth import get_current_user

    app.dependency_overrides[get_current_user] = lambda: mock_current_user
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


# ---------------------------------------------------------------------------
# Sample engine rows
# ---------------------------------------------------------------------------

def make_product_row(idx: int = 1, **overrides) -> dict:
    row = {
        "id_product": idx,
        "product_code": f"SOF-{idx:03d}",
        "name": f"Sofa {idx}",
        "description": "Three-seat sofa",
        "category": "Sofas",
        "material": "Linen",
        "color": "Grey",
        "style": "Modern",
        "price": "1299.00",
        "height": 85,
        "width": 210,
        "depth": 95,
        "image_url": f"https://cdn.example.com/sof-{idx:03d}.jpg",
        "date_created": "2024-05-01T10:00:00",
        "total_results": 37,
        "current_page": 1,
        "total_pages": 2,
    }
    row.update(overrides)
    return row


@pytest.fixture
def product_row():
    """Factory for a product row; keyword overrides replace columns."""
    return make_product_row


@pytest.fixture
def sample_product_rows():
    """24 rows of a 37-result search, page 1 of 2."""
    return [make_product_row(i) for i in range(1, 25)]


@pytest.fixture
def sample_filter_option_sets():
    """Six row sets in engine order."""
    return [
        [{"category": "Sofas", "product_count": 12}, {"category": "Chairs", "product_count": 8}],
        [{"material": "Oak", "product_count": 5}],
        [{"color": "Grey", "product_count": 9}],
        [{"style": "Modern", "product_count": 14}],
        [{"min_price": "99.90", "max_price": "4999.00"}],
        [{
            "min_height": 40, "max_height": 220,
            "min_width": 35, "max_width": 300,
            "min_depth": 30, "max_depth": 120,
        }],
    ]
