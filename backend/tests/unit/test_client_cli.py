"""
Unit tests for the terminal client.

Tests cover:
- Argument parsing for one-shot searches
- Shell commands: query changes notify state listeners, the rest print
- Facets, suggestions, chip removal, local and server history, favorites
- The interactive loop refreshes only after query changes

Version: 1.0.0
"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from app.client import cli
from app.client.controller import SearchController
from app.client.state import SearchState


pytestmark = pytest.mark.unit


@pytest.fixture
def api():
    api = MagicMock()
    api.authenticated = False
    api.public_search = AsyncMock(return_value={
        "products": [{"id": 1, "code": "SOF-001", "name": "Oslo Sofa", "price": 1299.0}],
        "metadata": {"totalResults": 1, "page": 1, "pageSize": 24, "totalPages": 1},
    })
    api.alternatives = AsyncMock(return_value={"suggestions": [], "relatedProducts": []})
    api.public_filter_options = AsyncMock(return_value={
        "categories": [{"value": "Sofas", "count": 12}, {"value": "Chairs", "count": 8}],
        "materials": [],
        "colors": [],
        "styles": [],
        "priceRange": {"minPrice": 99.9, "maxPrice": 4999.0},
        "dimensionRanges": {"minHeight": 40, "maxHeight": 220},
    })
    api.autocomplete = AsyncMock(return_value=[{"suggestion": "sofa bed", "type": "product", "priority": 1}])
    api.list_history = AsyncMock(return_value=[])
    return api


@pytest.fixture
def state():
    return SearchState()


@pytest.fixture
def controller(state, api):
    return SearchController(state, api)


@pytest.fixture
def changes(state):
    seen = []
    state.subscribe(seen.append)
    return seen


class TestParser:

    def test_filters_and_options(self):
        args = cli.build_parser().parse_args([
            "sofa", "--category", "Sofas", "--category", "Chairs",
            "--price-max", "900", "--sort", "price-asc", "--page-size", "12", "--view", "list",
        ])
        assert args.term == "sofa"
        assert args.categories == ["Sofas", "Chairs"]
        assert args.price_max == 900.0
        assert args.sort == "price-asc"
        assert args.page_size == 12
        assert args.view == "list"

    def test_rejects_unknown_page_size(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["sofa", "--page-size", "10"])


class TestQueryCommands:

    @pytest.mark.asyncio
    async def test_plain_text_sets_term(self, controller, state, changes):
        await cli.run_command(controller, "sofa")
        assert state.search_term == "sofa"
        assert len(changes) == 1

    @pytest.mark.asyncio
    async def test_filter_commands(self, controller, state):
        await cli.run_command(controller, ":filter categories=Sofas")
        await cli.run_command(controller, ":filter price_max=900")
        assert state.filters.categories == ["Sofas"]
        assert state.filters.price_max == 900.0

        await cli.run_command(controller, ":unfilter categories")
        assert state.filters.categories == []

    @pytest.mark.asyncio
    async def test_unknown_filter_raises(self, controller):
        with pytest.raises(ValueError):
            await cli.run_command(controller, ":filter brand=Acme")

    @pytest.mark.asyncio
    async def test_next_respects_total_pages(self, controller, state, changes):
        controller.total_pages = 2

        await cli.run_command(controller, ":next")
        assert state.current_page == 2
        await cli.run_command(controller, ":next")
        assert state.current_page == 2
        assert len(changes) == 1

    @pytest.mark.asyncio
    async def test_remove_chip_by_position(self, controller, state, capsys):
        state.update_filter("categories", ["Sofas", "Chairs"])
        state.update_filter("price_max", 1500.0)

        await cli.run_command(controller, ":chips")
        out = capsys.readouterr().out
        assert "1. Category: Sofas" in out
        assert "3. Max price: $1,500.00" in out

        await cli.run_command(controller, ":remove 2")
        assert state.filters.categories == ["Sofas"]
        assert state.filters.price_max == 1500.0

    @pytest.mark.asyncio
    async def test_remove_chip_out_of_range(self, controller):
        with pytest.raises(ValueError):
            await cli.run_command(controller, ":remove 1")


class TestInfoCommands:

    @pytest.mark.asyncio
    async def test_facets(self, controller, state, api, capsys, changes):
        state.update_filter("categories", ["Sofas"])
        changes.clear()

        await cli.run_command(controller, ":facets")

        out = capsys.readouterr().out
        assert "Category: *Sofas (12), Chairs (8)" in out
        assert "Price: $99.90 - $4,999.00" in out
        assert "Height: 40 cm - 220 cm" in out
        api.public_filter_options.assert_awaited_once()
        assert changes == []

    @pytest.mark.asyncio
    async def test_suggest(self, controller, api, capsys):
        await cli.run_command(controller, ":suggest so")

        api.autocomplete.assert_awaited_once_with("so")
        assert "sofa bed  (product)" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_local_history_commands(self, controller, state, changes):
        state.add_to_history("sofa", 37)
        state.add_to_history("table", 4)

        await cli.run_command(controller, ":forget 1")
        assert [h.term for h in state.search_history] == ["sofa"]

        await cli.run_command(controller, ":clear-history")
        assert state.search_history == []
        assert changes == []

    @pytest.mark.asyncio
    async def test_server_history_without_token(self, controller, api, capsys):
        await cli.run_command(controller, ":server-history")

        assert "SEARCH_API_TOKEN" in capsys.readouterr().out
        api.list_history.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_server_history(self, state, api, capsys):
        api.authenticated = True
        api.list_history.return_value = [
            {"id": 3, "searchTerm": "sofa", "resultCount": 37, "createdAt": "2024-05-01T10:00:00"},
        ]
        controller = SearchController(state, api)

        await cli.run_command(controller, ":server-history")

        assert "2024-05-01T10:00:00  'sofa'  (37 results)" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_favorites(self, controller, state):
        state.set_search_term("sofa")

        await cli.run_command(controller, ":save Living room")
        favorite_id = state.favorites[0].id
        state.set_search_term("table")

        await cli.run_command(controller, f":load {favorite_id}")
        assert state.search_term == "sofa"

        await cli.run_command(controller, f":unsave {favorite_id}")
        assert state.favorites == []


class TestInteractiveShell:

    @pytest.mark.asyncio
    async def test_refreshes_only_after_query_change(self, state, api):
        storage = MagicMock()
        controller = SearchController(state, api, storage=storage)
        lines = iter(["sofa", ":history", ":facets", "exit"])

        with patch("builtins.input", side_effect=lambda prompt: next(lines)):
            await cli.interactive_shell(controller)

        api.public_search.assert_awaited_once()
        assert api.public_filter_options.await_count == 2
        assert storage.save.call_count == 3

    @pytest.mark.asyncio
    async def test_listener_removed_on_exit(self, state, api):
        controller = SearchController(state, api)

        with patch("builtins.input", side_effect=EOFError):
            await cli.interactive_shell(controller)

        assert state._listeners == []
        api.public_search.assert_not_awaited()


class TestMain:

    def test_one_shot_search(self, api, capsys):
        with patch("app.client.cli.SearchApiClient", return_value=api):
            code = cli.main(["sofa", "--no-persist", "--category", "Sofas"])

        assert code == 0
        body = api.public_search.await_args.args[0]
        assert body["searchTerm"] == "sofa"
        assert body["categories"] == ["Sofas"]
        out = capsys.readouterr().out
        assert "[Category: Sofas]" in out
        assert "Oslo Sofa" in out

    def test_page_applied_after_filters(self, api):
        with patch("app.client.cli.SearchApiClient", return_value=api):
            cli.main(["sofa", "--no-persist", "--page", "3"])

        assert api.public_search.await_args.args[0]["page"] == 3

    def test_error_exit_code(self, api, capsys):
        from app.client.api_client import ApiRequestError

        api.public_search.side_effect = ApiRequestError(500, "Internal server error")
        with patch("app.client.cli.SearchApiClient", return_value=api):
            code = cli.main(["sofa", "--no-persist"])

        assert code == 1
        assert "Error: Internal server error" in capsys.readouterr().out
