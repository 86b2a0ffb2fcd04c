"""
Unit tests for client view helpers.
Version: 1.0.0
"""
import pytest

from app.client.state import SearchFilters
from app.client.view import (
    applied_filter_chips,
    format_currency,
    pagination_window,
    remove_chip,
    render_empty_state,
    render_filter_options,
    render_pagination,
    render_results,
    render_suggestions,
)


pytestmark = pytest.mark.unit


class TestFilterChips:

    def test_one_chip_per_value_and_bound(self):
        filters = SearchFilters(
            categories=["Sofas", "Chairs"],
            colors=["Grey"],
            price_min=100.0,
            price_max=1500.0,
            height_max=90.0,
        )
        chips = applied_filter_chips(filters)
        assert [(c.label, c.value) for c in chips] == [
            ("Category", "Sofas"),
            ("Category", "Chairs"),
            ("Min price", "$100.00"),
            ("Max price", "$1,500.00"),
            ("Color", "Grey"),
            ("Max height", "90 cm"),
        ]

    def test_zero_bound_is_a_chip(self):
        chips = applied_filter_chips(SearchFilters(price_min=0.0))
        assert len(chips) == 1
        assert chips[0].value == "$0.00"

    def test_no_filters_no_chips(self):
        assert applied_filter_chips(SearchFilters()) == []

    def test_remove_chip(self):
        filters = SearchFilters(categories=["Sofas", "Chairs"], price_max=1500.0)
        chips = applied_filter_chips(filters)

        without_chairs = remove_chip(filters, chips[1])
        assert without_chairs.categories == ["Sofas"]
        assert filters.categories == ["Sofas", "Chairs"]

        without_price = remove_chip(filters, chips[2])
        assert without_price.price_max is None


class TestFormatting:

    def test_currency(self):
        assert format_currency(1299) == "$1,299.00"
        assert format_currency(None) == "-"


class TestPagination:

    @pytest.mark.parametrize("current,total,expected", [
        (1, 0, []),
        (1, 1, []),
        (2, 5, [1, 2, 3, 4, 5]),
        (1, 7, [1, 2, 3, 4, 5, 6, 7]),
        (2, 10, [1, 2, 3, 4, None, 10]),
        (5, 10, [1, None, 4, 5, 6, None, 10]),
        (9, 10, [1, None, 7, 8, 9, 10]),
    ])
    def test_window(self, current, total, expected):
        assert pagination_window(current, total) == expected

    def test_render(self):
        assert render_pagination(5, 10) == "< 1 ... 4 [5] 6 ... 10 >"
        assert render_pagination(1, 1) == ""


class TestRender:

    PRODUCT = {
        "id": 1, "code": "SOF-001", "name": "Oslo Sofa", "price": 1299.0,
        "category": "Sofas", "material": "Linen", "height": 85.0, "width": 210.0, "depth": 95.0,
        "description": "Three-seat sofa",
    }

    def test_grid(self):
        out = render_results([self.PRODUCT], "grid", 37, 1, 2)
        assert out.splitlines()[0] == "37 result(s), page 1 of 2"
        assert "Oslo Sofa" in out
        assert "$1,299.00" in out

    def test_list_includes_details(self):
        out = render_results([self.PRODUCT], "list", 1, 1, 1)
        assert "Sofas / Linen" in out
        assert "85 x 210 x 95 cm" in out
        assert "Three-seat sofa" in out

    def test_empty_state_with_alternatives(self):
        out = render_empty_state("sofaa", {
            "suggestions": ["sofa", "sofas"],
            "relatedProducts": [{"code": "SOF-001", "name": "Oslo Sofa", "price": 1299.0}],
        })
        assert "No products found for 'sofaa'." in out
        assert "Did you mean: sofa, sofas" in out
        assert "Oslo Sofa" in out

    def test_empty_state_without_alternatives(self):
        assert render_empty_state("", None) == "No products found."


class TestFacetPanel:

    OPTIONS = {
        "categories": [{"value": "Sofas", "count": 12}, {"value": "Chairs", "count": 8}],
        "materials": [{"value": "Oak", "count": 5}],
        "colors": [],
        "styles": [],
        "priceRange": {"minPrice": 99.9, "maxPrice": 4999.0},
        "dimensionRanges": {"minWidth": 35, "maxWidth": 300},
    }

    def test_counts_applied_values_and_ranges(self):
        out = render_filter_options(self.OPTIONS, SearchFilters(materials=["Oak"]))
        assert out.splitlines() == [
            "Category: Sofas (12), Chairs (8)",
            "Material: *Oak (5)",
            "Price: $99.90 - $4,999.00",
            "Width: 35 cm - 300 cm",
        ]

    def test_not_loaded(self):
        assert render_filter_options(None, SearchFilters()) == "No filter options loaded."

    def test_suggestions(self):
        assert render_suggestions([]) == "No suggestions."
        assert render_suggestions([{"suggestion": "Sofas", "type": "category"}]) == "  Sofas  (category)"
