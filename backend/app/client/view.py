"""
View helpers — applied-filter chips, formatting, pagination and text rendering.
Version: 1.0.0
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from app.client.state import SearchFilters

CURRENCY_SYMBOL = "$"
PAGINATION_COMPACT_THRESHOLD = 7

LIST_FILTER_LABELS = (
    ("categories", "category", "Category"),
    ("materials", "material", "Material"),
    ("colors", "color", "Color"),
    ("styles", "style", "Style"),
)
PRICE_LABELS = (("price_min", "Min price"), ("price_max", "Max price"))
DIMENSION_LABELS = (
    ("height_min", "Min height"),
    ("height_max", "Max height"),
    ("width_min", "Min width"),
    ("width_max", "Max width"),
    ("depth_min", "Min depth"),
    ("depth_max", "Max depth"),
)


@dataclass(frozen=True)
class FilterChip:
    """One removable chip in the applied-filters bar."""
    type: str
    label: str
    value: str
    filter_name: str
    raw_value: Union[str, float]


def format_currency(amount: Optional[float]) -> str:
    if amount is None:
        return "-"
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def format_dimension(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:g} cm"


def applied_filter_chips(filters: SearchFilters) -> List[FilterChip]:
    """One chip per selected list value and one per set bound, in display order."""
    chips: List[FilterChip] = []
    for name, chip_type, label in LIST_FILTER_LABELS[:1]:
        chips += [FilterChip(chip_type, label, v, name, v) for v in getattr(filters, name)]
    for name, label in PRICE_LABELS:
        value = getattr(filters, name)
        if value is not None:
            chips.append(FilterChip("price", label, format_currency(value), name, value))
    for name, chip_type, label in LIST_FILTER_LABELS[1:]:
        chips += [FilterChip(chip_type, label, v, name, v) for v in getattr(filters, name)]
    for name, label in DIMENSION_LABELS:
        value = getattr(filters, name)
        if value is not None:
            chips.append(FilterChip("dimension", label, format_dimension(value), name, value))
    return chips


def remove_chip(filters: SearchFilters, chip: FilterChip) -> SearchFilters:
    """Return a copy of ``filters`` without the chip's value."""
    updated = filters.copy()
    current = getattr(updated, chip.filter_name)
    if isinstance(current, list):
        setattr(updated, chip.filter_name, [v for v in current if v != chip.raw_value])
    else:
        setattr(updated, chip.filter_name, None)
    return updated


def pagination_window(current_page: int, total_pages: int) -> List[Optional[int]]:
    """
    Page numbers to show, with None marking an ellipsis.

    Up to 7 pages are all shown. Beyond that the first and last page are
    always present along with a window around the current page, e.g.
    ``[1, None, 4, 5, 6, None, 10]``. A single page needs no pagination.
    """
    if total_pages <= 1:
        return []
    if total_pages <= PAGINATION_COMPACT_THRESHOLD:
        return list(range(1, total_pages + 1))
    if current_page <= 3:
        return [1, 2, 3, 4, None, total_pages]
    if current_page >= total_pages - 2:
        return [1, None, *range(total_pages - 3, total_pages + 1)]
    return [1, None, current_page - 1, current_page, current_page + 1, None, total_pages]


def render_pagination(current_page: int, total_pages: int) -> str:
    window = pagination_window(current_page, total_pages)
    if not window:
        return ""
    parts = ["<" if current_page > 1 else " "]
    for page in window:
        if page is None:
            parts.append("...")
        elif page == current_page:
            parts.append(f"[{page}]")
        else:
            parts.append(str(page))
    parts.append(">" if current_page < total_pages else " ")
    return " ".join(parts)


def _dimensions(product: Dict[str, Any]) -> str:
    dims = [product.get(k) for k in ("height", "width", "depth")]
    if all(d is None for d in dims):
        return ""
    return " x ".join("?" if d is None else f"{d:g}" for d in dims) + " cm"


def render_product(product: Dict[str, Any], view_mode: str) -> str:
    name = product.get("name", "")
    price = format_currency(product.get("price"))
    if view_mode == "grid":
        return f"{product.get('code', ''):<12} {name[:40]:<40} {price:>12}"

    lines = [f"{name}  ({product.get('code', '')})  {price}"]
    attrs = [product.get(k) for k in ("category", "material", "color", "style")]
    attrs = [a for a in attrs if a]
    if attrs:
        lines.append("  " + " / ".join(attrs))
    dims = _dimensions(product)
    if dims:
        lines.append(f"  {dims}")
    if product.get("description"):
        lines.append(f"  {product['description']}")
    return "\n".join(lines)


def render_results(
    products: List[Dict[str, Any]],
    view_mode: str,
    total_results: int,
    current_page: int,
    total_pages: int,
) -> str:
    lines = [f"{total_results} result(s), page {current_page} of {max(total_pages, 1)}"]
    lines += [render_product(p, view_mode) for p in products]
    pagination = render_pagination(current_page, total_pages)
    if pagination:
        lines.append(pagination)
    return "\n".join(lines)


def render_empty_state(search_term: str, alternatives: Optional[Dict[str, Any]]) -> str:
    lines = [f"No products found for {search_term!r}." if search_term else "No products found."]
    if alternatives:
        suggestions = alternatives.get("suggestions") or []
        if suggestions:
            lines.append("Did you mean: " + ", ".join(suggestions))
        related = alternatives.get("relatedProducts") or []
        if related:
            lines.append("You might also like:")
            lines += [render_product(p, "grid") for p in related]
    return "\n".join(lines)


def render_chips(chips: List[FilterChip]) -> str:
    return "  ".join(f"[{chip.label}: {chip.value}]" for chip in chips)


def _range(low: Optional[float], high: Optional[float], fmt) -> Optional[str]:
    if low is None and high is None:
        return None
    return f"{fmt(low)} - {fmt(high)}"


def render_filter_options(options: Optional[Dict[str, Any]], filters: SearchFilters) -> str:
    """Facet panel: values with counts (applied ones starred), then price and dimension ranges."""
    if not options:
        return "No filter options loaded."
    lines = []
    for name, _, label in LIST_FILTER_LABELS:
        applied = set(getattr(filters, name))
        values = [
            f"{'*' if o['value'] in applied else ''}{o['value']} ({o['count']})"
            for o in options.get(name) or []
        ]
        if values:
            lines.append(f"{label}: " + ", ".join(values))
    price = options.get("priceRange") or {}
    price_range = _range(price.get("minPrice"), price.get("maxPrice"), format_currency)
    if price_range:
        lines.append(f"Price: {price_range}")
    dims = options.get("dimensionRanges") or {}
    for axis in ("height", "width", "depth"):
        capitalized = axis.capitalize()
        axis_range = _range(dims.get(f"min{capitalized}"), dims.get(f"max{capitalized}"), format_dimension)
        if axis_range:
            lines.append(f"{capitalized}: {axis_range}")
    return "\n".join(lines) or "No filter options available."


def render_suggestions(suggestions: List[Dict[str, Any]]) -> str:
    if not suggestions:
        return "No suggestions."
    return "\n".join(f"  {s.get('suggestion', '')}  ({s.get('type', 'term')})" for s in suggestions)
