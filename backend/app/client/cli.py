"""Terminal client for the furniture search API."""
from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
from typing import Iterable

from app.client.api_client import SearchApiClient
from app.client.controller import SearchController
from app.client.state import LIST_FILTERS, RANGE_FILTERS, SearchState
from app.client.storage import SearchStateStorage
from app.client.view import (
    applied_filter_chips,
    remove_chip,
    render_chips,
    render_empty_state,
    render_filter_options,
    render_results,
    render_suggestions,
)
from app.core.config import get_settings
from app.core.constants.search import PAGE_SIZES, SORT_KEYS

HELP = """Commands:
  <text>                 search for text
  :next / :prev          next / previous page
  :page N                go to page N
  :sort KEY              sort by one of: {sorts}
  :size N                page size, one of: {sizes}
  :view grid|list        switch result layout
  :filter NAME=VALUE     add a filter (categories, materials, colors, styles,
                         price_min, price_max, height_min, ..., depth_max)
  :unfilter NAME         remove a filter
  :chips                 list applied filters
  :remove N              remove applied filter N (see :chips)
  :clear                 clear all filters
  :facets                available filter values with counts and ranges
  :suggest TEXT          suggestions for a partial term
  :history               recent searches
  :forget N              remove recent search N
  :clear-history         remove all recent searches
  :server-history        searches recorded for your account
  :save NAME             save current search as a favorite
  :favorites             list favorites
  :load ID               load a favorite
  :unsave ID             delete a favorite
  exit                   quit""".format(
    sorts=", ".join(SORT_KEYS), sizes=", ".join(str(s) for s in PAGE_SIZES)
)

LIST_FILTER_FLAGS = {
    "categories": "category",
    "materials": "material",
    "colors": "color",
    "styles": "style",
}


def print_outcome(controller: SearchController) -> None:
    state = controller.state
    chips = applied_filter_chips(state.filters)
    if chips:
        print(render_chips(chips))
    if controller.field_errors:
        for name, message in controller.field_errors.items():
            print(f"  {name}: {message}")
        return
    if controller.banner_error:
        print(f"Error: {controller.banner_error}")
        return
    if controller.total_results == 0:
        print(render_empty_state(state.search_term, controller.alternatives))
        return
    print(render_results(
        controller.products,
        state.view_mode,
        controller.total_results,
        state.current_page,
        controller.total_pages,
    ))


def apply_filter(state: SearchState, assignment: str) -> None:
    name, _, value = assignment.partition("=")
    name = name.strip()
    if name in LIST_FILTERS:
        current = getattr(state.filters, name)
        state.update_filter(name, [*current, value.strip()])
    elif name in RANGE_FILTERS:
        state.update_filter(name, float(value))
    else:
        raise ValueError(f"Unknown filter: {name}")


def remove_filter(state: SearchState, name: str) -> None:
    state.update_filter(name, [] if name in LIST_FILTERS else None)


def _index(arg: str, items: list, what: str) -> int:
    """1-based position from the shell, validated against ``items``."""
    position = int(arg)
    if not 1 <= position <= len(items):
        raise ValueError(f"No {what} {arg}")
    return position - 1


async def run_command(controller: SearchController, line: str) -> None:
    """
    Apply one shell line.

    Query changes go through SearchState, whose listeners decide whether the
    results need refreshing; everything else prints directly.
    """
    state = controller.state
    if not line.startswith(":"):
        state.set_search_term(line)
        return

    command, *args = shlex.split(line[1:])
    arg = " ".join(args)
    if command == "next":
        if state.current_page < controller.total_pages:
            state.set_current_page(state.current_page + 1)
    elif command == "prev":
        if state.current_page > 1:
            state.set_current_page(state.current_page - 1)
    elif command == "page":
        state.set_current_page(int(arg))
    elif command == "sort":
        state.set_sort_by(arg)
    elif command == "size":
        state.set_page_size(int(arg))
    elif command == "view":
        state.set_view_mode(arg)
        print_outcome(controller)
    elif command == "filter":
        apply_filter(state, arg)
    elif command == "unfilter":
        remove_filter(state, arg)
    elif command == "chips":
        chips = applied_filter_chips(state.filters)
        for position, chip in enumerate(chips, 1):
            print(f"  {position}. {chip.label}: {chip.value}")
        if not chips:
            print("No filters applied.")
    elif command == "remove":
        chips = applied_filter_chips(state.filters)
        state.set_filters(remove_chip(state.filters, chips[_index(arg, chips, "filter")]))
    elif command == "clear":
        state.clear_filters()
    elif command == "facets":
        if await controller.load_filter_options():
            print(render_filter_options(controller.filter_options, state.filters))
        else:
            print(f"Error: {controller.banner_error}")
    elif command == "suggest":
        print(render_suggestions(await controller.autocomplete(arg)))
    elif command == "history":
        for position, item in enumerate(state.search_history, 1):
            print(f"  {position}. {item.searched_at[:19]}  {item.term!r}  ({item.result_count} results)")
    elif command == "forget":
        state.remove_from_history(_index(arg, state.search_history, "recent search"))
    elif command == "clear-history":
        state.clear_history()
    elif command == "server-history":
        if not controller.authenticated:
            print("Server history needs SEARCH_API_TOKEN.")
        for entry in await controller.load_server_history():
            print(f"  {str(entry.get('createdAt', ''))[:19]}  {entry.get('searchTerm')!r}  "
                  f"({entry.get('resultCount')} results)")
    elif command == "save":
        favorite = state.add_favorite(arg)
        print(f"Saved favorite {favorite.id}")
    elif command == "favorites":
        for fav in state.favorites:
            print(f"  {fav.id}  {fav.name}  term={fav.term!r}")
    elif command == "load":
        if not state.load_favorite(arg):
            print(f"No favorite {arg}")
    elif command == "unsave":
        state.remove_favorite(arg)
    else:
        print(HELP)


async def refresh(controller: SearchController) -> None:
    """Search for the current state, then refresh the facets it narrows."""
    if await controller.search():
        await controller.load_filter_options()
    print_outcome(controller)


async def interactive_shell(controller: SearchController) -> None:
    print("Interactive furniture search. Type ':help' for commands, 'exit' to quit.")
    changes = []
    unsubscribe = controller.state.subscribe(changes.append)
    try:
        while True:
            try:
                line = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                return
            if not line:
                continue
            if line.lower() in {"exit", "quit"}:
                return
            changes.clear()
            try:
                await run_command(controller, line)
            except ValueError as e:
                print(f"Error: {e}")
                continue
            if changes:
                await refresh(controller)
            else:
                controller.save()
    finally:
        unsubscribe()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CLI client for the furniture search API")
    parser.add_argument("term", nargs="?", help="Search term. If omitted with no filters, starts REPL mode.")
    for name, flag in LIST_FILTER_FLAGS.items():
        parser.add_argument(f"--{flag}", dest=name, action="append", default=[], metavar="VALUE")
    for name in RANGE_FILTERS:
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=float)
    parser.add_argument("--sort", choices=SORT_KEYS)
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--page-size", type=int, choices=PAGE_SIZES)
    parser.add_argument("--view", choices=("grid", "list"))
    parser.add_argument("--api-url", help="Search API base URL (defaults to SEARCH_API_URL)")
    parser.add_argument("--state", help="State file (defaults to SEARCH_STATE_PATH)")
    parser.add_argument("--no-persist", action="store_true", help="Do not read or write the state file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    settings = get_settings()
    storage = None if args.no_persist else SearchStateStorage(args.state)
    state = storage.load() if storage else SearchState()
    api = SearchApiClient(args.api_url or settings.search_api_url, token=settings.search_api_token)
    controller = SearchController(state, api, storage=storage)

    if args.sort:
        state.set_sort_by(args.sort)
    if args.page_size:
        state.set_page_size(args.page_size)
    if args.view:
        state.set_view_mode(args.view)
    for name in (*LIST_FILTERS, *RANGE_FILTERS):
        value = getattr(args, name)
        if value is not None and value != []:
            state.update_filter(name, value)
    if args.term:
        state.set_search_term(args.term)

    if not state.has_query():
        asyncio.run(interactive_shell(controller))
        return 0

    if args.page > 1:
        state.set_current_page(args.page)
    asyncio.run(controller.search())
    print_outcome(controller)
    return 1 if controller.banner_error or controller.field_errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
