from __future__ import annotations

import argparse
import asyncio
import logging
from importlib import import_module
from typing import TYPE_CHECKING, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from filmfinder.application import ObserverContext, describe_error
from filmfinder.domain import CatalogError, MovieDetail, MovieSummary

if TYPE_CHECKING:
    from filmfinder.infrastructure.bootstrap import AppContext

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CATALOG_ERROR = 1
EXIT_USAGE = 2

SETTINGS_MODULE = "filmfinder.infrastructure.config.settings"


def _positive_int(value: str) -> int:
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if ivalue < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return ivalue


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="filmfinder", description="Search OMDb and keep a watchlist.")
    p.add_argument(
        "--persist-watchlist",
        action="store_true",
        default=None,
        help="Keep the watchlist in the state file (default: WATCHLIST_PERSIST).",
    )
    sub = p.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Keyword search, one page at a time.")
    search.add_argument("query", help="Search terms (sent as-is).")
    search.add_argument("--page", type=_positive_int, default=1, help="Result page, starting at 1.")

    details = sub.add_parser("details", help="Full record for one IMDb id.")
    details.add_argument("imdb_id")

    like = sub.add_parser("like", help="Like/unlike a title by IMDb id.")
    like.add_argument("imdb_id")

    sub.add_parser("watchlist", help="List liked titles.")
    sub.add_parser("history", help="Show recent search terms.")
    return p


def _movies_table(title: str, movies: Sequence[MovieSummary]) -> Table:
    # Titles come from the catalog; Text cells keep rich from reading them as markup.
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("IMDb id", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Year")
    for idx, movie in enumerate(movies, 1):
        table.add_row(str(idx), Text(movie.id), Text(movie.title), Text(movie.year))
    return table


def _detail_panel(detail: MovieDetail, *, liked: bool) -> Panel:
    heart = "♥ Liked" if liked else "♡ Like"
    body = Text()
    body.append(f"{detail.title} ({detail.year})\n", style="bold")
    body.append(f"{heart}\n\n", style="red" if liked else "dim")
    for label, value in (
        ("Genre", detail.genre),
        ("Rated", detail.rated),
        ("Released", detail.released),
        ("Runtime", detail.runtime),
        ("IMDb Rating", detail.imdb_rating),
        ("Director", detail.director),
        ("Writer", detail.writer),
        ("Actors", detail.actors),
    ):
        body.append(f"{label}: ", style="bold")
        body.append(f"{value}\n")
    body.append("\nPlot\n", style="bold")
    body.append(detail.plot)
    return Panel(body, title=Text(detail.imdb_id), border_style="cyan")


async def _dispatch(args: argparse.Namespace, app: AppContext, console: Console) -> int:
    if args.command == "search":
        session = app.new_search_session()
        page = await session.open_page(args.query, args.page)
        console.print(Text(session.status_text))
        if session.last_error is not None:
            return EXIT_CATALOG_ERROR
        if page is not None and page.movies:
            console.print(_movies_table(f"Page {page.page}/{page.page_count}", page.movies))
        return EXIT_OK

    if args.command == "details":
        detail = await app.detail_service.get_details(args.imdb_id)
        console.print(_detail_panel(detail, liked=app.watchlist.contains(detail.id)))
        return EXIT_OK

    if args.command == "like":
        detail = await app.detail_service.get_details(args.imdb_id)
        liked = app.watchlist.toggle(detail.to_summary())
        console.print(Text(f"{'Liked' if liked else 'Removed'}: {detail.title} ({detail.year})"))
        return EXIT_OK

    if args.command == "watchlist":
        if not len(app.watchlist):
            console.print("Add items to your watchlist to get started!")
        else:
            console.print(_movies_table("Watchlist", app.watchlist.entries))
        return EXIT_OK

    # history
    if not app.history.terms:
        console.print("No recent searches.")
    for term in app.history.terms:
        console.print(Text(f"• {term}"))
    return EXIT_OK


async def _run(args: argparse.Namespace, console: Console) -> int:
    from filmfinder.infrastructure.bootstrap import build_app_context

    app = build_app_context(observer=ObserverContext(), persist_watchlist=args.persist_watchlist)
    try:
        return await _dispatch(args, app, console)
    except CatalogError as exc:
        console.print(Text(describe_error(exc), style="red"))
        return EXIT_CATALOG_ERROR
    finally:
        await app.close()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        # Settings parse the environment on import; malformed values raise ValueError.
        settings = import_module(SETTINGS_MODULE)
    except ValueError as exc:
        Console(stderr=True).print(Text(f"Configuration error: {exc}", style="red"))
        raise SystemExit(EXIT_USAGE)

    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
    raise SystemExit(asyncio.run(_run(args, Console())))


if __name__ == "__main__":
    main()
