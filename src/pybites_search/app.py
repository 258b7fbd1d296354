"""Typer command and CLI entry point for pybites_search.

The single ``pybites-search`` command wires the pieces together in a fixed
order: user input is validated first (so a bad content type never costs a
network round trip), settings are resolved, the catalog is fetched through
the cache, and only once the full selection is known is anything written
to stdout.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and turns any stray
:class:`~pybites_search.exceptions.SearchError` into a clean exit.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

import typer

from pybites_search import __version__
from pybites_search.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE
from pybites_search.matcher import valid_content_types

app = typer.Typer(
    name="pybites-search",
    help="Search Pybites articles, bites, podcasts, videos and tips.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"pybites-search {__version__}")
        raise typer.Exit()


@app.command()
def search(
    terms: list[str] = typer.Argument(
        help="Search term(s). Several terms must appear in the given order."
    ),
    content_type: Optional[str] = typer.Option(
        None,
        "--content-type",
        "-c",
        help=f"Restrict to one content type ({valid_content_types()}).",
    ),
    title_only: bool = typer.Option(
        False, "--title-only", "-t", help="Only search item titles."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Search the Pybites content catalog.

    The catalog is cached in ``~/.pybites-search-cache.json`` for
    ``$PYBITES_SEARCH_CACHE_TTL`` seconds (default one day).

    Example::

        pybites-search decorators
        pybites-search fastapi testing -c article
        pybites-search regex -c b --title-only
    """
    from pybites_search.cache import FileCacheStore
    from pybites_search.client import http_get_items
    from pybites_search.config import resolve_settings
    from pybites_search.exceptions import SearchError
    from pybites_search.fetcher import Fetcher
    from pybites_search.matcher import SearchPredicate, filter_items
    from pybites_search.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, verbose=verbose)
    set_output(output)

    try:
        predicate = SearchPredicate.build(terms, content_type, title_only)
        settings = resolve_settings()
        output.debug(f"Cache file: {settings.cache_path} (ttl {settings.ttl_seconds}s)")

        fetcher = Fetcher(
            FileCacheStore(settings.cache_path),
            get_items=http_get_items,
            timeout=settings.timeout,
        )
        items = fetcher.fetch(settings.endpoint, settings.ttl_seconds)
    except SearchError as exc:
        output.error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    results = filter_items(items, predicate)
    output.debug(f"{len(results)} of {len(items)} items matched")
    output.print_results(results, show_type=predicate.shows_type)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``pybites-search`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        from pybites_search.exceptions import SearchError
        from pybites_search.output import error

        if isinstance(exc, SearchError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
