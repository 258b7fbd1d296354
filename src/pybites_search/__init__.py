"""pybites_search -- search the Pybites content catalog from the terminal.

The package fetches the list of published Pybites items (articles, bites,
podcasts, videos, tips), keeps it in a single JSON cache file under the
user's home directory, and filters it against one or more search terms.

Typical usage::

    pybites-search decorators               # search titles and summaries
    pybites-search regex -c b               # only bites
    pybites-search fastapi --title-only     # titles only

Modules:
    app: Typer command and console-script entry point.
    models: Pydantic models for catalog items, cache snapshots and settings.
    config: Settings resolution from the home directory and environment.
    cache: The on-disk snapshot store.
    client: httpx transport for the catalog endpoint.
    fetcher: Cache-or-network orchestration.
    matcher: Search term compilation and filtering.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.3.0"
