"""Exception hierarchy for pybites_search.

All exceptions inherit from :class:`SearchError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`pybites_search.exit_codes`. The search command catches
``SearchError`` and exits with the appropriate code.

Subclass hierarchy::

    SearchError (exit 1)
    +-- ConfigError              (exit 1)
    +-- InputError               (exit 2)
    +-- FetchError               (exit 5)
    |   +-- PayloadError         (exit 5)
    |   +-- FetchConnectionError (exit 6)
    |       +-- FetchTimeoutError (exit 6)
    +-- CacheMiss                (internal)
    +-- PersistError             (internal)

``CacheMiss`` and ``PersistError`` never reach the user: the
:class:`~pybites_search.fetcher.Fetcher` absorbs both.
"""

from pybites_search.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SERVER_ERROR,
)


class SearchError(Exception):
    """Base exception for all pybites_search errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`pybites_search.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SearchError):
    """Raised when settings cannot be resolved (e.g. no home directory)."""

    exit_code = EXIT_GENERIC_FAILURE


class InputError(SearchError):
    """Raised for invalid search input such as an unknown content type."""

    exit_code = EXIT_INVALID_USAGE


class FetchError(SearchError):
    """Raised when the catalog cannot be retrieved from the network."""

    exit_code = EXIT_SERVER_ERROR


class PayloadError(FetchError):
    """Raised when the catalog response is not a JSON list of items."""


class FetchConnectionError(FetchError):
    """Raised on network-level failures (DNS resolution, connection refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class FetchTimeoutError(FetchConnectionError):
    """Raised when the catalog request exceeds its timeout."""


class CacheMiss(SearchError):
    """Raised by a cache store when no fresh snapshot is available.

    Covers an absent file, an unreadable or corrupt file, a snapshot in an
    unknown schema, and a snapshot older than the requested TTL.
    """


class PersistError(SearchError):
    """Raised by a cache store when a snapshot cannot be written."""
