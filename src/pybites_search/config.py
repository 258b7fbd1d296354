"""Settings resolution from the home directory and environment variables.

Everything ambient is read here, once, and returned as a
:class:`~pybites_search.models.Settings` that the rest of the package
receives explicitly:

* **Cache location** -- a dotfile in the user's home directory
  (``~/.pybites-search-cache.json``). Failing to resolve the home
  directory is fatal; there is no fallback location.
* **Cache TTL** -- ``PYBITES_SEARCH_CACHE_TTL`` in seconds. Absent,
  non-integer or negative values fall back to the default of one day.
* **Endpoint** -- ``PYBITES_SEARCH_ENDPOINT`` overrides the catalog URL.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pybites_search.exceptions import ConfigError
from pybites_search.models import (
    CACHE_FILENAME,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    DEFAULT_TTL_SECONDS,
    Settings,
)

ENV_CACHE_TTL = "PYBITES_SEARCH_CACHE_TTL"
ENV_ENDPOINT = "PYBITES_SEARCH_ENDPOINT"


# --- Home directory ---


def get_home_dir() -> Path:
    """Return the current user's home directory.

    An empty ``$HOME`` counts as unresolvable: :meth:`Path.home` would
    quietly turn it into ``/``.

    Raises:
        ConfigError: If the home directory cannot be determined (e.g.
            ``$HOME`` unset and no passwd entry for the current user),
            ``$HOME`` is empty, or the result is not a directory.
    """
    if os.environ.get("HOME") == "":
        raise ConfigError("Cannot resolve home directory: $HOME is empty")
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"Cannot resolve home directory: {exc}") from exc
    if not home.is_dir():
        raise ConfigError(f"Cannot resolve home directory: {home} is not a directory")
    return home


def get_cache_path(home: Optional[Path] = None) -> Path:
    """Return the absolute path of the cache file.

    Args:
        home: Home directory to use. Resolved via :func:`get_home_dir`
            when omitted.
    """
    if home is None:
        home = get_home_dir()
    return home / CACHE_FILENAME


# --- Environment lookups ---


def parse_ttl(raw: Optional[str]) -> int:
    """Parse a TTL override, falling back to :data:`DEFAULT_TTL_SECONDS`.

    Args:
        raw: The raw environment value, or ``None`` if unset.

    Returns:
        The TTL in seconds. Unparsable and negative values yield the
        default rather than an error.
    """
    if raw is None:
        return DEFAULT_TTL_SECONDS
    try:
        value = int(raw.strip())
    except ValueError:
        return DEFAULT_TTL_SECONDS
    if value < 0:
        return DEFAULT_TTL_SECONDS
    return value


def resolve_settings(
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Settings:
    """Resolve the effective settings for this invocation.

    Precedence (high to low):
        1. Environment variables (``PYBITES_SEARCH_CACHE_TTL``,
           ``PYBITES_SEARCH_ENDPOINT``)
        2. Defaults

    Args:
        environ: Key-value lookup standing in for the process environment.
            Defaults to :data:`os.environ`.
        home: Home directory override, mainly for tests.

    Returns:
        The resolved :class:`~pybites_search.models.Settings`.

    Raises:
        ConfigError: If the home directory cannot be resolved.
    """
    if environ is None:
        environ = os.environ

    endpoint = environ.get(ENV_ENDPOINT) or DEFAULT_ENDPOINT

    return Settings(
        endpoint=endpoint,
        cache_path=get_cache_path(home),
        ttl_seconds=parse_ttl(environ.get(ENV_CACHE_TTL)),
        timeout=DEFAULT_TIMEOUT,
    )
