"""Cache-or-network orchestration for the content catalog.

:class:`Fetcher` serves the catalog from its injected
:class:`~pybites_search.cache.CacheStore` while the snapshot is fresh and
falls back to the network otherwise. Freshness is purely TTL-driven;
there is no way to force a refresh short of an expired or missing
snapshot.

A failed cache write after a successful fetch is not an error for the
caller: the freshly fetched items are returned regardless.
"""

from __future__ import annotations

from typing import Callable

from pybites_search.cache import CacheStore
from pybites_search.client import http_get_items
from pybites_search.exceptions import CacheMiss, PersistError
from pybites_search.models import DEFAULT_TIMEOUT, Item
from pybites_search.output import get_output

GetItems = Callable[[str, float], list[Item]]


class Fetcher:
    """Return catalog items from the cache or, on a miss, from the network.

    Args:
        store: Cache backend consulted before and refreshed after each
            network fetch.
        get_items: Network collaborator called as ``get_items(url, timeout)``.
            Must raise :class:`~pybites_search.exceptions.FetchError` on
            failure.
        timeout: Network timeout in seconds, passed to *get_items*.
    """

    def __init__(
        self,
        store: CacheStore,
        get_items: GetItems = http_get_items,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._store = store
        self._get_items = get_items
        self._timeout = timeout

    def fetch(self, endpoint: str, ttl_seconds: int) -> list[Item]:
        """Return the catalog items.

        Args:
            endpoint: Catalog URL used on a cache miss.
            ttl_seconds: Maximum acceptable snapshot age in seconds.

        Returns:
            The items, in catalog order.

        Raises:
            FetchError: If the cache missed and the network fetch failed.
                Not retried.
        """
        output = get_output()

        try:
            items = self._store.load(ttl_seconds)
        except CacheMiss as exc:
            output.debug(f"Cache miss: {exc}")
        else:
            output.debug(f"Cache hit: {len(items)} items")
            return items

        output.debug(f"Fetching {endpoint}")
        items = self._get_items(endpoint, self._timeout)
        output.debug(f"Fetched {len(items)} items")

        try:
            self._store.save(items)
        except PersistError as exc:
            output.debug(f"Cache not updated: {exc}")

        return items
