"""On-disk snapshot caching for pybites_search.

This package provides :class:`FileCacheStore`, which persists the last
successful catalog fetch as a single JSON file, and the
:class:`CacheStore` protocol that the
:class:`~pybites_search.fetcher.Fetcher` depends on. Any object with
matching ``load``/``save`` methods (for example an in-memory double in
tests) can stand in for the file store.
"""

from pybites_search.cache.store import CacheStore, FileCacheStore

__all__ = ["CacheStore", "FileCacheStore"]
