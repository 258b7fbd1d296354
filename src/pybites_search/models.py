"""Pydantic models shared across pybites_search.

**Wire and cache models**:
    :class:`Item` is one catalog entry as served by the catalog endpoint.
    :class:`CacheSnapshot` is the unit persisted to the cache file.

**Runtime models**:
    :class:`Settings` holds the values resolved once at startup by
    :func:`~pybites_search.config.resolve_settings`.

All models use Pydantic v2. Unknown keys in payloads are ignored so that a
catalog adding fields does not break older installations.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT = "https://codechalleng.es/api/content/"
DEFAULT_TTL_SECONDS = 86400
DEFAULT_TIMEOUT = 10.0
CACHE_FILENAME = ".pybites-search-cache.json"


class Item(BaseModel):
    """One entry of the Pybites content catalog.

    ``content_type`` is a free-form label. The well-known values are listed
    in :data:`~pybites_search.matcher.CONTENT_TYPES`, but any string is
    accepted so that new kinds of content do not break parsing.

    Example::

        Item(
            content_type="article",
            title="Intro to Regex",
            summary="basics",
            link="https://pybit.es/articles/regex/",
        )
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    content_type: str
    title: str
    summary: str
    link: str


class CacheSnapshot(BaseModel):
    """The persisted result of the last successful catalog fetch.

    The TTL is deliberately not part of the snapshot: freshness is evaluated
    against whatever TTL the reader passes in.
    """

    model_config = ConfigDict(extra="ignore")

    timestamp: int = Field(ge=0, description="Unix seconds at save time")
    items: list[Item] = Field(default_factory=list)

    def age(self, now: float) -> float:
        """Return the snapshot age in seconds relative to *now*."""
        return now - self.timestamp

    def is_fresh(self, now: float, ttl_seconds: int) -> bool:
        """Return ``True`` if the snapshot is at most *ttl_seconds* old."""
        return self.age(now) <= ttl_seconds


class Settings(BaseModel):
    """Effective runtime configuration for one invocation."""

    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Catalog URL")
    cache_path: Path = Field(description="Location of the cache file")
    ttl_seconds: int = Field(
        default=DEFAULT_TTL_SECONDS, ge=0, description="Cache TTL in seconds"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Network timeout in seconds"
    )
