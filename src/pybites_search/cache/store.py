"""Single-file snapshot store for the content catalog.

The whole catalog is stored as one JSON document::

    {"timestamp": 1760745600, "items": [{"content_type": ..., ...}, ...]}

The TTL is supplied by the reader on every :meth:`FileCacheStore.load`
call, so one file can be fresh for one invocation and stale for another.
Every save overwrites the file wholesale through a temp-file-then-rename,
which keeps a single write from ever being observed half-done. There is
no locking: two concurrent invocations may both refresh the file and the
last writer wins.

See Also:
    :class:`~pybites_search.models.CacheSnapshot` -- the persisted model.
"""

from __future__ import annotations

import json
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence

from pydantic import ValidationError

from pybites_search.exceptions import CacheMiss, PersistError
from pybites_search.models import CacheSnapshot, Item


class CacheStore(Protocol):
    """Capability the fetcher needs from a cache backend."""

    def load(self, ttl_seconds: int) -> list[Item]:
        """Return cached items, or raise :class:`CacheMiss`."""
        ...

    def save(self, items: Sequence[Item]) -> None:
        """Persist *items*, or raise :class:`PersistError`."""
        ...


class FileCacheStore:
    """JSON-file backed :class:`CacheStore`.

    No state is kept in memory between calls; every :meth:`load` re-reads
    the file.

    Args:
        path: Location of the cache file.
        clock: Callable returning the current Unix time in seconds.
            Injected so that staleness can be tested deterministically.

    Example::

        store = FileCacheStore(Path.home() / ".pybites-search-cache.json")
        store.save(items)
        items = store.load(ttl_seconds=3600)
    """

    def __init__(
        self,
        path: str | Path,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._path = Path(path)
        self._clock = clock

    @property
    def path(self) -> Path:
        """The cache file location."""
        return self._path

    def load(self, ttl_seconds: int) -> list[Item]:
        """Read the snapshot and return its items if it is fresh.

        Args:
            ttl_seconds: Maximum snapshot age in seconds. The boundary is
                inclusive: a snapshot exactly *ttl_seconds* old is fresh.

        Returns:
            The cached items, in the order they were saved.

        Raises:
            CacheMiss: If the file is absent, unreadable, not valid JSON,
                not a valid snapshot, or older than *ttl_seconds*.
        """
        snapshot = self.read_snapshot()
        now = self._clock()
        if not snapshot.is_fresh(now, ttl_seconds):
            raise CacheMiss(
                f"Cache expired ({int(snapshot.age(now))}s old, ttl {ttl_seconds}s)"
            )
        return list(snapshot.items)

    def save(self, items: Sequence[Item]) -> None:
        """Overwrite the cache file with a new snapshot of *items*.

        The snapshot timestamp is taken from the injected clock at call
        time.

        Args:
            items: Items to persist, in catalog order.

        Raises:
            PersistError: If the file cannot be written.
        """
        snapshot = CacheSnapshot(timestamp=int(self._clock()), items=list(items))
        data = json.dumps(snapshot.model_dump(mode="json"), ensure_ascii=False)
        try:
            _atomic_write(self._path, data)
        except OSError as exc:
            raise PersistError(f"Cannot write cache {self._path}: {exc}") from exc

    def read_snapshot(self) -> CacheSnapshot:
        """Read and validate the snapshot without checking freshness.

        Raises:
            CacheMiss: If the file is absent, unreadable or malformed.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise CacheMiss(f"No cache at {self._path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheMiss(f"Unreadable cache at {self._path}: {exc}") from exc

        try:
            return CacheSnapshot.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise CacheMiss(f"Invalid cache at {self._path}: {exc}") from exc


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the original file is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f"{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
