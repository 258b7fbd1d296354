"""Shared test fixtures for pybites_search.

Provides sample catalog items, factories for items, in-memory cache
stores and call-counting network stubs, a snapshot writer, an isolated
home directory, and a CLI runner. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional, Sequence

import pytest

from pybites_search.config import ENV_CACHE_TTL, ENV_ENDPOINT
from pybites_search.exceptions import CacheMiss, FetchError, PersistError
from pybites_search.models import CACHE_FILENAME, Item
from pybites_search.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


def _build_item(
    title: str,
    content_type: str = "article",
    summary: str = "",
    link: Optional[str] = None,
) -> Item:
    """Build an Item with a link derived from the title."""
    if link is None:
        link = "https://pybit.es/" + title.lower().replace(" ", "-")
    return Item(content_type=content_type, title=title, summary=summary, link=link)


@pytest.fixture
def make_item() -> Callable[..., Item]:
    """Factory for single items: ``make_item(title, content_type, summary, link)``."""
    return _build_item


@pytest.fixture
def sample_items() -> list[Item]:
    """A small mixed catalog in API order."""
    return [
        _build_item("Python Decorators Explained", "article", "Wrap functions"),
        _build_item("Regex Bite", "bite", "practice lookaheads"),
        _build_item("Testing FastAPI apps", "podcast", "pytest and httpx in practice"),
        _build_item("Intro to Regex", "article", "basics"),
        _build_item("Dataclasses in 5 minutes", "video", "Python dataclasses tour"),
        _build_item("Use enumerate", "tip", "Stop using range(len(x))"),
    ]


@pytest.fixture
def sample_payload(sample_items: list[Item]) -> list[dict]:
    """The JSON body the catalog endpoint would return for sample_items."""
    return [item.model_dump() for item in sample_items]


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class MemoryCacheStore:
    """In-memory CacheStore with explicit freshness control.

    ``fresh`` decides whether :meth:`load` hits; ``fail_save`` makes
    :meth:`save` raise PersistError.
    """

    def __init__(
        self,
        items: Optional[Sequence[Item]] = None,
        fresh: bool = True,
        fail_save: bool = False,
    ) -> None:
        self.items = list(items) if items is not None else None
        self.fresh = fresh
        self.fail_save = fail_save
        self.load_calls: list[int] = []
        self.save_calls = 0

    def load(self, ttl_seconds: int) -> list[Item]:
        self.load_calls.append(ttl_seconds)
        if self.items is None:
            raise CacheMiss("empty")
        if not self.fresh:
            raise CacheMiss("expired")
        return list(self.items)

    def save(self, items: Sequence[Item]) -> None:
        self.save_calls += 1
        if self.fail_save:
            raise PersistError("disk full")
        self.items = list(items)
        self.fresh = True


class CountingGetItems:
    """Network stub recording every call; raises *error* when set."""

    def __init__(
        self,
        items: Sequence[Item] = (),
        error: Optional[FetchError] = None,
    ) -> None:
        self.items = list(items)
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def __call__(self, url: str, timeout: float) -> list[Item]:
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return list(self.items)


@pytest.fixture
def make_store() -> type[MemoryCacheStore]:
    """Factory for in-memory cache stores: ``make_store(items, fresh, fail_save)``."""
    return MemoryCacheStore


@pytest.fixture
def make_get_items() -> type[CountingGetItems]:
    """Factory for network stubs: ``make_get_items(items, error)``."""
    return CountingGetItems


# ---------------------------------------------------------------------------
# Home / environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at tmp_path and clear PYBITES_SEARCH_* vars.

    Returns:
        The fake home directory; the cache file lives directly inside it.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.delenv(ENV_CACHE_TTL, raising=False)
    monkeypatch.delenv(ENV_ENDPOINT, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    return home


@pytest.fixture
def write_snapshot(isolated_home: Path) -> Callable[[Sequence[Item], int], Path]:
    """Return a writer that saves a cache snapshot file into the isolated home."""

    def _write(items: Sequence[Item], timestamp: int) -> Path:
        path = isolated_home / CACHE_FILENAME
        path.write_text(
            json.dumps(
                {"timestamp": timestamp, "items": [item.model_dump() for item in items]}
            ),
            encoding="utf-8",
        )
        return path

    return _write


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN, colourless, verbose OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
