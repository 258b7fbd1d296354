"""Synchronous HTTP client for the Pybites content catalog.

This module provides :class:`CatalogClient`, a thin wrapper around
:class:`httpx.Client` that performs one ``GET`` against the catalog
endpoint and validates the JSON payload into
:class:`~pybites_search.models.Item` objects, plus
:func:`http_get_items`, the one-shot function the
:class:`~pybites_search.fetcher.Fetcher` calls by default.

There is no retry: a single failed attempt is terminal and is surfaced as
a :class:`~pybites_search.exceptions.FetchError` subclass.
"""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from pybites_search import __version__
from pybites_search.exceptions import (
    FetchConnectionError,
    FetchError,
    FetchTimeoutError,
    PayloadError,
)
from pybites_search.models import DEFAULT_TIMEOUT, Item

_ITEMS_ADAPTER = TypeAdapter(list[Item])


class CatalogClient:
    """HTTP client for the catalog endpoint.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        timeout: Per-phase timeout in seconds. httpx applies it separately
            to connecting, reading, writing and acquiring a pooled
            connection, so a slowly trickled body can exceed it in total.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with CatalogClient(timeout=10) as client:
            items = client.get_items("https://codechalleng.es/api/content/")
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> CatalogClient:
        self._client = httpx.Client(
            timeout=self._timeout,
            follow_redirects=True,
            headers={
                "Accept": "application/json",
                "User-Agent": f"pybites-search/{__version__}",
            },
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def get_items(self, url: str) -> list[Item]:
        """Fetch and validate the catalog.

        Args:
            url: Absolute URL of the catalog endpoint.

        Returns:
            The catalog items in response order.

        Raises:
            FetchTimeoutError: If the request exceeds the timeout.
            FetchConnectionError: On other network-level failures.
            FetchError: On a non-2xx response.
            PayloadError: If the body is not a JSON list of items.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        try:
            response = self._client.get(url)
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(
                f"Request to {url} timed out after {self._timeout:g}s"
            ) from exc
        except httpx.TransportError as exc:
            raise FetchConnectionError(f"Connection to {url} failed: {exc}") from exc

        self._map_response_error(response)
        return self._parse_items(response)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise :class:`FetchError` for any non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return
        reason = response.reason_phrase
        msg = f"HTTP {status} {reason}" if reason else f"HTTP {status}"
        raise FetchError(f"{msg} from {response.request.url}")

    def _parse_items(self, response: httpx.Response) -> list[Item]:
        """Decode the body and validate it as a list of items."""
        try:
            payload = response.json()
        except ValueError as exc:
            raise PayloadError(f"Catalog response is not valid JSON: {exc}") from exc
        try:
            return _ITEMS_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            raise PayloadError(
                f"Catalog response has an unexpected shape: "
                f"{exc.error_count()} validation error(s)"
            ) from exc


def http_get_items(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.BaseTransport] = None,
) -> list[Item]:
    """Fetch the catalog at *url* with a fresh :class:`CatalogClient`.

    Args:
        url: Absolute URL of the catalog endpoint.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport override.

    Returns:
        The catalog items in response order.

    Raises:
        FetchError: Or one of its subclasses on any failure.
    """
    with CatalogClient(timeout=timeout, transport=transport) as client:
        return client.get_items(url)
