"""Tests for the catalog HTTP client."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from pybites_search.client import CatalogClient, http_get_items
from pybites_search.exceptions import (
    FetchConnectionError,
    FetchError,
    FetchTimeoutError,
    PayloadError,
)
from pybites_search.exit_codes import EXIT_CONNECTION_ERROR, EXIT_SERVER_ERROR
from pybites_search.models import Item

URL = "https://codechalleng.es/api/content/"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _transport(data: Any = None, status_code: int = 200, **kwargs: Any) -> httpx.MockTransport:
    """MockTransport answering every request with a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if data is None:
            return httpx.Response(status_code, **kwargs)
        return httpx.Response(status_code, json=data, **kwargs)

    return httpx.MockTransport(handler)


def _raising_transport(exc: Exception) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return httpx.MockTransport(handler)


# ---------------------------------------------------------------------------
# Context manager
# ---------------------------------------------------------------------------


class TestContextManager:
    def test_enter_creates_client(self) -> None:
        client = CatalogClient()
        assert client._client is None
        with client:
            assert client._client is not None
        assert client._client is None

    def test_timeout_applies_to_each_phase(self) -> None:
        with CatalogClient(timeout=10) as client:
            timeout = client._client.timeout
        assert timeout == httpx.Timeout(10.0)
        assert (timeout.connect, timeout.read, timeout.write, timeout.pool) == (
            10.0,
            10.0,
            10.0,
            10.0,
        )

    def test_get_items_outside_context_fails(self) -> None:
        with pytest.raises(AssertionError):
            CatalogClient().get_items(URL)


# ---------------------------------------------------------------------------
# Successful fetch
# ---------------------------------------------------------------------------


class TestGetItems:
    def test_parses_items_in_order(
        self, sample_payload: list[dict], sample_items: list[Item]
    ) -> None:
        with CatalogClient(transport=_transport(sample_payload)) as client:
            assert client.get_items(URL) == sample_items

    def test_sends_get_with_json_accept_header(self) -> None:
        seen: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["accept"] = request.headers.get("accept")
            seen["user_agent"] = request.headers.get("user-agent")
            return httpx.Response(200, json=[])

        with CatalogClient(transport=httpx.MockTransport(handler)) as client:
            assert client.get_items(URL) == []

        assert seen["method"] == "GET"
        assert seen["url"] == URL
        assert seen["accept"] == "application/json"
        assert seen["user_agent"].startswith("pybites-search/")

    def test_unknown_content_type_and_extra_fields_tolerated(self) -> None:
        payload = [
            {
                "content_type": "course",
                "title": "New thing",
                "summary": "",
                "link": "L",
                "id": 42,
            }
        ]
        with CatalogClient(transport=_transport(payload)) as client:
            items = client.get_items(URL)
        assert items == [Item(content_type="course", title="New thing", summary="", link="L")]

    def test_http_get_items_one_shot(self, sample_payload: list[dict]) -> None:
        items = http_get_items(URL, timeout=10, transport=_transport(sample_payload))
        assert len(items) == len(sample_payload)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


class TestErrorMapping:
    @pytest.mark.parametrize("status", [400, 403, 404, 429, 500, 503])
    def test_non_2xx_is_fetch_error(self, status: int) -> None:
        transport = _transport({"detail": "nope"}, status_code=status)
        with CatalogClient(transport=transport) as client:
            with pytest.raises(FetchError, match=f"HTTP {status}") as exc_info:
                client.get_items(URL)
        assert exc_info.value.exit_code == EXIT_SERVER_ERROR

    def test_timeout(self) -> None:
        transport = _raising_transport(httpx.ReadTimeout("slow"))
        with CatalogClient(timeout=10, transport=transport) as client:
            with pytest.raises(FetchTimeoutError, match="timed out after 10s") as exc_info:
                client.get_items(URL)
        assert exc_info.value.exit_code == EXIT_CONNECTION_ERROR

    def test_connect_error(self) -> None:
        transport = _raising_transport(httpx.ConnectError("refused"))
        with CatalogClient(transport=transport) as client:
            with pytest.raises(FetchConnectionError, match="refused") as exc_info:
                client.get_items(URL)
        assert not isinstance(exc_info.value, FetchTimeoutError)
        assert exc_info.value.exit_code == EXIT_CONNECTION_ERROR

    def test_single_attempt_no_retry(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with CatalogClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(FetchError):
                client.get_items(URL)
        assert len(calls) == 1

    def test_invalid_json(self) -> None:
        transport = _transport(content=b"<html>oops</html>")
        with CatalogClient(transport=transport) as client:
            with pytest.raises(PayloadError, match="not valid JSON"):
                client.get_items(URL)

    @pytest.mark.parametrize(
        "payload",
        [
            {"results": []},
            [{"title": "missing fields"}],
            [{"content_type": "article", "title": None, "summary": "", "link": ""}],
            ["just a string"],
        ],
    )
    def test_wrong_shape(self, payload: Any) -> None:
        with CatalogClient(transport=_transport(payload)) as client:
            with pytest.raises(PayloadError, match="unexpected shape") as exc_info:
                client.get_items(URL)
        assert isinstance(exc_info.value, FetchError)
