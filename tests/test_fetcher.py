"""Tests for the upstream stub_status fetch."""

from __future__ import annotations

import socket

import httpx
import pytest

from collectors import (
    BodyReadError,
    RequestConstructionError,
    TransportError,
    UnexpectedStatusError,
    fetch_status,
)


def _closed_port() -> int:
    """Return a localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class _BrokenStream(httpx.SyncByteStream):
    def __iter__(self):
        yield b"Active connections: 1\n"
        raise httpx.ReadError("connection reset mid-body")


class TestSuccessfulFetch:
    """A 200 response hands back the raw body."""

    def test_returns_body_bytes(self, endpoint, upstream, stub_status_body) -> None:
        """The full body comes back as bytes."""
        body = fetch_status(endpoint, transport=upstream())
        assert body == stub_status_body.encode()

    def test_one_get_per_call(self, endpoint, upstream) -> None:
        """Each call issues exactly one GET to the endpoint."""
        transport = upstream()
        fetch_status(endpoint, transport=transport)
        assert len(transport.requests) == 1
        assert transport.requests[0].method == "GET"
        assert str(transport.requests[0].url) == endpoint

    def test_follows_redirects(self, endpoint, stub_status_body) -> None:
        """Redirects are followed to the final status page."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": endpoint})
            return httpx.Response(200, content=stub_status_body.encode())

        body = fetch_status("http://nginx.test/old", transport=httpx.MockTransport(handler))
        assert body == stub_status_body.encode()


class TestFetchFailures:
    """Each failure mode raises its own error and returns no body."""

    @pytest.mark.parametrize("status_code", [301, 404, 500, 503])
    def test_non_200_status(self, endpoint, status_code: int) -> None:
        """Anything but 200 is an UnexpectedStatusError carrying the code."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code)

        with pytest.raises(UnexpectedStatusError) as excinfo:
            fetch_status(endpoint, transport=httpx.MockTransport(handler))
        assert excinfo.value.status_code == status_code

    def test_http_500(self, endpoint, upstream) -> None:
        """A server error is reported with its status code."""
        with pytest.raises(UnexpectedStatusError) as excinfo:
            fetch_status(endpoint, transport=upstream(status_code=500))
        assert excinfo.value.status_code == 500
        assert "500" in str(excinfo.value)

    def test_connection_refused(self, monkeypatch) -> None:
        """An unreachable endpoint is a transport error."""
        for var in ("HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
            monkeypatch.delenv(var, raising=False)
        with pytest.raises(TransportError):
            fetch_status(f"http://127.0.0.1:{_closed_port()}/stub_status", timeout=2.0)

    def test_transport_error_from_client(self, endpoint) -> None:
        """Connection-level failures raised by the transport are wrapped."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(TransportError) as excinfo:
            fetch_status(endpoint, transport=httpx.MockTransport(handler))
        assert isinstance(excinfo.value.__cause__, httpx.ConnectTimeout)

    @pytest.mark.parametrize("bad_endpoint", ["", "stub_status", "nginx.test/stub_status"])
    def test_malformed_endpoint(self, bad_endpoint: str) -> None:
        """Endpoints without an http(s) scheme cannot form a request."""
        with pytest.raises(RequestConstructionError):
            fetch_status(bad_endpoint)

    def test_body_read_failure(self, endpoint) -> None:
        """A stream that breaks mid-body is a BodyReadError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=_BrokenStream())

        with pytest.raises(BodyReadError):
            fetch_status(endpoint, transport=httpx.MockTransport(handler))
