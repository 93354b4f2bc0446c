"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

STUB_STATUS_BODY = (
    "Active connections: 3 \n"
    "server accepts handled requests\n"
    " 10 10 15 \n"
    "Reading: 0 Writing: 1 Waiting: 2 \n"
)


@pytest.fixture
def endpoint() -> str:
    return "http://nginx.test/stub_status"


@pytest.fixture
def stub_status_body() -> str:
    """A report as nginx actually renders it, trailing spaces included."""
    return STUB_STATUS_BODY


@pytest.fixture
def upstream() -> Callable[..., httpx.MockTransport]:
    """Build a mock transport answering every request with one fixed response.

    The returned transport records each request it served in ``.requests``.
    """

    def make(status_code: int = 200, body: str | bytes = STUB_STATUS_BODY) -> httpx.MockTransport:
        content = body.encode() if isinstance(body, str) else body
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, content=content)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return make
