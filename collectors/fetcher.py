"""One-shot HTTP fetch of the upstream stub_status page."""

from __future__ import annotations

import httpx

from .errors import (
    BodyReadError,
    RequestConstructionError,
    TransportError,
    UnexpectedStatusError,
)

DEFAULT_TIMEOUT = 5.0


def fetch_status(
    endpoint: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> bytes:
    """GET ``endpoint`` once and return the body of a 200 response.

    A fresh client is opened for the call and closed on every exit path,
    so an abandoned scrape never leaves a request in flight.
    """
    with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
        try:
            request = client.build_request("GET", endpoint)
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(f"failed to create a GET request for {endpoint!r}: {exc}") from exc

        try:
            response = client.send(request, stream=True)
        except httpx.UnsupportedProtocol as exc:
            raise RequestConstructionError(f"failed to create a GET request for {endpoint!r}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"failed to get {endpoint}: {exc}") from exc

        try:
            if response.status_code != httpx.codes.OK:
                raise UnexpectedStatusError(response.status_code)
            try:
                return response.read()
            except httpx.HTTPError as exc:
                raise BodyReadError(f"failed to read the response body from {endpoint}: {exc}") from exc
        finally:
            response.close()
