"""Errors raised while fetching or parsing an nginx stub_status report."""

from __future__ import annotations


class StubStatusError(Exception):
    """Base for every failure that makes a scrape produce no samples."""


class RequestConstructionError(StubStatusError):
    """The endpoint could not be turned into a request (malformed URL)."""


class TransportError(StubStatusError):
    """Connection refused, DNS failure, timeout or similar network failure."""


class UnexpectedStatusError(StubStatusError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"expected 200 response, got {status_code}")
        self.status_code = status_code


class BodyReadError(StubStatusError):
    """The response stream broke while the body was being read."""


class FormatMismatchError(StubStatusError):
    """The status text did not match the stub_status template.

    ``line`` and ``position`` are 1-based; ``position`` is 0 when the
    failure concerns the line as a whole (missing line, wrong token count)
    and ``line`` is 0 when the body could not be decoded at all.
    """

    def __init__(self, line: int, position: int, expected: str, fragment: str) -> None:
        where = f"line {line}" if not position else f"line {line}, token {position}"
        super().__init__(f"{where}: expected {expected}, got {fragment!r}")
        self.line = line
        self.position = position
        self.expected = expected
        self.fragment = fragment
