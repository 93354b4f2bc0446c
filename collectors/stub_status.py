"""Parser for the plaintext report served by nginx's stub_status module.

The report is a fixed four-line block::

    Active connections: 291
    server accepts handled requests
     16630948 16630948 31070465
    Reading: 6 Writing: 179 Waiting: 106

Every literal word must match exactly and every number must be a plain
base-10 integer; anything else rejects the whole report.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import FormatMismatchError

# Placeholder for a numeric token in the template below.
NUMBER = object()

TEMPLATE: tuple[tuple[object, ...], ...] = (
    ("Active", "connections:", NUMBER),
    ("server", "accepts", "handled", "requests"),
    (NUMBER, NUMBER, NUMBER),
    ("Reading:", NUMBER, "Writing:", NUMBER, "Waiting:", NUMBER),
)

INT64_MAX = 2**63 - 1
EXCERPT_LIMIT = 40

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class StubConnections:
    active: int
    accepted: int
    handled: int
    reading: int
    writing: int
    waiting: int


@dataclass(frozen=True)
class StubStatus:
    connections: StubConnections
    requests: int


def _excerpt(text: str) -> str:
    if len(text) <= EXCERPT_LIMIT:
        return text
    return text[:EXCERPT_LIMIT] + "..."


def _parse_number(token: str, line_no: int, position: int) -> int:
    if not _DIGITS.fullmatch(token):
        raise FormatMismatchError(line_no, position, "an integer", _excerpt(token))
    value = int(token)
    if value > INT64_MAX:
        raise FormatMismatchError(line_no, position, "an integer within int64 range", _excerpt(token))
    return value


def parse_stub_status(data: bytes | str) -> StubStatus:
    """Parse a stub_status report into a :class:`StubStatus`.

    Raises :class:`FormatMismatchError` on the first deviation from the
    template. Trailing blank lines are ignored; leading and trailing
    whitespace on a line is not significant.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FormatMismatchError(0, 0, "UTF-8 text", _excerpt(repr(data[:EXCERPT_LIMIT]))) from exc
    else:
        text = data

    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()

    if len(lines) < len(TEMPLATE):
        raise FormatMismatchError(len(lines) + 1, 0, f"{len(TEMPLATE)} lines", "end of input")
    if len(lines) > len(TEMPLATE):
        raise FormatMismatchError(
            len(TEMPLATE) + 1, 0, f"{len(TEMPLATE)} lines", _excerpt(lines[len(TEMPLATE)])
        )

    numbers: list[int] = []
    for line_no, (line, expected) in enumerate(zip(lines, TEMPLATE), start=1):
        tokens = line.split()
        if len(tokens) != len(expected):
            raise FormatMismatchError(
                line_no, 0, f"{len(expected)} tokens, found {len(tokens)}", _excerpt(line)
            )
        for position, (token, want) in enumerate(zip(tokens, expected), start=1):
            if want is NUMBER:
                numbers.append(_parse_number(token, line_no, position))
            elif token != want:
                raise FormatMismatchError(line_no, position, repr(want), _excerpt(token))

    active, accepted, handled, requests, reading, writing, waiting = numbers
    return StubStatus(
        connections=StubConnections(
            active=active,
            accepted=accepted,
            handled=handled,
            reading=reading,
            writing=writing,
            waiting=waiting,
        ),
        requests=requests,
    )
