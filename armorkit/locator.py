from __future__ import annotations

"""
Block location: find the BEGIN/END marker pair and split out the header lines.

Grammar (one item per line, trailing " \\t\\r" ignored)
- start:   (-+)BEGIN <TYPE>(-+)     both dash runs the same length
- headers: Key: Value               zero or more, ended by a blank line;
                                    ": " is required, "Key:Value" is malformed
- TYPE is printable ASCII; a marker with any other byte in TYPE is noise
- body:    any lines                handed to armorkit.payload
- end:     (-+)END <TYPE>(-+)       same TYPE and dash run as the start

When the first line after the start marker is neither blank nor a header, the
block has no header section and that line is the first body line.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from .constants import BEGIN_TAG, END_TAG, LINE_TRAILING_WS
from .errors import MalformedHeader, NoMarkerFound, TypeMismatch, UnterminatedBlock


# Printable ASCII; no leading/trailing space or dash
_TYPE = rb"[!-,.-~](?:[ -~]*[!-,.-~])?"
_BEGIN_RE = re.compile(rb"(-+)" + re.escape(BEGIN_TAG) + rb"(" + _TYPE + rb")(-+)")
_END_RE = re.compile(rb"(-+)" + re.escape(END_TAG) + rb"(" + _TYPE + rb")(-+)")
# "Key: Value"; key has no colon or whitespace, value may contain further colons.
# "Key:" alone is an empty value (its trailing space was stripped with the line).
_HEADER_RE = re.compile(rb"([!-9;-~]+):(?: (.*))?")


@dataclass
class LocatedBlock:
    type: str
    headers: Dict[str, str]
    body_lines: List[bytes]
    end: int  # offset just past the END line terminator


def _iter_lines(data: bytes, pos: int = 0) -> Iterator[Tuple[bytes, int]]:
    """Yield (line, next_pos) pairs; line excludes its terminator."""
    n = len(data)
    while pos < n:
        nl = data.find(b"\n", pos)
        if nl < 0:
            line, nxt = data[pos:], n
        else:
            line, nxt = data[pos:nl], nl + 1
        yield line.rstrip(LINE_TRAILING_WS), nxt
        pos = nxt


def _next_line(lines: Iterator[Tuple[bytes, int]], label: str) -> Tuple[bytes, int]:
    try:
        return next(lines)
    except StopIteration:
        raise UnterminatedBlock(f"missing END {label} marker") from None


def _parse_header(line: bytes) -> Tuple[str, str]:
    m = _HEADER_RE.fullmatch(line)
    if m is None:
        raise MalformedHeader(f"bad header line: {line[:64]!r}")
    try:
        value = (m.group(2) or b"").decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedHeader(f"header {m.group(1).decode('ascii')!r} is not valid UTF-8") from exc
    return m.group(1).decode("ascii"), value


def _match_begin(line: bytes):
    m = _BEGIN_RE.fullmatch(line)
    if m is None or len(m.group(1)) != len(m.group(3)):
        return None
    return m


def locate(data: bytes) -> LocatedBlock:
    """Find the first armored block in ``data``.

    Raises:
        NoMarkerFound: no BEGIN line anywhere in ``data``.
        UnterminatedBlock: data ends before the END line.
        MalformedHeader: a line in the header section is not ``Key: Value``.
        TypeMismatch: the END line names another type or uses another dash run.
    """
    lines = _iter_lines(data)

    for line, _ in lines:
        begin = _match_begin(line)
        if begin is not None:
            break
    else:
        raise NoMarkerFound("no BEGIN marker found")

    dashes = len(begin.group(1))
    raw_label = begin.group(2)
    label = raw_label.decode("ascii")

    headers: Dict[str, str] = {}
    line, end = _next_line(lines, label)
    if line and _HEADER_RE.fullmatch(line):
        while line:
            key, value = _parse_header(line)
            headers[key] = value
            line, end = _next_line(lines, label)
        line, end = _next_line(lines, label)
    elif not line:
        line, end = _next_line(lines, label)

    body: List[bytes] = []
    while True:
        m = _END_RE.fullmatch(line)
        if m is not None:
            if m.group(2) != raw_label:
                raise TypeMismatch(f"BEGIN {label} closed by END {m.group(2).decode('ascii')}")
            if len(m.group(1)) != dashes or len(m.group(3)) != dashes:
                raise TypeMismatch(f"END {label} marker dash run differs from BEGIN")
            return LocatedBlock(type=label, headers=headers, body_lines=body, end=end)
        body.append(line)
        line, end = _next_line(lines, label)
