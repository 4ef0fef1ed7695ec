from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

from .errors import ArmorError, CorruptBlockError, NoMarkerFound
from .locator import locate
from .payload import decode_body


@dataclass(frozen=True)
class Block:
    type: str
    headers: Mapping[str, str] = field(default_factory=dict)
    payload: bytes = b""

    def __post_init__(self):
        # Read-only view over a private copy of the caller's mapping
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "payload", bytes(self.payload))

    def __hash__(self) -> int:
        return hash((self.type, frozenset(self.headers.items()), self.payload))


@dataclass
class ScanResult:
    blocks: List[Block]
    error: Optional[ArmorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def decode_strict(data: bytes) -> Tuple[Block, Optional[bytes]]:
    """Decode the first armored block in ``data``, raising on failure.

    Returns:
        (block, remainder) where remainder is everything after the END line,
        or None when nothing follows it.

    Raises:
        NoMarkerFound, or a CorruptBlockError subclass naming the defect.
    """
    # Own the buffer: payload and remainder never alias the caller's memory
    data = bytes(data)
    loc = locate(data)
    payload = decode_body(loc.body_lines)
    block = Block(type=loc.type, headers=loc.headers, payload=payload)
    rest = data[loc.end :]
    return block, (rest or None)


def decode(data: bytes) -> Tuple[Optional[Block], Optional[bytes]]:
    """Decode the first armored block in ``data``.

    Returns (block, remainder) on success and (None, None) on any failure:
    no marker, bad framing, bad base64 or checksum mismatch. Call again with
    the remainder to continue through a multi-block stream; scanning must stop
    at the first (None, None) since a corrupt block's extent is unknown.
    """
    try:
        return decode_strict(data)
    except ArmorError:
        return None, None


def iter_blocks(data: bytes) -> Iterator[Block]:
    """Yield blocks from ``data`` until decoding fails or input runs out."""
    rest: Optional[bytes] = data
    while rest:
        block, rest = decode(rest)
        if block is None:
            return
        yield block


def scan(data: bytes) -> ScanResult:
    """Collect every decodable block and the error that ended the scan.

    Text without a BEGIN line after the last good block is trailing noise and
    does not count as an error; a corrupt block does.
    """
    blocks: List[Block] = []
    error: Optional[ArmorError] = None
    rest: Optional[bytes] = bytes(data)
    while rest is not None:
        try:
            block, rest = decode_strict(rest)
        except NoMarkerFound as exc:
            if not blocks:
                error = exc
            break
        except CorruptBlockError as exc:
            error = exc
            break
        blocks.append(block)
    return ScanResult(blocks=blocks, error=error)
