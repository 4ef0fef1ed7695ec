from __future__ import annotations

import base64
import binascii
from typing import List, Tuple

from .constants import CHECKSUM_B64_LEN, CHECKSUM_RAW_LEN, CHECKSUM_SENTINEL
from .crc24 import crc24
from .errors import ChecksumMismatch, MalformedBody, MissingOrMalformedChecksum


def _b64decode(data: bytes) -> bytes:
    # validate=True rejects characters outside the alphabet and misplaced padding
    return base64.b64decode(data, validate=True)


def split_checksum(lines: List[bytes]) -> Tuple[List[bytes], bytes]:
    """Split body lines into (base64 lines, checksum trailer line)."""
    end = len(lines)
    while end and not lines[end - 1]:
        end -= 1
    if not end:
        raise MissingOrMalformedChecksum("empty body; checksum trailer missing")
    return lines[: end - 1], lines[end - 1]


def decode_checksum(trailer: bytes) -> int:
    if not trailer.startswith(CHECKSUM_SENTINEL) or len(trailer) != len(CHECKSUM_SENTINEL) + CHECKSUM_B64_LEN:
        raise MissingOrMalformedChecksum(f"bad checksum trailer: {trailer[:16]!r}")
    try:
        raw = _b64decode(trailer[len(CHECKSUM_SENTINEL) :])
    except (binascii.Error, ValueError) as exc:
        raise MissingOrMalformedChecksum(f"checksum trailer is not base64: {trailer!r}") from exc
    if len(raw) != CHECKSUM_RAW_LEN:
        raise MissingOrMalformedChecksum(f"checksum trailer decodes to {len(raw)} bytes")
    return int.from_bytes(raw, "big")


def decode_body(lines: List[bytes]) -> bytes:
    """Decode body lines (base64 + trailer) into verified payload bytes.

    Structure is checked before the checksum so that a bad trailer, bad base64
    and a CRC mismatch raise distinct errors.
    """
    b64_lines, trailer = split_checksum(lines)
    expected = decode_checksum(trailer)
    for i, line in enumerate(b64_lines):
        if not line:
            raise MalformedBody(f"blank line inside body at line {i + 1}")
    try:
        payload = _b64decode(b"".join(b64_lines))
    except (binascii.Error, ValueError) as exc:
        raise MalformedBody(f"invalid base64 body: {exc}") from exc
    actual = crc24(payload)
    if actual != expected:
        raise ChecksumMismatch(expected, actual)
    return payload
