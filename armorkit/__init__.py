"""
armorkit — decoder for ASCII-armored data blocks.

An armored block wraps a binary payload in text:

    -----BEGIN <TYPE>-----
    Key: Value
    <blank line>
    <base64 body, line-wrapped>
    =XXXX                      (CRC-24 of the payload, base64)
    -----END <TYPE>-----

Features:

- Locates blocks inside arbitrary input (leading/trailing noise, concatenated blocks).
- Strict framing, base64 and CRC-24 checks; corrupt blocks are never returned.
- Stateless stream continuation: decode() hands back the unconsumed remainder.
- CLI to list, verify and extract blocks from files.

The library does not interpret payloads and does not encode armor.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "crc24",
    "errors",
    "locator",
    "payload",
    "decoder",
]

# Programmatic API: armorkit.decoder.decode / decode_strict / iter_blocks / scan.
