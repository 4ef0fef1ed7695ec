# Marker lines: -----BEGIN <TYPE>----- / -----END <TYPE>-----
BEGIN_TAG = b"BEGIN "
END_TAG = b"END "
DASH = b"-"

# Checksum trailer: "=" followed by 4 base64 chars (3 bytes of CRC-24)
CHECKSUM_SENTINEL = b"="
CHECKSUM_B64_LEN = 4
CHECKSUM_RAW_LEN = 3

# CRC-24 (OpenPGP, RFC 4880 section 6.1)
CRC24_INIT = 0xB704CE
CRC24_POLY = 0x1864CFB
CRC24_MASK = 0xFFFFFF

# Bytes stripped from the end of every line before matching
LINE_TRAILING_WS = b" \t\r"
