class ArmorError(Exception):
    """Base class for armor decoding errors."""


class NoMarkerFound(ArmorError):
    """No start marker before the end of the buffer."""


class CorruptBlockError(ArmorError):
    """A start marker was found but the block that follows is unusable."""


# Framing
class UnterminatedBlock(CorruptBlockError):
    pass


class TypeMismatch(CorruptBlockError):
    pass


class MalformedHeader(CorruptBlockError):
    pass


# Payload
class MalformedBody(CorruptBlockError):
    pass


class MissingOrMalformedChecksum(CorruptBlockError):
    pass


class ChecksumMismatch(CorruptBlockError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"CRC-24 mismatch: trailer {expected:06x}, computed {actual:06x}")
        self.expected = expected
        self.actual = actual
