"""Docker log stream demultiplexing.

With TTY disabled the engine prefixes every chunk of output with an 8-byte
header ``[stream_type(1), padding(3), size(4, big-endian)]``. With TTY
enabled the stream is plain text. ``demultiplex_logs`` accepts either.
"""

import struct

HEADER_SIZE = 8

# 0 = stdin, 1 = stdout, 2 = stderr
STREAM_TYPES = frozenset((0, 1, 2))


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def demultiplex_logs(buffer: bytes) -> str:
    """Decode a raw logs body into plain text.

    Args:
        buffer: Bytes returned by the logs endpoint

    Returns:
        Frame payloads concatenated in order. A frame whose payload is cut
        short is dropped. Bytes that stop looking like frame headers are
        passed through verbatim.
    """
    if len(buffer) < HEADER_SIZE or buffer[0] not in STREAM_TYPES:
        return _decode(buffer)

    view = memoryview(buffer)
    output = bytearray()
    offset = 0

    while len(buffer) - offset >= HEADER_SIZE:
        (word,) = struct.unpack_from(">I", buffer, offset)
        if (word >> 24) not in STREAM_TYPES:
            # Not a frame header; the rest is plain text
            output += view[offset:]
            return _decode(bytes(output))
        offset += 4

        (size,) = struct.unpack_from(">I", buffer, offset)
        offset += 4
        if len(buffer) - offset < size:
            # Truncated frame
            return _decode(bytes(output))

        output += view[offset:offset + size]
        offset += size

    output += view[offset:]
    return _decode(bytes(output))
