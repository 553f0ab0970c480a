"""
Block framing for AAPC compressed buffers.

This module owns the outer layout of a compressed buffer. It knows nothing
about tokens: payloads are opaque byte strings here.


BUFFER STRUCTURE
----------------
A compressed buffer is a header followed by length-prefixed blocks::

    [block_count: 4 bytes BE][block_1][block_2]...[block_n]

Each block is::

    [payload_len: 4 bytes BE][payload: payload_len bytes]

There is no end marker and no checksum. The encoder ends the buffer right
after the last declared block; the decoder stops reading there and ignores
anything that follows.


BLOCK COUNT
-----------
The block count is ``ceil(len(raw) / BLOCK_SIZE)``. An empty input has zero
blocks, so its compressed form is exactly ``00 00 00 00``.


Example:
-------
Raw input: 300000 bytes

    block_count = ceil(300000 / 262144) = 2

    [00 00 00 02]
    [len_1][payload for raw[0:262144]]
    [len_2][payload for raw[262144:300000]]
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .constants import BLOCK_SIZE, BYTE_ORDER, HEADER_SIZE, LENGTH_PREFIX_SIZE
from .exceptions import MalformedInputError, TruncatedBufferError


def block_count_for(length: int) -> int:
    """
    Return the number of blocks a raw input of ``length`` bytes is split into.

    Zero-length input yields zero blocks.
    """
    return (length + BLOCK_SIZE - 1) // BLOCK_SIZE


def split_blocks(data: bytes) -> Iterator[bytes]:
    """Yield the raw input in consecutive slices of at most BLOCK_SIZE bytes."""
    for start in range(0, len(data), BLOCK_SIZE):
        yield data[start : start + BLOCK_SIZE]


def frame_blocks(payloads: Iterable[bytes]) -> bytes:
    """
    Lay out encoded block payloads as a compressed buffer.

    Args:
        payloads: Encoded payloads, in input block order.

    Returns:
        Header, then every payload behind its length prefix.
    """
    body = bytearray()
    count = 0
    for payload in payloads:
        body.extend(len(payload).to_bytes(LENGTH_PREFIX_SIZE, BYTE_ORDER))
        body.extend(payload)
        count += 1

    return count.to_bytes(HEADER_SIZE, BYTE_ORDER) + bytes(body)


def read_u32(data: bytes, offset: int, what: str) -> int:
    """
    Read a 4-byte big-endian field.

    Raises:
        TruncatedBufferError: If fewer than 4 bytes remain at ``offset``.
    """
    if offset + 4 > len(data):
        raise TruncatedBufferError(
            what, needed=4, available=max(len(data) - offset, 0), offset=offset
        )
    return int.from_bytes(data[offset : offset + 4], BYTE_ORDER)


def read_block_count(data: bytes) -> int:
    """Read the block count header."""
    return read_u32(data, 0, "block count header")


def iter_blocks(data: bytes, *, strict: bool = False) -> Iterator[tuple[int, bytes]]:
    """
    Walk the framing of a compressed buffer.

    Every length is checked against the remaining bytes before it is used.

    Args:
        data: Compressed buffer.
        strict: Also reject bytes left over after the last declared block.
            By default iteration stops after ``block_count`` blocks.

    Yields:
        Tuples of (payload_offset, payload) in block order. The offset is the
        position of the payload's first byte inside ``data``.

    Raises:
        TruncatedBufferError: If the header, a length prefix or a payload
            extends past the end of the buffer.
        MalformedInputError: If ``strict`` is set and bytes remain after the
            last declared block.
    """
    block_count = read_block_count(data)
    pos = HEADER_SIZE

    for index in range(block_count):
        payload_len = read_u32(data, pos, f"length prefix of block {index}")
        pos += LENGTH_PREFIX_SIZE

        if pos + payload_len > len(data):
            raise TruncatedBufferError(
                f"payload of block {index}",
                needed=payload_len,
                available=len(data) - pos,
                offset=pos,
            )

        yield pos, data[pos : pos + payload_len]
        pos += payload_len

    if strict and pos != len(data):
        raise MalformedInputError(
            f"{len(data) - pos} trailing bytes after the last of {block_count} blocks",
            offset=pos,
        )
