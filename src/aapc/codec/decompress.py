"""
AAPC decompression implementation.

This module implements the decoding side of the AAPC run-length codec.


HOW DECOMPRESSION WORKS
-----------------------
The decoder walks the framing block by block. Inside a block it reads one
flag byte at a time:

  0xFF  -> read one more byte, append it.
  0xFE  -> read a length and a value, append the value ``length`` times.
  other -> append the byte itself.

A block is finished when its declared payload is consumed exactly. Running
out of payload in the middle of a token means the input is malformed.


Example:
-------
Compressed: 00 00 00 01 | 00 00 00 06 | FE 05 41 42 FF FF

Step 1: Block count = 1.
Step 2: Block 0 payload is 6 bytes.
Step 3: FE 05 41 -> "AAAAA"
        42       -> "B"
        FF FF    -> 0xFF
Result: "AAAAAB" + bytes([0xFF])


VALIDATION
----------
Every read is bounds-checked before it happens. A truncated header, length
prefix, payload or token raises MalformedInputError with the byte offset of
the problem. So does a run token with a length below 3, which the encoder
never writes.

Everything else is decoded as read: ``FF xx`` appends ``xx`` whatever its
value, and bytes after the last declared block are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .constants import HEADER_SIZE
from .exceptions import MalformedInputError, TruncatedBufferError
from .framing import iter_blocks, read_block_count
from .tokens import Token, decode_token, expand_token

logger = logging.getLogger(__name__)


def decompress(data: bytes) -> bytes:
    """
    Decompress an AAPC compressed buffer.

    Args:
        data: Compressed buffer.

    Returns:
        Original uncompressed data.

    Raises:
        MalformedInputError: If the framing or a token is malformed or truncated.
    """
    output = bytearray()
    blocks = 0

    for payload_offset, payload in iter_blocks(data):
        output.extend(decode_block(payload, base_offset=payload_offset))
        blocks += 1

    logger.debug("Decompressed %d blocks into %d bytes", blocks, len(output))
    return bytes(output)


def decode_block(payload: bytes, base_offset: int = 0) -> bytes:
    """
    Decode a single block payload.

    Args:
        payload: Encoded block payload.
        base_offset: Position of the payload inside the full compressed
            buffer. Only used to report error offsets.

    Returns:
        Raw block bytes.

    Raises:
        MalformedInputError: If a token is malformed or truncated.
    """
    output = bytearray()
    for token in parse_tokens(payload, base_offset=base_offset):
        output.extend(expand_token(token))
    return bytes(output)


def parse_tokens(payload: bytes, base_offset: int = 0) -> Iterator[Token]:
    """
    Parse a block payload into tokens.

    Args:
        payload: Encoded block payload.
        base_offset: Position of the payload inside the full compressed buffer.

    Yields:
        Tokens in payload order.

    Raises:
        MalformedInputError: If a token is malformed or truncated.
    """
    pos = 0
    while pos < len(payload):
        try:
            token, consumed = decode_token(payload, pos)
        except TruncatedBufferError as e:
            # Offsets are reported relative to the whole buffer, not the payload.
            raise TruncatedBufferError(
                e.what, needed=e.needed, available=e.available, offset=base_offset + pos
            ) from e
        except ValueError as e:
            raise MalformedInputError(f"invalid token: {e}", offset=base_offset + pos) from e

        yield token
        pos += consumed


def get_block_count(data: bytes) -> int:
    """
    Read the block count from compressed data without decompressing.

    Args:
        data: Compressed buffer.

    Returns:
        The declared number of blocks.

    Raises:
        MalformedInputError: If the buffer is shorter than the header.
    """
    return read_block_count(data)


def is_valid_compressed_data(data: bytes) -> bool:
    """
    Check if data appears to be a valid AAPC compressed buffer.

    Args:
        data: Data to check.

    Returns:
        True if the header and every block frame fit the buffer exactly.

    Note:
        This walks the framing only. It does NOT parse tokens, so a buffer
        with a corrupted payload may still pass.
    """
    if len(data) < HEADER_SIZE:
        return False

    try:
        for _ in iter_blocks(data, strict=True):
            pass
    except MalformedInputError:
        return False
    return True
