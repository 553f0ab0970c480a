"""
AAPC compression implementation.

This module implements the encoding side of the AAPC run-length codec.


HOW COMPRESSION WORKS
---------------------
The encoder scans each block left to right with a cursor.

At every position it counts how many identical bytes start there, up to 255:

  - 3 or more: emit a run token and skip the whole run.
  - 1 or 2:    emit the single byte at the cursor and advance by one.

Bytes equal to a flag value (0xFE, 0xFF) are escaped when emitted alone.


Example:
-------
Input:  "AAAAAB" + bytes([0xFF])

    Position 0: run of 5 'A'  -> FE 05 41
    Position 5: run of 1 'B'  -> 42
    Position 6: run of 1 0xFF -> FF FF

Payload: FE 05 41 42 FF FF (6 bytes for 7 input bytes)


LONG RUNS
---------
The run length field is one byte. The counter stops at 255 even when the
run continues; the rest of the run is picked up from the next position as a
new run. 256 identical bytes therefore become a 255-run followed by a
single literal.


Blocks never share state, so a run that crosses a block boundary is split
at the boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .constants import BLOCK_SIZE, HEADER_SIZE, LENGTH_PREFIX_SIZE, MAX_RUN_LENGTH, MIN_RUN_LENGTH
from .framing import block_count_for, frame_blocks, split_blocks
from .tokens import Run, Token, encode_token, literal_token

logger = logging.getLogger(__name__)


def compress(data: bytes) -> bytes:
    """
    Compress data with the AAPC run-length codec.

    Args:
        data: Uncompressed input bytes. Any length, including zero.

    Returns:
        Compressed buffer.

    Output format:
        [block_count: u32 BE] ([payload_len: u32 BE] [payload])*

    Never fails: every byte value and every length is representable.
    """
    logger.debug(
        "Compressing %d bytes in %d blocks", len(data), block_count_for(len(data))
    )
    return frame_blocks(encode_block(block) for block in split_blocks(data))


def max_compressed_length(source_bytes: int) -> int:
    """
    Calculate the maximum possible compressed length for a given input size.

    Args:
        source_bytes: Uncompressed data size.

    Returns:
        Upper bound on ``len(compress(data))`` for any ``data`` of that size.

    The worst case is input made only of isolated flag bytes: every byte
    becomes a 2-byte escaped literal.
    """
    # Components:
    #   - HEADER_SIZE: block count
    #   - one length prefix per block
    #   - 2 bytes per input byte (escaped literals)
    blocks = block_count_for(source_bytes)
    return HEADER_SIZE + blocks * LENGTH_PREFIX_SIZE + 2 * source_bytes


def encode_block(block: bytes) -> bytes:
    """
    Encode a single block (at most BLOCK_SIZE bytes) into its token payload.

    Args:
        block: Raw block bytes.

    Returns:
        Concatenated wire bytes of the block's tokens.
    """
    if len(block) > BLOCK_SIZE:
        raise ValueError(f"Block exceeds {BLOCK_SIZE} bytes: {len(block)}")

    output = bytearray()
    for token in tokenize(block):
        output.extend(encode_token(token))
    return bytes(output)


def tokenize(block: bytes) -> Iterator[Token]:
    """
    Split a raw block into the tokens the encoder emits for it.

    Args:
        block: Raw block bytes.

    Yields:
        Tokens in order. Expanding them back-to-back reproduces ``block``.
    """
    pos = 0
    while pos < len(block):
        run_length = _run_length_at(block, pos)

        if run_length >= MIN_RUN_LENGTH:
            yield Run(length=run_length, value=block[pos])
            pos += run_length
        else:
            # A 2-run becomes two single-byte tokens.
            yield literal_token(block[pos])
            pos += 1


def _run_length_at(block: bytes, pos: int) -> int:
    """
    Count identical bytes starting at ``pos``, capped at MAX_RUN_LENGTH.

    Example:
        block = b"xxxxy", pos = 0  -> 4
        block = b"xxxxy", pos = 4  -> 1
    """
    value = block[pos]
    limit = min(len(block), pos + MAX_RUN_LENGTH)

    end = pos + 1
    while end < limit and block[end] == value:
        end += 1

    return end - pos
