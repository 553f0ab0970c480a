"""
Constants for the AAPC run-length codec.

The wire format is fixed; none of these values may change without breaking
interoperability with previously written archives.
"""

from __future__ import annotations

from typing import Final

# ===========================================================================
# Block Processing Constants
# ===========================================================================
#
# Input is split into fixed-size blocks. Each block is encoded on its own:
# no run or token ever crosses a block boundary.

BLOCK_SIZE: Final = 256 * 1024
"""Maximum block size in bytes (256 KiB).

The last block of an input may be shorter. An empty input has no blocks.
"""

# ===========================================================================
# Framing Constants
# ===========================================================================
#
# The compressed buffer is laid out as::
#
#     [block_count: u32 BE] ([payload_len: u32 BE] [payload])*

HEADER_SIZE: Final = 4
"""Size of the block count field at the start of a compressed buffer."""

LENGTH_PREFIX_SIZE: Final = 4
"""Size of the payload length field in front of every block."""

BYTE_ORDER: Final = "big"
"""Byte order of the block count and payload length fields."""

# ===========================================================================
# Token Flags
# ===========================================================================
#
# Two byte values are reserved inside a block payload. Every other value
# stands for itself.
#
#   0xFE = run:             [0xFE] [run_len] [value]
#   0xFF = escaped literal: [0xFF] [value]

RUN_FLAG: Final = 0xFE
"""Flag introducing a run token.

The decoder always consumes the two following bytes (length, value), so a
run of 0xFE bytes is encoded unambiguously as ``FE nn FE``.
"""

ESCAPE_FLAG: Final = 0xFF
"""Flag introducing an escaped literal.

Used for literal occurrences of either flag value, so that a bare flag byte
never appears as data.
"""

FLAG_BYTES: Final = frozenset({RUN_FLAG, ESCAPE_FLAG})
"""Byte values that cannot be emitted as plain literals."""

# ===========================================================================
# Run Constraints
# ===========================================================================

MIN_RUN_LENGTH: Final = 3
"""Shortest run encoded as a run token.

A run token costs 3 bytes. A 2-run costs 2 bytes as plain literals, so
encoding it as a run would expand the output.
"""

MAX_RUN_LENGTH: Final = 255
"""Longest run a single token can carry (one-byte length field).

Longer runs are split into consecutive tokens.
"""
