"""Pure Python AAPC run-length codec.

AAPC splits its input into 256 KiB blocks and encodes each block as a
stream of literal, escaped-literal and run tokens. Runs of three or more
identical bytes collapse to three bytes. Everything else is copied through,
with the two flag byte values escaped.

Usage::

    from aapc.codec import compress, decompress

    compressed = compress(data)
    original = decompress(compressed)
"""

from __future__ import annotations

from .compress import compress, encode_block, max_compressed_length, tokenize
from .decompress import (
    decode_block,
    decompress,
    get_block_count,
    is_valid_compressed_data,
    parse_tokens,
)
from .exceptions import CodecError, MalformedInputError, TruncatedBufferError
from .tokens import EscapedLiteral, Literal, Run, Token

__all__ = [
    # Core API
    "compress",
    "decompress",
    # Per-block API
    "encode_block",
    "decode_block",
    "tokenize",
    "parse_tokens",
    # Tokens
    "Token",
    "Literal",
    "EscapedLiteral",
    "Run",
    # Utilities
    "max_compressed_length",
    "get_block_count",
    "is_valid_compressed_data",
    # Exceptions
    "CodecError",
    "MalformedInputError",
    "TruncatedBufferError",
]
