"""
Token model for AAPC block payloads.

A block payload is a flat sequence of tokens. There are exactly three kinds::

    Literal          [value]                 value not in {0xFE, 0xFF}
    EscapedLiteral   [0xFF] [value]          value in {0xFE, 0xFF}
    Run              [0xFE] [length] [value] length in [3, 255]

The encoder's mapping from raw bytes to tokens is a closed bijection, so both
directions are plain case analysis over the three kinds.

The decoder appends whatever byte follows 0xFF, so ``FF 41`` decodes to
``41`` even though the encoder never writes it. Run lengths below 3 are
rejected: such a token cannot come from the encoder.


Example:
-------
Raw block:  41 41 41 41 FE 42 42

    41 41 41 41  -> Run(length=4, value=0x41)   -> FE 04 41
    FE           -> EscapedLiteral(value=0xFE)  -> FF FE
    42           -> Literal(value=0x42)         -> 42
    42           -> Literal(value=0x42)         -> 42

Payload:    FE 04 41 FF FE 42 42

The trailing 2-run stays as two literals: a run token costs 3 bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .constants import ESCAPE_FLAG, FLAG_BYTES, MAX_RUN_LENGTH, MIN_RUN_LENGTH, RUN_FLAG
from .exceptions import TruncatedBufferError


@dataclass(frozen=True, slots=True)
class Literal:
    """A single byte that stands for itself."""

    value: int
    """The byte value. Never one of the flag bytes."""

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"Literal value must be a byte, got {self.value}")
        if self.value in FLAG_BYTES:
            raise ValueError(f"Literal value {self.value:#04x} collides with a flag byte")


@dataclass(frozen=True, slots=True)
class EscapedLiteral:
    """A single byte behind the escape flag, appended verbatim on decode."""

    value: int
    """The byte value. The encoder only escapes flag bytes; the decoder accepts any byte."""

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"Escaped value must be a byte, got {self.value}")


@dataclass(frozen=True, slots=True)
class Run:
    """A byte value repeated ``length`` times."""

    length: int
    """Number of repetitions, in [MIN_RUN_LENGTH, MAX_RUN_LENGTH]."""

    value: int
    """The repeated byte value. Any byte, including the flag bytes."""

    def __post_init__(self) -> None:
        if not MIN_RUN_LENGTH <= self.length <= MAX_RUN_LENGTH:
            raise ValueError(
                f"Run length must be in [{MIN_RUN_LENGTH}, {MAX_RUN_LENGTH}], got {self.length}"
            )
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"Run value must be a byte, got {self.value}")


Token: TypeAlias = Literal | EscapedLiteral | Run


def literal_token(value: int) -> Literal | EscapedLiteral:
    """Return the token for a single byte, escaping it when it is a flag value."""
    if value in FLAG_BYTES:
        return EscapedLiteral(value)
    return Literal(value)


def encode_token(token: Token) -> bytes:
    """
    Serialize one token to its wire bytes.

    Args:
        token: Token to serialize.

    Returns:
        1 byte for a literal, 2 for an escaped literal, 3 for a run.
    """
    if isinstance(token, Run):
        return bytes((RUN_FLAG, token.length, token.value))
    if isinstance(token, EscapedLiteral):
        return bytes((ESCAPE_FLAG, token.value))
    return bytes((token.value,))


def expand_token(token: Token) -> bytes:
    """Return the raw bytes a token stands for."""
    if isinstance(token, Run):
        return bytes((token.value,)) * token.length
    return bytes((token.value,))


def decode_token(data: bytes, offset: int = 0, end: int | None = None) -> tuple[Token, int]:
    """
    Parse one token from a payload.

    Args:
        data: Buffer containing the payload.
        offset: Position of the token's first byte.
        end: Exclusive end of the payload inside ``data``. Defaults to ``len(data)``.

    Returns:
        Tuple of (token, bytes_consumed).

    Raises:
        TruncatedBufferError: If a flag byte's operands extend past ``end``.
        ValueError: If a run token carries a length below 3.
    """
    if end is None:
        end = len(data)
    if offset >= end:
        raise TruncatedBufferError("token", needed=1, available=0, offset=offset)

    flag = data[offset]

    if flag == ESCAPE_FLAG:
        # ReadEscapedValue: one operand.
        if offset + 2 > end:
            raise TruncatedBufferError(
                "escaped literal", needed=1, available=end - offset - 1, offset=offset
            )
        return EscapedLiteral(data[offset + 1]), 2

    if flag == RUN_FLAG:
        # ReadRunLength -> ReadRunValue: two operands.
        if offset + 3 > end:
            raise TruncatedBufferError(
                "run token", needed=2, available=end - offset - 1, offset=offset
            )
        return Run(length=data[offset + 1], value=data[offset + 2]), 3

    return Literal(flag), 1
