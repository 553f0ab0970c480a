"""Exception hierarchy for the AAPC codec."""

from __future__ import annotations


class CodecError(Exception):
    """
    Base exception for all codec errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class MalformedInputError(CodecError):
    """
    Raised when a compressed buffer does not follow the framing or token format.

    The encoder never produces such buffers. Seeing this error means the input
    was truncated, corrupted, or was never an AAPC archive.

    Attributes:
        detail: Description of what went wrong.
        offset: The byte offset in the compressed buffer where decoding failed.
    """

    def __init__(self, detail: str, *, offset: int | None = None) -> None:
        self.detail = detail
        self.offset = offset

        msg = f"Malformed compressed input: {detail}"
        if offset is not None:
            msg = f"{msg} (at byte offset {offset})"

        super().__init__(msg)


class TruncatedBufferError(MalformedInputError):
    """
    Raised when a declared length would read past the end of the available bytes.

    Covers the block count header, the per-block length prefixes, the block
    payloads, and the operands that follow a flag byte inside a block.

    Attributes:
        what: The field being read when the data ran out.
        needed: Number of bytes the field requires.
        available: Number of bytes that were actually left.
    """

    def __init__(self, what: str, *, needed: int, available: int, offset: int) -> None:
        self.what = what
        self.needed = needed
        self.available = available

        super().__init__(
            f"truncated {what}: needed {needed} bytes, only {available} available",
            offset=offset,
        )
