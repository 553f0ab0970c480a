"""
Round-trip measurement and reporting.

A report captures one compress + decompress cycle: sizes, elapsed times and
whether the output matched the input. Reports are for display only; they
never influence the codec.
"""

from __future__ import annotations

import logging
import time

from aapc.codec import CodecError, compress, decompress
from aapc.types import StrictBaseModel

logger = logging.getLogger(__name__)


class RoundTripMismatchError(CodecError):
    """
    Raised when decompressing a compressed input does not give the input back.

    Attributes:
        labels: The inputs that failed to round-trip.
    """

    def __init__(self, labels: list[str]) -> None:
        self.labels = labels
        super().__init__(f"Decompression mismatch for: {', '.join(labels)}")


class CompressionReport(StrictBaseModel):
    """Sizes and timings for one round trip."""

    label: str
    """Name of the input (file name, or 'generated')."""

    original_size: int
    """Input size in bytes."""

    compressed_size: int
    """Compressed size in bytes, framing included."""

    compress_seconds: float
    """Wall-clock time spent in compress()."""

    decompress_seconds: float
    """Wall-clock time spent in decompress()."""

    matches: bool
    """True if the decompressed output equals the input byte for byte."""

    timestamp: int
    """Unix time (seconds) at which the measurement finished."""

    @property
    def ratio(self) -> float:
        """Compressed size over original size. 0 for an empty input."""
        if self.original_size == 0:
            return 0.0
        return self.compressed_size / self.original_size

    @property
    def compress_speed(self) -> float:
        """Input bytes compressed per second. 0 when the time was too short to measure."""
        return _speed(self.original_size, self.compress_seconds)

    @property
    def decompress_speed(self) -> float:
        """Output bytes produced per second. 0 when the time was too short to measure."""
        return _speed(self.original_size, self.decompress_seconds)

    def format_log_entry(self) -> str:
        """Render the report as a block for the folder harness log."""
        return (
            f"Timestamp: {self.timestamp}s\n"
            f"File: {self.label}\n"
            f"Original Size: {self.original_size} bytes\n"
            f"Compressed Size: {self.compressed_size} bytes\n"
            f"Ratio: {self.ratio:.2f}\n"
            f"Compress Time: {self.compress_seconds:.6f}s\n"
            f"Compress Speed: {self.compress_speed:.2f} bytes/s\n"
            f"Decompress Time: {self.decompress_seconds:.6f}s\n"
            f"Decompress Speed: {self.decompress_speed:.2f} bytes/s\n"
            f"Match: {'yes' if self.matches else 'NO'}\n"
            "---"
        )


def _speed(size: int, seconds: float) -> float:
    if seconds <= 0:
        return 0.0
    return size / seconds


def measure_roundtrip(label: str, data: bytes) -> CompressionReport:
    """
    Compress and decompress ``data``, timing both directions.

    Args:
        label: Name recorded in the report.
        data: Input to round-trip.

    Returns:
        The report. A mismatch is recorded in ``matches``, not raised.
    """
    start = time.perf_counter()
    compressed = compress(data)
    compress_seconds = time.perf_counter() - start

    start = time.perf_counter()
    decompressed = decompress(compressed)
    decompress_seconds = time.perf_counter() - start

    report = CompressionReport(
        label=label,
        original_size=len(data),
        compressed_size=len(compressed),
        compress_seconds=compress_seconds,
        decompress_seconds=decompress_seconds,
        matches=decompressed == data,
        timestamp=int(time.time()),
    )

    if not report.matches:
        logger.error(
            "Round trip mismatch for %s: %d bytes in, %d bytes out",
            label,
            len(data),
            len(decompressed),
        )

    return report


def log_report(report: CompressionReport) -> None:
    """Log a report at INFO in the same shape for every harness entry point."""
    logger.info("Original size: %d bytes", report.original_size)
    logger.info(
        "Compressed size: %d bytes (ratio: %.2f)", report.compressed_size, report.ratio
    )
    logger.info("Compression time: %.6fs", report.compress_seconds)
    logger.info("Decompression time: %.6fs", report.decompress_seconds)
