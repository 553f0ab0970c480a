"""
Harness Configuration

Defaults for the round-trip harness: synthetic data shape and the paths used
by the folder run.
"""

from pathlib import Path
from typing import Final

from aapc.config import AAPC_ENV
from aapc.types import StrictBaseModel

GENERATED_SEGMENTS: Final = 1024 if AAPC_ENV == "prod" else 64
"""Segments in the synthetic sample. About 75 bytes each, so ~75 KiB in prod."""

MAX_SEGMENT_RUN: Final = 99
"""Longest repeated-byte run opening a synthetic segment."""

MAX_SEGMENT_NOISE: Final = 49
"""Longest stretch of random bytes closing a synthetic segment."""

TEST_DATA_DIR: Final = Path("test_data")
"""Folder scanned by the folder harness."""

TEST_LOG_PATH: Final = Path("test_log.txt")
"""File receiving the folder harness log."""


class HarnessConfig(StrictBaseModel):
    """Runtime configuration for the round-trip harness."""

    segments: int = GENERATED_SEGMENTS
    """Number of run + noise segments in the synthetic sample."""

    seed: int | None = None
    """Seed for the synthetic sample. None draws a fresh sample every run."""

    test_data_dir: Path = TEST_DATA_DIR
    """Folder whose regular files are round-tripped by the folder harness."""

    log_path: Path = TEST_LOG_PATH
    """Where the folder harness writes its per-file log."""
