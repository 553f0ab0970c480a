"""Round-trip harness: synthetic samples, timing reports and batch folder runs."""

from .config import HarnessConfig
from .generator import generate_test_data
from .report import CompressionReport, RoundTripMismatchError, measure_roundtrip
from .runner import run_file_test, run_folder_test, run_generated_test

__all__ = [
    "HarnessConfig",
    "CompressionReport",
    "RoundTripMismatchError",
    "generate_test_data",
    "measure_roundtrip",
    "run_generated_test",
    "run_file_test",
    "run_folder_test",
]
