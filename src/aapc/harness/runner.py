"""
Round-trip test runs over generated data, single files and whole folders.

Every run compresses, decompresses and compares. A mismatch is always fatal
for the run: it means the codec is broken.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import HarnessConfig
from .generator import generate_test_data
from .report import CompressionReport, RoundTripMismatchError, log_report, measure_roundtrip

logger = logging.getLogger(__name__)


def run_generated_test(config: HarnessConfig | None = None) -> CompressionReport:
    """
    Round-trip a synthetic sample.

    Args:
        config: Harness settings. Defaults to HarnessConfig().

    Returns:
        The report for the sample.

    Raises:
        RoundTripMismatchError: If the sample does not round-trip.
    """
    config = config or HarnessConfig()

    data = generate_test_data(config.segments, config.seed)
    logger.debug("Generated test data of %d bytes", len(data))

    report = measure_roundtrip("generated", data)
    log_report(report)

    if not report.matches:
        raise RoundTripMismatchError([report.label])

    logger.info("Round trip OK: data is identical")
    return report


def run_file_test(path: Path) -> CompressionReport:
    """
    Round-trip the contents of one file.

    Args:
        path: File to read.

    Returns:
        The report for the file.

    Raises:
        OSError: If the file cannot be read.
        RoundTripMismatchError: If the file does not round-trip.
    """
    logger.info("Testing with real file: %s", path)
    data = path.read_bytes()
    logger.debug("Loaded file of %d bytes", len(data))

    report = measure_roundtrip(path.name, data)
    log_report(report)

    if not report.matches:
        raise RoundTripMismatchError([report.label])

    logger.info("Round trip OK: data is identical")
    return report


def run_folder_test(config: HarnessConfig | None = None) -> list[CompressionReport]:
    """
    Round-trip every regular file in a folder and write a log of the results.

    Files are processed in name order. Subdirectories are skipped.

    Args:
        config: Harness settings; ``test_data_dir`` and ``log_path`` are used.

    Returns:
        One report per file. Empty if the folder is missing or has no files,
        in which case no log is written.

    Raises:
        OSError: If a file cannot be read or the log cannot be written.
        RoundTripMismatchError: If any file fails to round-trip. The log is
            written before raising.
    """
    config = config or HarnessConfig()
    folder = config.test_data_dir

    if not folder.is_dir():
        logger.error("Folder %s does not exist or is not a directory", folder)
        return []

    reports: list[CompressionReport] = []
    for path in sorted(folder.iterdir()):
        if not path.is_file():
            continue

        data = path.read_bytes()
        logger.debug("Processing file %s (%d bytes)", path.name, len(data))

        report = measure_roundtrip(path.name, data)
        reports.append(report)

        if report.matches:
            logger.info("Tested %s successfully (ratio %.2f)", path.name, report.ratio)

    if not reports:
        logger.info("No files found in %s", folder)
        return reports

    config.log_path.write_text("\n\n".join(report.format_log_entry() for report in reports))
    logger.info("All tests complete. Log written to %s", config.log_path)

    failed = [report.label for report in reports if not report.matches]
    if failed:
        raise RoundTripMismatchError(failed)

    return reports
