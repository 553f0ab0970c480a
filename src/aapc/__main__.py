"""
AAPC command line entry point.

Compress and decompress files with the AAPC run-length codec, and run
round-trip checks over generated data, single files or a whole folder.

Usage::

    python -m aapc compress input.bin output.aapc
    python -m aapc decompress output.aapc restored.bin
    python -m aapc test
    python -m aapc test some/file.bin
    python -m aapc test-folder --folder test_data --log test_log.txt

Options:
    -v, --verbose   Enable debug logging
    --no-color      Disable colored logging output

Exit status is 0 on success and 1 on I/O errors, malformed input or a
round-trip mismatch.
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from aapc.codec import MalformedInputError, compress, decompress
from aapc.harness import (
    HarnessConfig,
    RoundTripMismatchError,
    run_file_test,
    run_folder_test,
    run_generated_test,
)
from aapc.harness.config import TEST_DATA_DIR, TEST_LOG_PATH

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the CLI with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def compress_file(input_path: Path, output_path: Path) -> int:
    """
    Compress one file into another.

    Args:
        input_path: File to compress.
        output_path: Destination of the compressed buffer.

    Returns:
        Process exit status.
    """
    logger.debug("Reading input file %s", input_path)
    try:
        data = input_path.read_bytes()
    except OSError as e:
        logger.error("Error reading input %s: %s", input_path, e)
        return 1

    start = time.perf_counter()
    compressed = compress(data)
    elapsed = time.perf_counter() - start

    logger.debug("Writing compressed output to %s", output_path)
    try:
        output_path.write_bytes(compressed)
    except OSError as e:
        logger.error("Error writing output %s: %s", output_path, e)
        return 1

    ratio = len(compressed) / len(data) if data else 0.0
    logger.info(
        "Compressed %s (%d bytes) to %s (%d bytes) in %.6fs. Ratio: %.2f",
        input_path,
        len(data),
        output_path,
        len(compressed),
        elapsed,
        ratio,
    )
    return 0


def decompress_file(input_path: Path, output_path: Path) -> int:
    """
    Decompress one file into another.

    Args:
        input_path: Compressed file.
        output_path: Destination of the restored bytes.

    Returns:
        Process exit status.
    """
    logger.debug("Reading compressed input %s", input_path)
    try:
        compressed = input_path.read_bytes()
    except OSError as e:
        logger.error("Error reading input %s: %s", input_path, e)
        return 1

    start = time.perf_counter()
    try:
        decompressed = decompress(compressed)
    except MalformedInputError as e:
        # Nothing is written for a corrupt archive.
        logger.error("Cannot decompress %s: %s", input_path, e)
        return 1
    elapsed = time.perf_counter() - start

    logger.debug("Writing decompressed output to %s", output_path)
    try:
        output_path.write_bytes(decompressed)
    except OSError as e:
        logger.error("Error writing output %s: %s", output_path, e)
        return 1

    logger.info(
        "Decompressed %s (%d bytes) to %s (%d bytes) in %.6fs.",
        input_path,
        len(compressed),
        output_path,
        len(decompressed),
        elapsed,
    )
    return 0


def run_test(file: Path | None) -> int:
    """Run the round-trip check on ``file``, or on generated data if None."""
    try:
        if file is not None:
            run_file_test(file)
        else:
            run_generated_test()
    except OSError as e:
        if file is not None:
            logger.error("Error reading input %s: %s", file, e)
        else:
            logger.error("Generated test failed: %s", e)
        return 1
    except RoundTripMismatchError as e:
        logger.error("%s", e)
        return 1
    return 0


def run_test_folder(folder: Path, log_path: Path) -> int:
    """Run the round-trip check on every file in ``folder``."""
    config = HarnessConfig(test_data_dir=folder, log_path=log_path)
    try:
        run_folder_test(config)
    except OSError as e:
        logger.error("Folder test failed: %s", e)
        return 1
    except RoundTripMismatchError as e:
        logger.error("%s", e)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="aapc",
        description="Adaptive Pattern Compressor (run-length variant)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    compress_parser = subparsers.add_parser("compress", help="Compress a file")
    compress_parser.add_argument("input", type=Path, help="Input file path")
    compress_parser.add_argument("output", type=Path, help="Output file path")

    decompress_parser = subparsers.add_parser("decompress", help="Decompress a file")
    decompress_parser.add_argument("input", type=Path, help="Input file path")
    decompress_parser.add_argument("output", type=Path, help="Output file path")

    test_parser = subparsers.add_parser(
        "test", help="Run a round-trip test on generated data, or on a file"
    )
    test_parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=None,
        help="Optional path to a real file for testing",
    )

    folder_parser = subparsers.add_parser(
        "test-folder", help="Run a round-trip test on every file in a folder"
    )
    folder_parser.add_argument(
        "--folder",
        type=Path,
        default=TEST_DATA_DIR,
        help=f"Folder to test (default: {TEST_DATA_DIR})",
    )
    folder_parser.add_argument(
        "--log",
        type=Path,
        default=TEST_LOG_PATH,
        help=f"Log file to write (default: {TEST_LOG_PATH})",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    if args.command == "compress":
        return compress_file(args.input, args.output)
    if args.command == "decompress":
        return decompress_file(args.input, args.output)
    if args.command == "test":
        return run_test(args.file)
    return run_test_folder(args.folder, args.log)


if __name__ == "__main__":
    raise SystemExit(main())
