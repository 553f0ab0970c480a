"""Tests for the round-trip harness."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from aapc.harness import (
    CompressionReport,
    HarnessConfig,
    RoundTripMismatchError,
    generate_test_data,
    measure_roundtrip,
    run_file_test,
    run_folder_test,
    run_generated_test,
)
from aapc.harness.config import GENERATED_SEGMENTS, TEST_DATA_DIR, TEST_LOG_PATH


def make_report(**overrides: object) -> CompressionReport:
    """Build a report with fixed values."""
    fields: dict[str, object] = {
        "label": "sample",
        "original_size": 1000,
        "compressed_size": 250,
        "compress_seconds": 0.5,
        "decompress_seconds": 0.25,
        "matches": True,
        "timestamp": 1_700_000_000,
    }
    fields.update(overrides)
    return CompressionReport(**fields)  # type: ignore[arg-type]


@pytest.fixture
def broken_decompress(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the harness see a codec that loses data."""
    monkeypatch.setattr("aapc.harness.report.decompress", lambda data: b"wrong")


class TestHarnessConfig:
    """Tests for HarnessConfig Pydantic model."""

    def test_defaults_match_module_constants(self) -> None:
        """Default config values match the module-level constants."""
        config = HarnessConfig()

        assert config.segments == GENERATED_SEGMENTS
        assert config.seed is None
        assert config.test_data_dir == TEST_DATA_DIR
        assert config.log_path == TEST_LOG_PATH

    def test_strict_model_rejects_extra_fields(self) -> None:
        """HarnessConfig rejects unknown fields (strict mode)."""
        with pytest.raises(ValidationError):
            HarnessConfig(unknown_field="oops")  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        """Configs are immutable."""
        config = HarnessConfig()
        with pytest.raises(ValidationError):
            config.segments = 3  # type: ignore[misc]

    def test_copy_updates_fields(self) -> None:
        """copy() returns a validated model with the new values."""
        config = HarnessConfig(seed=1).copy(segments=5)
        assert config.segments == 5
        assert config.seed == 1


class TestGenerator:
    """Synthetic sample generation."""

    def test_seeded_samples_are_reproducible(self) -> None:
        """The same seed gives the same sample."""
        assert generate_test_data(50, seed=7) == generate_test_data(50, seed=7)
        assert generate_test_data(50, seed=7) != generate_test_data(50, seed=8)

    def test_sample_size_range(self) -> None:
        """Each segment holds 2 to 148 bytes."""
        data = generate_test_data(100, seed=3)
        assert 2 * 100 <= len(data) <= 148 * 100

    def test_zero_segments(self) -> None:
        """No segments means an empty sample."""
        assert generate_test_data(0) == b""

    def test_negative_segments(self) -> None:
        """Negative segment counts are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            generate_test_data(-1)


class TestCompressionReport:
    """Derived metrics and log rendering."""

    def test_derived_metrics(self) -> None:
        """Ratio and speeds derive from sizes and times."""
        report = make_report()
        assert report.ratio == 0.25
        assert report.compress_speed == 2000.0
        assert report.decompress_speed == 4000.0

    def test_zero_sizes_and_times(self) -> None:
        """Empty inputs and unmeasurably short runs report zeros."""
        report = make_report(original_size=0, compressed_size=4, compress_seconds=0.0)
        assert report.ratio == 0.0
        assert report.compress_speed == 0.0

    def test_format_log_entry(self) -> None:
        """The log entry lists every metric and ends with a separator."""
        entry = make_report().format_log_entry()
        lines = entry.splitlines()

        assert lines[0] == "Timestamp: 1700000000s"
        assert "File: sample" in lines
        assert "Original Size: 1000 bytes" in lines
        assert "Compressed Size: 250 bytes" in lines
        assert "Ratio: 0.25" in lines
        assert "Compress Speed: 2000.00 bytes/s" in lines
        assert "Match: yes" in lines
        assert lines[-1] == "---"

    def test_strict_types(self) -> None:
        """Sizes must be ints."""
        with pytest.raises(ValidationError):
            make_report(original_size="1000")


class TestMeasureRoundtrip:
    """Timing a real compress/decompress cycle."""

    def test_matching_roundtrip(self) -> None:
        """A correct codec produces a matching report."""
        data = b"a" * 1000 + b"xyz"
        report = measure_roundtrip("data", data)

        assert report.label == "data"
        assert report.matches
        assert report.original_size == len(data)
        assert report.compressed_size < len(data)
        assert report.compress_seconds >= 0
        assert report.decompress_seconds >= 0

    def test_mismatch_is_recorded(
        self, broken_decompress: None, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A lossy round trip is flagged, not raised, and logged as an error."""
        with caplog.at_level(logging.ERROR):
            report = measure_roundtrip("data", b"right")

        assert not report.matches
        assert "Round trip mismatch for data" in caplog.text


class TestRunners:
    """Generated, single-file and folder runs."""

    def test_generated(self) -> None:
        """The synthetic sample round-trips."""
        report = run_generated_test(HarnessConfig(segments=20, seed=11))
        assert report.label == "generated"
        assert report.matches

    def test_generated_mismatch_raises(self, broken_decompress: None) -> None:
        """A broken codec fails the generated run."""
        with pytest.raises(RoundTripMismatchError, match="generated"):
            run_generated_test(HarnessConfig(segments=5, seed=1))

    def test_file(self, tmp_path: Path) -> None:
        """A real file round-trips and is labelled by name."""
        path = tmp_path / "input.bin"
        path.write_bytes(b"\xfe\xff" * 10 + b"\x00" * 500)

        report = run_file_test(path)
        assert report.label == "input.bin"
        assert report.matches

    def test_missing_file(self, tmp_path: Path) -> None:
        """Unreadable files surface as plain I/O errors."""
        with pytest.raises(FileNotFoundError):
            run_file_test(tmp_path / "missing.bin")

    def test_folder(self, tmp_path: Path) -> None:
        """Every regular file is tested in name order and logged."""
        folder = tmp_path / "test_data"
        folder.mkdir()
        (folder / "b.bin").write_bytes(b"b" * 300)
        (folder / "a.txt").write_bytes(b"hello world")
        (folder / "empty").write_bytes(b"")
        (folder / "nested").mkdir()
        log_path = tmp_path / "test_log.txt"

        reports = run_folder_test(HarnessConfig(test_data_dir=folder, log_path=log_path))

        assert [report.label for report in reports] == ["a.txt", "b.bin", "empty"]
        assert all(report.matches for report in reports)

        log = log_path.read_text()
        assert log.count("---") == 3
        assert "File: b.bin" in log
        assert "\n---\n\nTimestamp:" in log

    def test_missing_folder(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """A missing folder is reported and yields nothing."""
        config = HarnessConfig(test_data_dir=tmp_path / "nope", log_path=tmp_path / "log.txt")
        with caplog.at_level(logging.ERROR):
            assert run_folder_test(config) == []

        assert "does not exist" in caplog.text
        assert not config.log_path.exists()

    def test_empty_folder(self, tmp_path: Path) -> None:
        """An empty folder writes no log."""
        folder = tmp_path / "test_data"
        folder.mkdir()
        config = HarnessConfig(test_data_dir=folder, log_path=tmp_path / "log.txt")

        assert run_folder_test(config) == []
        assert not config.log_path.exists()

    def test_folder_mismatch_raises_after_logging(
        self, tmp_path: Path, broken_decompress: None
    ) -> None:
        """Mismatches are written to the log before the run fails."""
        folder = tmp_path / "test_data"
        folder.mkdir()
        (folder / "one.bin").write_bytes(b"data")
        config = HarnessConfig(test_data_dir=folder, log_path=tmp_path / "log.txt")

        with pytest.raises(RoundTripMismatchError) as exc_info:
            run_folder_test(config)

        assert exc_info.value.labels == ["one.bin"]
        assert "Match: NO" in config.log_path.read_text()
