"""Unit tests for ExclusionApplier."""

import logging
import subprocess
from pathlib import Path

import pytest
from exavctl.core.applier import ExclusionApplier
from exavctl.core.writer import write_exclusion_file
from exavctl.models.exclusion import ExclusionKind, ExclusionResult
from exavctl.operators.base import ExclusionOperator


class RecordingOperator(ExclusionOperator):
    """Operator that records submissions and fails on chosen values."""

    def __init__(self, available: bool = True, fail_on: dict[str, Exception | None] | None = None):
        super().__init__()
        self.available = available
        self.fail_on = fail_on or {}
        self.calls: list[tuple[ExclusionKind, str]] = []

    @property
    def name(self) -> str:
        return "Recorder"

    def is_available(self) -> bool:
        return self.available

    def add_path(self, path: str) -> ExclusionResult:
        return self._record(ExclusionKind.PATHS, path)

    def add_process(self, process: str) -> ExclusionResult:
        return self._record(ExclusionKind.PROCESSES, process)

    def add_extension(self, extension: str) -> ExclusionResult:
        return self._record(ExclusionKind.EXTENSIONS, extension)

    def _record(self, kind: ExclusionKind, value: str) -> ExclusionResult:
        self.calls.append((kind, value))
        if value in self.fail_on:
            error = self.fail_on[value]
            if error is not None:
                raise error
            return ExclusionResult(kind=kind, value=value, success=False, error="rejected")
        return ExclusionResult(kind=kind, value=value, success=True)


@pytest.fixture
def exclusion_files(tmp_path: Path) -> dict[ExclusionKind, Path]:
    """Write three exclusion files: 3 paths, 2 processes, 1 extension."""
    entries = {
        ExclusionKind.PATHS: ["C:\\A", "C:\\B", "C:\\C"],
        ExclusionKind.PROCESSES: ["a.exe", "b.exe"],
        ExclusionKind.EXTENSIONS: [".log"],
    }
    files: dict[ExclusionKind, Path] = {}
    for kind, values in entries.items():
        files[kind] = write_exclusion_file(tmp_path / f"{kind.value}.txt", "EX01", kind, values)
    return files


class TestExclusionApplier:
    """Tests for ExclusionApplier.apply."""

    def test_submits_every_entry_after_header(
        self, exclusion_files: dict[ExclusionKind, Path]
    ) -> None:
        """Header and blank line are skipped; each entry goes to its category."""
        operator = RecordingOperator()

        report = ExclusionApplier(operator).apply(exclusion_files)

        assert report.available is True
        assert operator.calls == [
            (ExclusionKind.PATHS, "C:\\A"),
            (ExclusionKind.PATHS, "C:\\B"),
            (ExclusionKind.PATHS, "C:\\C"),
            (ExclusionKind.PROCESSES, "a.exe"),
            (ExclusionKind.PROCESSES, "b.exe"),
            (ExclusionKind.EXTENSIONS, ".log"),
        ]
        assert len(report.succeeded) == 6

    def test_three_entries_give_three_submissions(self, tmp_path: Path) -> None:
        """Header + blank + 3 entries submits exactly 3 exclusions."""
        path = tmp_path / "paths.txt"
        path.write_text("### Antivirus exclusion paths for EX01 ###\n\nA\nB\nC\n", encoding="utf-8")
        operator = RecordingOperator()

        report = ExclusionApplier(operator).apply({ExclusionKind.PATHS: path})

        assert len(operator.calls) == 3
        assert len(report.results) == 3

    def test_unavailable_operator_submits_nothing(
        self,
        exclusion_files: dict[ExclusionKind, Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """An unavailable preference store is reported, not raised."""
        operator = RecordingOperator(available=False)

        with caplog.at_level(logging.WARNING, logger="exavctl.core.applier"):
            report = ExclusionApplier(operator).apply(exclusion_files)

        assert report.available is False
        assert report.results == []
        assert operator.calls == []
        assert "not available" in caplog.text

    def test_failed_result_does_not_stop_batch(
        self, exclusion_files: dict[ExclusionKind, Path]
    ) -> None:
        """One rejected entry among N leaves the other N-1 submitted."""
        operator = RecordingOperator(fail_on={"C:\\B": None})

        report = ExclusionApplier(operator).apply(exclusion_files)

        assert len(operator.calls) == 6
        assert [r.value for r in report.failed] == ["C:\\B"]
        assert len(report.succeeded) == 5

    @pytest.mark.parametrize(
        "error",
        [
            OSError("cannot start powershell"),
            subprocess.TimeoutExpired(cmd="powershell", timeout=60),
            RuntimeError("boom"),
        ],
    )
    def test_raised_error_does_not_stop_batch(
        self, exclusion_files: dict[ExclusionKind, Path], error: Exception
    ) -> None:
        """Exceptions from a submission are recorded as failures."""
        operator = RecordingOperator(fail_on={"a.exe": error})

        report = ExclusionApplier(operator).apply(exclusion_files)

        assert len(report.results) == 6
        failed = report.failed
        assert len(failed) == 1
        assert failed[0].kind == ExclusionKind.PROCESSES
        assert failed[0].error

    def test_missing_kind_is_skipped(self, exclusion_files: dict[ExclusionKind, Path]) -> None:
        """Only the provided files are applied."""
        operator = RecordingOperator()

        extensions = exclusion_files[ExclusionKind.EXTENSIONS]

        ExclusionApplier(operator).apply({ExclusionKind.EXTENSIONS: extensions})

        assert operator.calls == [(ExclusionKind.EXTENSIONS, ".log")]

    def test_unreadable_file_raises(self, tmp_path: Path) -> None:
        """A missing file is an error, not a silent skip."""
        operator = RecordingOperator()

        with pytest.raises(OSError):
            ExclusionApplier(operator).apply({ExclusionKind.PATHS: tmp_path / "missing.txt"})
