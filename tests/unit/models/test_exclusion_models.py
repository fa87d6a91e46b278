"""Unit tests for exclusion list models and the JSON report."""

import pytest
from exavctl import __version__
from exavctl.models.context import ServerRoleFlags
from exavctl.models.exclusion import ExclusionKind, ExclusionLists, ExclusionResult
from exavctl.models.report import ExclusionReport


class TestExclusionLists:
    """Tests for ExclusionLists."""

    def test_get_and_counts(self) -> None:
        """Lists are addressable by kind and counted per kind."""
        lists = ExclusionLists(paths=("A", "B"), processes=("p.exe",))

        assert lists.get(ExclusionKind.PATHS) == ("A", "B")
        assert lists.get(ExclusionKind.EXTENSIONS) == ()
        assert lists.counts == {"paths": 2, "procs": 1, "extensions": 0}

    def test_rejects_empty_entry(self) -> None:
        """Empty strings are never valid entries."""
        with pytest.raises(ValueError, match="procs"):
            ExclusionLists(processes=("a.exe", ""))

    def test_kind_values(self) -> None:
        """Kind values are the file suffixes."""
        assert [kind.value for kind in ExclusionKind] == ["paths", "procs", "extensions"]


class TestExclusionResult:
    """Tests for ExclusionResult."""

    def test_failed(self) -> None:
        """Failed mirrors success."""
        ok = ExclusionResult(kind=ExclusionKind.PATHS, value="A", success=True)
        bad = ExclusionResult(kind=ExclusionKind.PATHS, value="A", success=False, error="x")

        assert ok.failed is False
        assert bad.failed is True


class TestExclusionReport:
    """Tests for ExclusionReport."""

    def test_create_and_to_dict(self) -> None:
        """The report carries metadata, the lists and a summary."""
        lists = ExclusionLists(paths=("A",), processes=("p.exe",), extensions=(".log", ".chk"))

        report = ExclusionReport.create(lists, "EX01", ServerRoleFlags(True, False))
        data = report.to_dict()

        assert data["metadata"]["hostname"] == "EX01"
        assert data["metadata"]["exavctl_version"] == __version__
        assert data["metadata"]["roles"] == ["mailbox"]
        assert data["metadata"]["timestamp"]
        assert data["paths"] == ["A"]
        assert data["procs"] == ["p.exe"]
        assert data["extensions"] == [".log", ".chk"]
        assert data["summary"] == {"paths": 1, "procs": 1, "extensions": 2}
