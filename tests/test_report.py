# Copyright (c) Syntropy Systems
"""Tests for result models and saved reports."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from brisk.config import BenchConfig
from brisk.host import collect_host_info
from brisk.models.result import Outcome, WorkloadResult
from brisk.report import build_report, load_report, save_report, utcnow


class TestWorkloadResult:
    """Tests for WorkloadResult."""

    def test_display(self) -> None:
        assert WorkloadResult(name="math", throughput=1234.5).display == "1234.5 ops/s"
        assert WorkloadResult.not_supported("hash").display == "Not supported"
        assert WorkloadResult(name="h", outcome=Outcome.TIMEOUT).display == "Timeout"
        assert WorkloadResult(name="h", outcome=Outcome.ERROR).display == "Error"

    def test_frozen(self) -> None:
        result = WorkloadResult(name="math", throughput=10.0)

        with pytest.raises(ValidationError):
            result.throughput = 20.0  # pyright: ignore[reportAttributeAccessIssue]

    def test_ok_requires_throughput(self) -> None:
        with pytest.raises(ValidationError):
            _ = WorkloadResult(name="math")

    def test_failure_has_no_throughput(self) -> None:
        with pytest.raises(ValidationError):
            _ = WorkloadResult(name="hash", outcome=Outcome.TIMEOUT, throughput=1.0)


class TestReports:
    """Tests for saving and loading reports."""

    def test_save_and_load(self, temp_dir: Path) -> None:
        results = [
            WorkloadResult(name="math", throughput=500.5, iterations=501, duration_ms=1001.0),
            WorkloadResult(name="hash", outcome=Outcome.ERROR, error_code="E1"),
        ]
        report = build_report(
            results,
            BenchConfig(target_duration=500),
            started_at=utcnow(),
            host=collect_host_info(),
        )
        path = temp_dir / "nested" / "report.json"

        save_report(report, path)
        loaded = load_report(path)

        assert loaded.results == results
        assert loaded.config["target_duration"] == 500
        assert loaded.host is not None
        assert loaded.host.python_version
        assert loaded.get("hash") is not None
        assert loaded.get("missing") is None

    def test_load_missing(self, temp_dir: Path) -> None:
        with pytest.raises(ValueError, match="not found"):
            _ = load_report(temp_dir / "missing.json")

    def test_load_invalid(self, temp_dir: Path) -> None:
        path = temp_dir / "bad.json"
        _ = path.write_text('{"results": "nope"}')

        with pytest.raises(ValueError, match="Invalid report"):
            _ = load_report(path)

    def test_host_info(self) -> None:
        host = collect_host_info()

        assert host.hostname
        assert host.platform
        if host.cpu_count is not None:
            assert host.cpu_count >= 1
