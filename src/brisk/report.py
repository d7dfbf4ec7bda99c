# Copyright (c) Syntropy Systems
"""Saving and loading suite reports."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from pydantic import ValidationError

from brisk.models.result import HostInfo, SuiteReport, WorkloadResult

if TYPE_CHECKING:
    from pathlib import Path

    from brisk.config import BenchConfig


def utcnow() -> str:
    """Get current UTC time as ISO format string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_report(
    results: list[WorkloadResult],
    config: BenchConfig,
    started_at: str,
    host: HostInfo | None = None,
) -> SuiteReport:
    """Bundle a finished suite run into a report."""
    return SuiteReport(
        started_at=started_at,
        finished_at=utcnow(),
        config=dict(config.to_dict()),
        host=host,
        results=list(results),
    )


def save_report(report: SuiteReport, path: Path) -> None:
    """Write a report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(report.model_dump_json(indent=2) + "\n")


def load_report(path: Path) -> SuiteReport:
    """Read a report written by :func:`save_report`.

    Raises ValueError if the file is missing or not a valid report.
    """
    if not path.exists():
        msg = f"Report not found: {path}"
        raise ValueError(msg)
    try:
        return SuiteReport.model_validate_json(path.read_text())
    except ValidationError as e:
        msg = f"Invalid report {path}: {e.error_count()} error(s)"
        raise ValueError(msg) from e
