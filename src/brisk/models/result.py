# Copyright (c) Syntropy Systems
"""Pydantic models for workload results and suite reports."""

from __future__ import annotations

from enum import Enum

from pydantic import Field, model_validator
from typing_extensions import Self

from .base import BriskBaseModel, FrozenModel, JSONValue


class Outcome(str, Enum):
    """How a workload run settled."""

    OK = "ok"
    NOT_SUPPORTED = "not_supported"
    TIMEOUT = "timeout"
    ERROR = "error"


OUTCOME_LABELS = {
    Outcome.NOT_SUPPORTED: "Not supported",
    Outcome.TIMEOUT: "Timeout",
    Outcome.ERROR: "Error",
}


class WorkloadResult(FrozenModel):
    """The single, immutable result of one workload run.

    ``throughput`` is set (ops/s, one decimal) only when ``outcome`` is ok.
    """

    name: str
    outcome: Outcome = Outcome.OK
    throughput: float | None = None
    iterations: int = Field(default=0, ge=0)
    duration_ms: float = Field(default=0.0, ge=0)
    error_code: str | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def _check_throughput(self) -> Self:
        if self.outcome is Outcome.OK and self.throughput is None:
            msg = "ok results need a throughput"
            raise ValueError(msg)
        if self.outcome is not Outcome.OK and self.throughput is not None:
            msg = f"{self.outcome.value} results carry no throughput"
            raise ValueError(msg)
        return self

    @classmethod
    def not_supported(cls, name: str) -> WorkloadResult:
        """Result for a workload whose required capability is missing."""
        return cls(name=name, outcome=Outcome.NOT_SUPPORTED)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @property
    def display(self) -> str:
        """Human readable score, e.g. ``1234.5 ops/s`` or ``Timeout``."""
        if self.throughput is not None:
            return f"{self.throughput:.1f} ops/s"
        return OUTCOME_LABELS[self.outcome]


class HostInfo(BriskBaseModel):
    """Snapshot of the machine a suite ran on."""

    hostname: str
    platform: str
    python_version: str
    processor: str | None = None
    cpu_count: int | None = None
    memory_total_gb: float | None = None


class SuiteReport(BriskBaseModel):
    """A saved suite run."""

    started_at: str
    finished_at: str
    config: dict[str, JSONValue] = Field(default_factory=dict)
    host: HostInfo | None = None
    results: list[WorkloadResult] = Field(default_factory=list)

    def get(self, name: str) -> WorkloadResult | None:
        """Return the result for a workload by name."""
        for result in self.results:
            if result.name == name:
                return result
        return None
