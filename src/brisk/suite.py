# Copyright (c) Syntropy Systems
"""Suite driver: runs the workload battery one workload at a time."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from brisk.config import BenchConfig
from brisk.scheduler import AsyncIterationScheduler, ChunkedScheduler
from brisk.workloads import Workload, default_workloads

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from brisk.models.result import WorkloadResult

    ProgressCallback = Callable[[WorkloadResult, int, int], None]
    CompleteCallback = Callable[[list[WorkloadResult]], None]

logger = logging.getLogger(__name__)


def _ignore_progress(result: WorkloadResult, completed: int, total: int) -> None:
    _ = (result, completed, total)


def _ignore_complete(results: list[WorkloadResult]) -> None:
    _ = results


class BenchmarkSuite:
    """Runs workloads sequentially and reports each result as it settles.

    Synchronous workloads go through :class:`ChunkedScheduler`, asynchronous
    ones through :class:`AsyncIterationScheduler`. ``on_progress`` is called
    after every workload with ``(result, completed, total)``; ``on_complete``
    is called once with all results when the suite finishes.
    """

    config: BenchConfig
    workloads: list[Workload]
    on_progress: ProgressCallback
    on_complete: CompleteCallback
    _is_running: bool

    def __init__(
        self,
        config: BenchConfig | None = None,
        workloads: Iterable[Workload] | None = None,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
    ) -> None:
        self.config = config or BenchConfig()
        self.config.validate()
        self.workloads = (
            list(workloads) if workloads is not None else default_workloads(self.config)
        )
        self.on_progress = on_progress or _ignore_progress
        self.on_complete = on_complete or _ignore_complete
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    def select(self, names: Iterable[str]) -> None:
        """Keep only the named workloads, in battery order.

        Raises ValueError for names that are not in the battery.
        """
        wanted = set(names)
        known = {w.name for w in self.workloads}
        unknown = sorted(wanted - known)
        if unknown:
            msg = f"Unknown workload(s): {', '.join(unknown)}"
            raise ValueError(msg)
        self.workloads = [w for w in self.workloads if w.name in wanted]

    async def start(self) -> list[WorkloadResult] | None:
        """Run every workload and return the results in order.

        Returns None without doing anything if the suite is already running.
        An exception from a synchronous workload aborts the suite and
        propagates; ``on_complete`` is not called in that case.
        """
        if self._is_running:
            logger.debug("Suite already running, ignoring start()")
            return None
        self._is_running = True

        results: list[WorkloadResult] = []
        total = len(self.workloads)
        try:
            for workload in self.workloads:
                result = await self.run_workload(workload)
                results.append(result)
                self.on_progress(result, len(results), total)
        finally:
            self._is_running = False

        self.on_complete(list(results))
        return results

    async def run_workload(self, workload: Workload) -> WorkloadResult:
        """Run a single workload through the matching scheduler."""
        scheduler_config = self.config.scheduler_config()
        if workload.unit is not None:
            return await AsyncIterationScheduler(scheduler_config).run(
                workload.name,
                workload.unit,
                capability=workload.capability,
            )
        if workload.fn is None:
            msg = f"Workload {workload.name!r} has nothing to run"
            raise RuntimeError(msg)
        return await ChunkedScheduler(scheduler_config).run(workload.name, workload.fn)
