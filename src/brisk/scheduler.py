# Copyright (c) Syntropy Systems
"""Adaptive time-boxed iteration schedulers.

Both schedulers measure how many times a workload completes within a target
wall-clock duration and turn that into an ops/s score. Neither one holds the
event loop for long: synchronous workloads run in short chunks with a yield
between them, asynchronous workloads run one unit per loop turn.
"""
from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Protocol

from brisk.models.result import Outcome, WorkloadResult

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# Milliseconds
DEFAULT_TARGET_DURATION = 1000.0
DEFAULT_CHUNK_BUDGET = 20.0
DEFAULT_HARD_TIMEOUT = 10000.0


class UnitOfWork(Protocol):
    """One asynchronous iteration of a workload that cannot be tight-looped.

    Must call exactly one of ``on_success()`` or ``on_failure(code, message)``
    later, from the event loop thread.
    """

    def __call__(
        self,
        on_success: Callable[[], None],
        on_failure: Callable[[str, str], None],
    ) -> None:
        ...


def now_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.perf_counter() * 1000.0


def compute_throughput(iterations: int, duration_ms: float) -> float:
    """Operations per second, rounded to one decimal place."""
    if duration_ms <= 0:
        msg = f"Duration must be positive, got {duration_ms}"
        raise ValueError(msg)
    return round(iterations / (duration_ms / 1000.0), 1)


@dataclass(frozen=True)
class SchedulerConfig:
    """Timing parameters for the schedulers, all in milliseconds."""

    target_duration: float = DEFAULT_TARGET_DURATION
    chunk_budget: float = DEFAULT_CHUNK_BUDGET
    hard_timeout: float = DEFAULT_HARD_TIMEOUT

    def __post_init__(self) -> None:
        for field_name in ("target_duration", "chunk_budget", "hard_timeout"):
            value = getattr(self, field_name)
            if not math.isfinite(value) or value <= 0:
                msg = f"{field_name} must be a positive finite number, got {value}"
                raise ValueError(msg)


@dataclass
class ScheduleState:
    """Timing state of a single run.

    ``target_end_time`` is fixed when the run begins. ``iteration_count``
    only grows while the run is active and is frozen once it is done.
    """

    start_time: float
    target_end_time: float
    iteration_count: int = 0
    done: bool = False

    @classmethod
    def begin(
        cls,
        target_duration: float,
        clock: Callable[[], float] = now_ms,
    ) -> ScheduleState:
        """Start a run at the current clock reading."""
        start = clock()
        return cls(start_time=start, target_end_time=start + target_duration)

    def record(self, count: int = 1) -> None:
        """Add completed iterations."""
        if self.done:
            msg = "Cannot record iterations on a settled run"
            raise RuntimeError(msg)
        if count < 0:
            msg = f"Iteration count cannot decrease (got {count})"
            raise ValueError(msg)
        self.iteration_count += count

    def settle(
        self,
        name: str,
        now: float,
        outcome: Outcome = Outcome.OK,
        *,
        error_code: str | None = None,
        error_message: str | None = None,
    ) -> WorkloadResult:
        """Freeze the state and shape it into a result."""
        self.done = True
        duration = now - self.start_time
        throughput = None
        if outcome is Outcome.OK:
            throughput = compute_throughput(self.iteration_count, duration)
        return WorkloadResult(
            name=name,
            outcome=outcome,
            throughput=throughput,
            iterations=self.iteration_count,
            duration_ms=round(max(duration, 0.0), 1),
            error_code=error_code,
            error_message=error_message,
        )


class ChunkedScheduler:
    """Runs a synchronous workload in bounded chunks.

    Each chunk calls the workload in a tight loop for up to ``chunk_budget``
    milliseconds, then yields to the event loop until the target duration has
    elapsed. The workload must be cheap relative to the chunk budget. If it
    raises, the exception propagates out of :meth:`run`.
    """

    config: SchedulerConfig
    _clock: Callable[[], float]

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self.config = config or SchedulerConfig()
        self._clock = clock

    async def run(self, name: str, workload: Callable[[], None]) -> WorkloadResult:
        """Run ``workload`` for the target duration and report its throughput."""
        clock = self._clock
        budget = self.config.chunk_budget
        state = ScheduleState.begin(self.config.target_duration, clock)
        logger.debug(
            "Starting %s for %.0fms (chunk budget %.0fms)",
            name,
            self.config.target_duration,
            budget,
        )

        while True:
            chunk_start = clock()
            count = 0
            while clock() - chunk_start < budget:
                workload()
                count += 1
            state.record(count)

            if clock() >= state.target_end_time:
                break
            # Let other tasks run before the next chunk
            await asyncio.sleep(0)

        result = state.settle(name, clock())
        logger.debug(
            "Finished %s: %d iterations in %.1fms",
            name,
            result.iterations,
            result.duration_ms,
        )
        return result


class SchedulerState(str, Enum):
    """Lifecycle of an :class:`AsyncIterationScheduler` run."""

    IDLE = "idle"
    PROBING = "probing"
    RUNNING = "running"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    ERRORED = "errored"
    NOT_SUPPORTED = "not_supported"


TERMINAL_STATES = frozenset(
    {
        SchedulerState.COMPLETED,
        SchedulerState.TIMED_OUT,
        SchedulerState.ERRORED,
        SchedulerState.NOT_SUPPORTED,
    },
)


class AsyncIterationScheduler:
    """Runs a callback-completing workload one unit per loop turn.

    The next unit is scheduled only after the previous one reports success.
    Two clocks bound the run: the target duration ends it normally, and an
    independent hard timeout ends it even if a unit never completes.

    Every terminal path goes through :meth:`_settle`, which disarms the
    timer and resolves the run's future at most once. Signals that arrive
    after settlement, or from a unit that is no longer in flight, are
    ignored.
    """

    config: SchedulerConfig
    state: SchedulerState
    _clock: Callable[[], float]
    _name: str
    _unit: UnitOfWork | None
    _schedule: ScheduleState | None
    _result: asyncio.Future[WorkloadResult] | None
    _timeout_handle: asyncio.TimerHandle | None
    _sequence: int
    _in_flight: int | None
    _next_dispatch: asyncio.Handle | None

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self.config = config or SchedulerConfig()
        self.state = SchedulerState.IDLE
        self._clock = clock
        self._name = ""
        self._unit = None
        self._schedule = None
        self._result = None
        self._timeout_handle = None
        self._sequence = 0
        self._in_flight = None
        self._next_dispatch = None

    @property
    def iteration_count(self) -> int:
        """Units completed in the current or most recent run."""
        if self._schedule is None:
            return 0
        return self._schedule.iteration_count

    @property
    def timer_armed(self) -> bool:
        """Whether the hard-timeout timer is still pending."""
        return self._timeout_handle is not None

    async def run(
        self,
        name: str,
        unit: UnitOfWork,
        *,
        capability: Callable[[], bool] | None = None,
        hard_timeout: float | None = None,
    ) -> WorkloadResult:
        """Run ``unit`` repeatedly and report its throughput.

        Args:
            name: Workload name for the result
            unit: Performs one unit of work and signals its outcome
            capability: Checked once before starting; False means the
                workload is not supported and nothing is attempted
            hard_timeout: Ceiling on total run time in milliseconds
                (defaults to ``config.hard_timeout``)

        Returns:
            A result whose outcome is ok, not_supported, timeout or error.

        """
        if self._result is not None and not self._result.done():
            msg = f"Scheduler is already running {self._name}"
            raise RuntimeError(msg)

        self._name = name
        self._unit = unit
        self._schedule = None
        self._in_flight = None
        self.state = SchedulerState.PROBING

        if capability is not None and not capability():
            logger.info("Skipping %s: required capability is unavailable", name)
            self.state = SchedulerState.NOT_SUPPORTED
            return WorkloadResult.not_supported(name)

        timeout = self.config.hard_timeout if hard_timeout is None else hard_timeout
        loop = asyncio.get_running_loop()
        self._result = loop.create_future()
        self._schedule = ScheduleState.begin(self.config.target_duration, self._clock)
        self.state = SchedulerState.RUNNING
        self._timeout_handle = loop.call_later(timeout / 1000.0, self._on_timeout)
        logger.debug(
            "Starting %s for %.0fms (hard timeout %.0fms)",
            name,
            self.config.target_duration,
            timeout,
        )

        self._dispatch()
        try:
            return await self._result
        finally:
            self._disarm()
            if self.state is SchedulerState.RUNNING:
                # Awaiting task was cancelled; stop dispatching units
                self.state = SchedulerState.IDLE
                self._in_flight = None

    def _dispatch(self) -> None:
        """Start the next unit of work."""
        if self.state is not SchedulerState.RUNNING or self._unit is None:
            return

        self._sequence += 1
        sequence = self._sequence
        self._in_flight = sequence
        try:
            self._unit(
                partial(self._on_unit_success, sequence),
                partial(self._on_unit_failure, sequence),
            )
        except Exception as exc:
            logger.exception("Unit of work for %s raised", self._name)
            # Fatal even if the unit already signalled success
            if self.state is SchedulerState.RUNNING:
                self._in_flight = None
                self._fail(type(exc).__name__, str(exc))

    def _accept(self, sequence: int) -> bool:
        """Consume the in-flight unit if ``sequence`` matches it."""
        if self.state is not SchedulerState.RUNNING or sequence != self._in_flight:
            return False
        self._in_flight = None
        return True

    def _on_unit_success(self, sequence: int) -> None:
        if not self._accept(sequence) or self._schedule is None:
            return

        self._schedule.record()
        self._next_dispatch = asyncio.get_running_loop().call_soon(self._advance)

    def _advance(self) -> None:
        """Dispatch the next unit, or complete once the target has passed."""
        self._next_dispatch = None
        if self.state is not SchedulerState.RUNNING or self._schedule is None:
            return
        if self._clock() < self._schedule.target_end_time:
            self._dispatch()
            return

        self.state = SchedulerState.COMPLETED
        result = self._schedule.settle(self._name, self._clock())
        logger.debug(
            "Finished %s: %d iterations in %.1fms",
            self._name,
            result.iterations,
            result.duration_ms,
        )
        self._settle(result)

    def _on_unit_failure(self, sequence: int, code: str, message: str = "") -> None:
        if not self._accept(sequence):
            return
        self._fail(code, message)

    def _fail(self, code: str, message: str = "") -> None:
        if self._schedule is None:
            return

        logger.error("%s failed with code %s: %s", self._name, code, message)
        self.state = SchedulerState.ERRORED
        self._settle(
            self._schedule.settle(
                self._name,
                self._clock(),
                Outcome.ERROR,
                error_code=str(code),
                error_message=message or None,
            ),
        )

    def _on_timeout(self) -> None:
        self._timeout_handle = None
        if self.state is not SchedulerState.RUNNING or self._schedule is None:
            return

        logger.warning(
            "%s timed out after %d iterations",
            self._name,
            self._schedule.iteration_count,
        )
        self.state = SchedulerState.TIMED_OUT
        self._in_flight = None
        self._settle(
            self._schedule.settle(self._name, self._clock(), Outcome.TIMEOUT),
        )

    def _settle(self, result: WorkloadResult) -> None:
        self._disarm()
        if self._result is None or self._result.done():
            return
        self._result.set_result(result)

    def _disarm(self) -> None:
        if self._next_dispatch is not None:
            self._next_dispatch.cancel()
            self._next_dispatch = None
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None
