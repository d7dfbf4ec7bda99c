# Copyright (c) Syntropy Systems
"""The default workload battery."""
from __future__ import annotations

import asyncio
import hashlib
import json
import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from brisk.config import BenchConfig
    from brisk.scheduler import UnitOfWork

HASH_PAYLOAD = b"BriskBenchmarkTestString"


@dataclass(frozen=True)
class Workload:
    """A named workload and how to schedule it.

    Synchronous workloads set ``fn``; asynchronous ones set ``unit`` and
    optionally a ``capability`` check.
    """

    name: str
    description: str = ""
    fn: Callable[[], None] | None = None
    unit: UnitOfWork | None = None
    capability: Callable[[], bool] | None = None

    def __post_init__(self) -> None:
        if (self.fn is None) == (self.unit is None):
            msg = f"Workload {self.name!r} needs exactly one of fn or unit"
            raise ValueError(msg)

    @property
    def is_async(self) -> bool:
        return self.unit is not None

    @property
    def kind(self) -> str:
        return "async" if self.is_async else "sync"


def math_workload() -> None:
    total = 0.0
    for i in range(100):
        total += math.sin(i * 0.1) * math.cos(i * 0.1)
        total -= random.random() * math.pi  # noqa: S311


def make_string_workload(length: int) -> Callable[[], None]:
    half = length // 2
    chunk = "a" * length

    def string_workload() -> None:
        text = "base"
        for _ in range(10):
            text += chunk
            text = text[half:]

    return string_workload


def make_array_workload(size: int) -> Callable[[], None]:
    def array_workload() -> None:
        values = list(range(size))
        doubled = [x * 2 for x in values]
        sorted((x for x in doubled if x % 3 == 0), reverse=True)

    return array_workload


def object_workload() -> None:
    for i in range(1000):
        obj = {"a": i, "b": i * 2, "c": {"d": i * 3}}
        _ = obj["a"] + obj["b"] + obj["c"]["d"]
        del obj["c"]


def json_workload() -> None:
    data = {"value": "test", "count": 100, "items": [1, 2, 3], "nested": {"valid": True}}
    json.loads(json.dumps(data))


def hash_supported(algorithm: str) -> bool:
    """Whether hashlib can compute ``algorithm`` on this interpreter."""
    return algorithm.lower() in hashlib.algorithms_available


def hash_digest(
    data: bytes,
    algorithm: str,
    on_success: Callable[[], None],
    on_failure: Callable[[str, str], None],
) -> None:
    """Compute a digest off the event loop and report back on it.

    The digest runs in the loop's default executor; the outcome is delivered
    from a done-callback, so both signals arrive on the loop thread.
    """
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(None, _digest, data, algorithm)

    def _done(fut: asyncio.Future[bytes]) -> None:
        if fut.cancelled():
            on_failure("CancelledError", "digest was cancelled")
            return
        exc = fut.exception()
        if exc is not None:
            on_failure(type(exc).__name__, str(exc))
            return
        on_success()

    future.add_done_callback(_done)


def _digest(data: bytes, algorithm: str) -> bytes:
    return hashlib.new(algorithm, data).digest()


def make_hash_unit(algorithm: str, data: bytes = HASH_PAYLOAD) -> UnitOfWork:
    def hash_unit(
        on_success: Callable[[], None],
        on_failure: Callable[[str, str], None],
    ) -> None:
        hash_digest(data, algorithm, on_success, on_failure)

    return hash_unit


def default_workloads(config: BenchConfig) -> list[Workload]:
    """Build the standard battery, in the order it runs."""
    algorithm = config.hash_algorithm
    return [
        Workload(
            name="math",
            description="sin/cos products and random subtraction",
            fn=math_workload,
        ),
        Workload(
            name="string",
            description=f"append and slice {config.string_length}-char strings",
            fn=make_string_workload(config.string_length),
        ),
        Workload(
            name="array",
            description=f"map, filter and sort {config.array_size} integers",
            fn=make_array_workload(config.array_size),
        ),
        Workload(
            name="object",
            description="allocate, read and mutate small nested dicts",
            fn=object_workload,
        ),
        Workload(
            name="json",
            description="json.dumps / json.loads round-trip",
            fn=json_workload,
        ),
        Workload(
            name="hash",
            description=f"{algorithm} digest in the default executor",
            unit=make_hash_unit(algorithm),
            capability=lambda: hash_supported(algorithm),
        ),
    ]
