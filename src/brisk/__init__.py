"""
brisk - Adaptive micro-benchmarks.

Time-boxed workloads, ops/s scores, and an event loop that stays responsive.
"""

from brisk.scheduler import AsyncIterationScheduler, ChunkedScheduler, SchedulerConfig
from brisk.suite import BenchmarkSuite

__version__ = "0.1.0"
__all__ = [
    "AsyncIterationScheduler",
    "BenchmarkSuite",
    "ChunkedScheduler",
    "SchedulerConfig",
    "__version__",
]
