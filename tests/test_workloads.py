# Copyright (c) Syntropy Systems
"""Tests for the default workload battery."""

from __future__ import annotations

import asyncio

import pytest

from brisk.config import BenchConfig
from brisk.models.result import Outcome
from brisk.scheduler import AsyncIterationScheduler, SchedulerConfig
from brisk.workloads import (
    Workload,
    default_workloads,
    hash_digest,
    hash_supported,
    make_hash_unit,
)


class TestWorkloads:
    """Tests for workload definitions."""

    def test_battery_order(self) -> None:
        workloads = default_workloads(BenchConfig())

        assert [w.name for w in workloads] == [
            "math",
            "string",
            "array",
            "object",
            "json",
            "hash",
        ]
        assert [w.kind for w in workloads] == ["sync"] * 5 + ["async"]

    def test_sync_bodies_run(self) -> None:
        config = BenchConfig(array_size=10, string_length=8)
        for workload in default_workloads(config):
            if workload.fn is not None:
                assert workload.fn() is None

    def test_descriptions_use_config(self) -> None:
        config = BenchConfig(array_size=77, hash_algorithm="sha512")
        by_name = {w.name: w for w in default_workloads(config)}

        assert "77" in by_name["array"].description
        assert "sha512" in by_name["hash"].description

    def test_workload_needs_exactly_one_body(self) -> None:
        with pytest.raises(ValueError, match="exactly one"):
            _ = Workload(name="empty")


class TestHashWorkload:
    """Tests for the hash unit of work."""

    def test_capability(self) -> None:
        assert hash_supported("sha256")
        assert hash_supported("SHA256")
        assert not hash_supported("definitely-not-a-hash")

    @pytest.mark.asyncio
    async def test_digest_success(self) -> None:
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[str] = loop.create_future()

        hash_digest(
            b"payload",
            "sha256",
            lambda: outcome.set_result("ok"),
            lambda code, message: outcome.set_result(f"fail:{code}:{message}"),
        )

        assert await outcome == "ok"

    @pytest.mark.asyncio
    async def test_digest_failure_reports_code(self) -> None:
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[str] = loop.create_future()

        hash_digest(
            b"payload",
            "definitely-not-a-hash",
            lambda: outcome.set_result("ok"),
            lambda code, message: outcome.set_result(f"fail:{code}"),
        )

        assert await outcome == "fail:ValueError"

    @pytest.mark.asyncio
    async def test_hash_unit_through_scheduler(self) -> None:
        scheduler = AsyncIterationScheduler(
            SchedulerConfig(target_duration=30, hard_timeout=5000),
        )

        result = await scheduler.run(
            "hash",
            make_hash_unit("sha256"),
            capability=lambda: hash_supported("sha256"),
        )

        assert result.outcome is Outcome.OK
        assert result.iterations >= 1

    @pytest.mark.asyncio
    async def test_unknown_algorithm_not_supported(self) -> None:
        config = BenchConfig(hash_algorithm="definitely-not-a-hash")
        hash_workload = default_workloads(config)[-1]
        assert hash_workload.unit is not None

        result = await AsyncIterationScheduler(config.scheduler_config()).run(
            hash_workload.name,
            hash_workload.unit,
            capability=hash_workload.capability,
        )

        assert result.outcome is Outcome.NOT_SUPPORTED
        assert result.iterations == 0
