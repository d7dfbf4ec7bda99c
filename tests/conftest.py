# Copyright (c) Syntropy Systems
"""Pytest fixtures for brisk tests."""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from brisk.config import BenchConfig
from brisk.scheduler import SchedulerConfig

# Store original cwd at module load time
_original_cwd = Path.cwd()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def brisk_project(temp_dir: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory with a fast brisk.yaml."""
    config_path = temp_dir / "brisk.yaml"
    _ = config_path.write_text(
        "target_duration: 20\nchunk_budget: 5\nhard_timeout: 2000\n"
    )

    # Change to temp directory
    os.chdir(temp_dir)

    yield temp_dir

    # Always return to original cwd
    os.chdir(_original_cwd)


@pytest.fixture
def fast_config() -> BenchConfig:
    """Suite config with short durations."""
    return BenchConfig(target_duration=30, chunk_budget=5, hard_timeout=2000)


@pytest.fixture
def scheduler_config() -> SchedulerConfig:
    """Scheduler timing with short durations."""
    return SchedulerConfig(target_duration=50, chunk_budget=5, hard_timeout=2000)
