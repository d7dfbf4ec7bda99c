# Copyright (c) Syntropy Systems
"""Configuration management for brisk."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import cast

import yaml

from brisk.scheduler import (
    DEFAULT_CHUNK_BUDGET,
    DEFAULT_HARD_TIMEOUT,
    DEFAULT_TARGET_DURATION,
    SchedulerConfig,
)

CONFIG_FILENAME = "brisk.yaml"


@dataclass
class BenchConfig:
    """Configuration for a benchmark suite."""

    # Target duration for each workload (milliseconds)
    target_duration: float = DEFAULT_TARGET_DURATION

    # Longest a single chunk may hold the event loop (milliseconds)
    chunk_budget: float = DEFAULT_CHUNK_BUDGET

    # Ceiling for asynchronous workloads such as hashing (milliseconds)
    hard_timeout: float = DEFAULT_HARD_TIMEOUT

    # Size of the array for the array workload
    array_size: int = 1000

    # Base length of the string for the string workload
    string_length: int = 100

    # hashlib algorithm used by the hash workload
    hash_algorithm: str = "sha256"

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        for key in ("target_duration", "chunk_budget", "hard_timeout"):
            value = cast("float", getattr(self, key))
            if not math.isfinite(value) or value <= 0:
                msg = f"{key} must be a positive finite number of milliseconds, got {value}"
                raise ValueError(msg)
        for key in ("array_size", "string_length"):
            value = cast("int", getattr(self, key))
            if value < 1:
                msg = f"{key} must be at least 1, got {value}"
                raise ValueError(msg)
        if not self.hash_algorithm:
            msg = "hash_algorithm must not be empty"
            raise ValueError(msg)

    def scheduler_config(self) -> SchedulerConfig:
        """Timing settings for the schedulers."""
        return SchedulerConfig(
            target_duration=self.target_duration,
            chunk_budget=self.chunk_budget,
            hard_timeout=self.hard_timeout,
        )

    def with_overrides(self, **overrides: object) -> BenchConfig:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def to_dict(self) -> dict[str, float | int | str]:
        return asdict(self)


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find the nearest brisk.yaml by walking up from start_path.

    Returns None if no config file is found.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        current = current.parent

    # Check root
    candidate = current / CONFIG_FILENAME
    if candidate.is_file():
        return candidate

    return None


def get_global_config_dir() -> Path:
    """Get the global brisk config directory (~/.brisk)."""
    return Path.home() / ".brisk"


def load_config(config_path: Path | None = None) -> BenchConfig:
    """Load configuration from a YAML file or defaults.

    Looks for config in:
    1. Provided config_path
    2. Nearest brisk.yaml walking up from the current directory
    3. ~/.brisk/config.yaml
    4. Defaults
    """
    config = BenchConfig()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        global_config = get_global_config_dir() / "config.yaml"
        if global_config.exists():
            config_path = global_config

    if config_path is not None:
        if not config_path.exists():
            msg = f"Config file not found: {config_path}"
            raise ValueError(msg)
        with config_path.open() as f:
            data = cast("dict[str, object]", yaml.safe_load(f) or {})
        if not isinstance(data, dict):
            msg = f"Config file must contain a mapping: {config_path}"
            raise ValueError(msg)

        for key in ("target_duration", "chunk_budget", "hard_timeout"):
            value = data.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                setattr(config, key, float(value))
        for key in ("array_size", "string_length"):
            value = data.get(key)
            if isinstance(value, int) and not isinstance(value, bool):
                setattr(config, key, value)
        hash_algorithm = data.get("hash_algorithm")
        if isinstance(hash_algorithm, str):
            config.hash_algorithm = hash_algorithm

    return config


def default_config_dict() -> dict[str, float | int | str]:
    """Config written by ``brisk init``."""
    return BenchConfig().to_dict()
