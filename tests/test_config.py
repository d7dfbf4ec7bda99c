# Copyright (c) Syntropy Systems
"""Tests for brisk configuration."""

from pathlib import Path

import pytest

from brisk.config import BenchConfig, find_config_file, load_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self) -> None:
        config = BenchConfig()

        assert config.target_duration == 1000
        assert config.chunk_budget == 20
        assert config.hard_timeout == 10000
        assert config.array_size == 1000
        assert config.string_length == 100
        assert config.hash_algorithm == "sha256"

    def test_load_from_file(self, temp_dir: Path) -> None:
        config_path = temp_dir / "custom.yaml"
        _ = config_path.write_text(
            "target_duration: 250\n"
            "hard_timeout: 500\n"
            "array_size: 64\n"
            "hash_algorithm: md5\n"
        )

        config = load_config(config_path)

        assert config.target_duration == 250.0
        assert config.hard_timeout == 500.0
        assert config.array_size == 64
        assert config.hash_algorithm == "md5"
        assert config.chunk_budget == 20

    def test_wrong_types_ignored(self, temp_dir: Path) -> None:
        config_path = temp_dir / "brisk.yaml"
        _ = config_path.write_text(
            "target_duration: fast\narray_size: 2.5\nstring_length: true\nunknown: 1\n"
        )

        config = load_config(config_path)

        assert config == BenchConfig()

    def test_empty_file(self, temp_dir: Path) -> None:
        config_path = temp_dir / "brisk.yaml"
        _ = config_path.write_text("")

        assert load_config(config_path) == BenchConfig()

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ValueError, match="not found"):
            _ = load_config(temp_dir / "nope.yaml")

    def test_non_mapping_file(self, temp_dir: Path) -> None:
        config_path = temp_dir / "brisk.yaml"
        _ = config_path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping"):
            _ = load_config(config_path)

    def test_found_by_walking_up(self, brisk_project: Path) -> None:
        nested = brisk_project / "a" / "b"
        nested.mkdir(parents=True)

        found = find_config_file(nested)

        assert found is not None
        assert found.resolve() == (brisk_project / "brisk.yaml").resolve()

    def test_nearest_config_used(self, brisk_project: Path) -> None:
        _ = brisk_project
        config = load_config()

        assert config.target_duration == 20
        assert config.chunk_budget == 5
        assert config.hard_timeout == 2000


class TestBenchConfig:
    """Tests for BenchConfig helpers."""

    def test_validate_accepts_defaults(self) -> None:
        BenchConfig().validate()

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("target_duration", 0),
            ("chunk_budget", -5),
            ("hard_timeout", 0),
            ("array_size", 0),
            ("string_length", -1),
        ],
    )
    def test_validate_rejects(self, field: str, value: float) -> None:
        config = BenchConfig()
        setattr(config, field, value)

        with pytest.raises(ValueError, match=field):
            config.validate()

    def test_validate_rejects_nan_from_yaml(self, temp_dir: Path) -> None:
        config_path = temp_dir / "brisk.yaml"
        _ = config_path.write_text("target_duration: .nan\nhard_timeout: .inf\n")

        config = load_config(config_path)

        with pytest.raises(ValueError, match="target_duration must be a positive finite"):
            config.validate()

        config.target_duration = 100
        with pytest.raises(ValueError, match="hard_timeout must be a positive finite"):
            config.validate()

    def test_scheduler_config(self) -> None:
        scheduler_config = BenchConfig(
            target_duration=300, chunk_budget=10, hard_timeout=900
        ).scheduler_config()

        assert scheduler_config.target_duration == 300
        assert scheduler_config.chunk_budget == 10
        assert scheduler_config.hard_timeout == 900

    def test_with_overrides_skips_none(self) -> None:
        base = BenchConfig()
        config = base.with_overrides(target_duration=50, hard_timeout=None)

        assert config.target_duration == 50
        assert config.hard_timeout == 10000
        assert base.target_duration == 1000
