"""Tests for strbench configuration management."""

from pathlib import Path

import pytest

from strbench.core.exceptions import ConfigurationError
from strbench.core.settings import (
    ChartSettings,
    LoggingSettings,
    RunnerSettings,
    StrBenchSettings,
    WorkloadSettings,
    _find_config_file,
    _load_yaml_config,
    _merge_sections,
    get_settings,
)


class TestStrBenchSettings:
    """Tests for StrBenchSettings class."""

    def test_default_values(self) -> None:
        settings = StrBenchSettings(_skip_file_loading=True)
        assert settings.workload.fragment == "abc"
        assert settings.workload.count == 100_000
        assert settings.runner.samples == 30
        assert settings.runner.time_budget_seconds == 10.0
        assert settings.chart.enabled is True
        assert settings.chart.output_path == Path("strbench-comparison.png")
        assert settings.chart.show is False
        assert settings.logging.level == "WARNING"

    def test_nested_overrides(self) -> None:
        settings = StrBenchSettings(
            _skip_file_loading=True,
            workload={"count": 10},
            runner={"samples": 3},
        )
        assert settings.workload.count == 10
        assert settings.workload.fragment == "abc"
        assert settings.runner.samples == 3

    def test_env_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STRBENCH_WORKLOAD__COUNT", "42")
        monkeypatch.setenv("STRBENCH_CHART__ENABLED", "false")
        settings = StrBenchSettings(_skip_file_loading=True)
        assert settings.workload.count == 42
        assert settings.chart.enabled is False

    def test_loads_config_file_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "strbench.config.yaml").write_text(
            "workload:\n  count: 7\nrunner:\n  samples: 4\n"
        )
        settings = StrBenchSettings()
        assert settings.workload.count == 7
        assert settings.runner.samples == 4

    def test_explicit_values_beat_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "strbench.config.yaml").write_text(
            "workload:\n  count: 7\n  fragment: xy\n"
        )
        settings = StrBenchSettings(workload={"count": 9})
        assert settings.workload.count == 9
        assert settings.workload.fragment == "xy"


class TestSectionSettings:
    """Tests for the nested settings groups."""

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValueError):
            WorkloadSettings(count=-1)

    def test_samples_above_cap_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_samples"):
            RunnerSettings(samples=20, max_samples=10)

    def test_non_positive_budget_rejected(self) -> None:
        with pytest.raises(ValueError):
            RunnerSettings(time_budget_seconds=0)

    def test_log_level_normalized(self) -> None:
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingSettings(level="LOUD")

    def test_module_levels_from_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "strbench.config.yaml").write_text(
            "logging:\n  modules:\n    strbench.performance: DEBUG\n"
        )
        settings = StrBenchSettings()
        assert settings.logging.modules == {"strbench.performance": "DEBUG"}

    def test_chart_output_path_optional(self) -> None:
        assert ChartSettings(output_path=None).output_path is None


class TestConfigFileHelpers:
    """Tests for config file discovery and loading."""

    def test_find_config_file_in_parent(self, tmp_path: Path) -> None:
        config = tmp_path / "strbench.config.yml"
        config.write_text("{}")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert _find_config_file(nested) == config.resolve()

    def test_find_config_file_missing(self, tmp_path: Path) -> None:
        assert _find_config_file(tmp_path) is None

    def test_load_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("workload: [unclosed")
        assert _load_yaml_config(path) == {}

    def test_load_non_mapping_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        assert _load_yaml_config(path) == {}

    def test_load_drops_unknown_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "extra.yaml"
        path.write_text("workload:\n  count: 3\nplugins: [x]\n")
        assert _load_yaml_config(path) == {"workload": {"count": 3}}

    def test_merge_sections(self) -> None:
        merged = _merge_sections(
            {"runner": {"samples": 5, "warmup_seconds": 1.0}},
            {"runner": {"samples": 9}},
        )
        assert merged["runner"] == {"samples": 9, "warmup_seconds": 1.0}


class TestGetSettings:
    """Tests for get_settings."""

    def test_overrides(self) -> None:
        settings = get_settings(runner={"samples": 2})
        assert settings.runner.samples == 2

    def test_explicit_config_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("workload:\n  fragment: zz\n")
        settings = get_settings(config_file=path)
        assert settings.workload.fragment == "zz"

    def test_missing_config_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            get_settings(config_file=tmp_path / "missing.yaml")

    def test_invalid_values_raise_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            get_settings(workload={"count": -5})

    def test_env_beats_explicit_config_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "bench.yaml"
        path.write_text("runner:\n  samples: 7\n  max_samples: 50\n")
        monkeypatch.setenv("STRBENCH_RUNNER__SAMPLES", "9")

        settings = get_settings(config_file=path)

        assert settings.runner.samples == 9
        assert settings.runner.max_samples == 50

    def test_explicit_config_file_replaces_discovered_one(
        self, tmp_path: Path
    ) -> None:
        (tmp_path / "strbench.config.yaml").write_text("workload:\n  count: 1\n")
        path = tmp_path / "other.yaml"
        path.write_text("workload:\n  fragment: q\n")

        settings = get_settings(config_file=path)

        assert settings.workload.fragment == "q"
        assert settings.workload.count == 100_000
