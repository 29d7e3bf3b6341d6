"""strbench configuration management.

Configuration is loaded from multiple sources with the following priority
(highest to lowest):
1. CLI arguments / explicit overrides
2. Environment variables (with STRBENCH_ prefix)
3. Configuration file (``--config`` path, else the nearest strbench.config.yaml)
4. Default values

Example usage:
    from strbench.core.settings import get_settings

    settings = get_settings()
    print(settings.runner.samples)

Environment variable support:
    STRBENCH_WORKLOAD__COUNT=20000
    STRBENCH_RUNNER__TIME_BUDGET_SECONDS=5
    STRBENCH_CHART__ENABLED=false
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from strbench.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ["strbench.config.yaml", "strbench.config.yml"]

SETTINGS_SECTIONS = ("workload", "runner", "chart", "logging")


def _find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest strbench config file at or above ``start_dir``.

    The search starts in the working directory by default and stops at the
    filesystem root.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        for filename in CONFIG_FILE_NAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
    return None


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Read the settings sections of a YAML config file.

    An unreadable or malformed file is logged and treated as empty, as are
    top-level keys other than the known settings sections.
    """
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", config_path, e)
        return {}

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning(
            "Ignoring config file %s: expected a mapping, got %s",
            config_path,
            type(raw).__name__,
        )
        return {}

    unknown = sorted(str(key) for key in raw if key not in SETTINGS_SECTIONS)
    if unknown:
        logger.warning(
            "Unknown sections in %s: %s", config_path, ", ".join(unknown)
        )
    return {key: value for key, value in raw.items() if key in SETTINGS_SECTIONS}


def _merge_sections(
    file_config: dict[str, Any], data: dict[str, Any]
) -> dict[str, Any]:
    """Merge file values under explicit values, one section at a time."""
    merged = {**file_config, **data}
    for section in SETTINGS_SECTIONS:
        file_section = file_config.get(section)
        data_section = data.get(section)
        if isinstance(file_section, dict):
            merged[section] = {
                **file_section,
                **(data_section if isinstance(data_section, dict) else {}),
            }
    return merged


class WorkloadSettings(BaseModel):
    """Input fragments fed to both candidates."""

    fragment: str = Field(
        default="abc",
        description="Fragment repeated to build the input sequence",
    )
    count: int = Field(
        default=100_000,
        ge=0,
        description="Number of fragments in the input sequence",
    )


class RunnerSettings(BaseModel):
    """Benchmark runner settings.

    These settings control how many samples are collected and how long
    each candidate may run.
    """

    samples: int = Field(
        default=30,
        ge=1,
        description="Desired number of samples per candidate",
    )
    max_samples: int = Field(
        default=1000,
        ge=1,
        description="Hard cap on samples per candidate",
    )
    time_budget_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="Time budget per candidate once warmup is done",
    )
    warmup_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Warmup period before sampling (at least one call)",
    )
    min_batch_seconds: float = Field(
        default=0.001,
        gt=0.0,
        description="Minimum duration of one timed batch",
    )

    @model_validator(mode="after")
    def check_sample_bounds(self) -> "RunnerSettings":
        """Ensure the desired sample count fits under the cap."""
        if self.samples > self.max_samples:
            raise ValueError(
                f"samples ({self.samples}) must not exceed "
                f"max_samples ({self.max_samples})"
            )
        return self


class ChartSettings(BaseModel):
    """Chart rendering settings."""

    enabled: bool = Field(default=True, description="Render the comparison chart")
    output_path: Path | None = Field(
        default=Path("strbench-comparison.png"),
        description="Where to save the chart image (None to skip saving)",
    )
    show: bool = Field(
        default=False,
        description="Open an interactive window with the chart",
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_output: bool | None = Field(
        default=None,
        description="Output logs in JSON format (None auto-detects)",
    )
    file: str | None = Field(
        default=None,
        description="Log file path (optional)",
    )

    modules: dict[str, str] = Field(
        default_factory=dict,
        description="Per-module level overrides, e.g. {'strbench.performance': 'DEBUG'}",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


class StrBenchSettings(BaseSettings):
    """Main strbench configuration settings.

    Example:
        settings = StrBenchSettings(runner={"samples": 10})
        print(settings.workload.count)
    """

    model_config = SettingsConfigDict(
        env_prefix="STRBENCH_",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    workload: WorkloadSettings = Field(default_factory=WorkloadSettings)
    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    chart: ChartSettings = Field(default_factory=ChartSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @model_validator(mode="before")
    @classmethod
    def load_from_config_file(cls, data: Any) -> Any:
        """Merge config file values underneath the provided data.

        ``data`` already holds explicit values and ``STRBENCH_*`` variables,
        so both take priority over the file. The file is the one passed as
        ``_config_file``, or else the nearest strbench.config.yaml.
        """
        if not isinstance(data, dict):
            return data
        if data.pop("_skip_file_loading", False):
            return data

        explicit = data.pop("_config_file", None)
        config_path = Path(explicit) if explicit else _find_config_file()
        if config_path:
            file_config = _load_yaml_config(config_path)
            if file_config:
                logger.debug("Loaded configuration from %s", config_path)
                return _merge_sections(file_config, data)

        return data


def get_settings(
    config_file: Path | None = None,
    **overrides: Any,
) -> StrBenchSettings:
    """Get strbench settings.

    Args:
        config_file: Optional explicit path to a configuration file, used
            instead of searching for strbench.config.yaml. Environment
            variables still override its values.
        **overrides: Explicit configuration overrides (nested dicts per section).

    Returns:
        Configured StrBenchSettings instance.

    Raises:
        ConfigurationError: If the explicit config file does not exist or
            the resulting settings fail validation.
    """
    data: dict[str, Any] = dict(overrides)
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        data["_config_file"] = config_file

    try:
        return StrBenchSettings(**data)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
