# src/multikmeans/core/config.py
"""
Configuration schema and loading for multikmeans.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class ClusteringSettings(BaseModel):
    """Lloyd iteration limits and convergence tolerance."""

    model_config = {"frozen": True, "extra": "forbid"}

    max_iterations: int = Field(
        default=20,
        ge=0,
        description="Maximum number of synchronized passes over the data",
    )
    epsilon: float = Field(
        default=1e-4,
        ge=0.0,
        description="A center that moves less than this distance counts as converged",
    )


class ConcurrencySettings(BaseModel):
    """Partition-level parallelism for the aggregation pass."""

    model_config = {"frozen": True, "extra": "forbid"}

    max_workers: int = Field(
        default=4,
        gt=0,
        description="Worker threads used per pass (1 folds partitions inline)",
    )
    num_partitions: int | None = Field(
        default=None,
        gt=0,
        description="Number of partitions to split the data into (default: max_workers)",
    )

    @property
    def effective_partitions(self) -> int:
        return self.num_partitions if self.num_partitions is not None else self.max_workers


class LoggingSettings(BaseModel):
    """Log rendering."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of console text",
    )


class MultiKMeansSettings(BaseModel):
    """Top-level configuration.

    Every section has defaults, so an empty settings file is valid.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    clustering: ClusteringSettings = Field(
        default_factory=ClusteringSettings,
        description="Iteration cap and convergence tolerance",
    )
    concurrency: ConcurrencySettings = Field(
        default_factory=ConcurrencySettings,
        description="Partitioning and worker pool configuration",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @model_validator(mode="before")
    @classmethod
    def _reject_null_sections(cls, data: Any) -> Any:
        """A section written as ``clustering:`` with no body is a typo, not a default."""
        if isinstance(data, dict):
            empty = sorted(name for name, value in data.items() if value is None)
            if empty:
                raise ValueError(f"Empty configuration section(s): {', '.join(empty)}")
        return data


def _lowercase_keys(value: Any) -> Any:
    """Recursively lowercase dict keys (Dynaconf uppercases what it loads)."""
    if isinstance(value, dict):
        return {str(k).lower(): _lowercase_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lowercase_keys(item) for item in value]
    return value


def load_settings(config_path: Path) -> MultiKMeansSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence (highest first):
    1. Environment variables (MULTIKMEANS_*), e.g.
       MULTIKMEANS_CLUSTERING__MAX_ITERATIONS=50 for nested keys
    2. Config file
    3. Defaults from the Pydantic schema

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated MultiKMeansSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="MULTIKMEANS",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return MultiKMeansSettings(**_lowercase_keys(raw_config))
