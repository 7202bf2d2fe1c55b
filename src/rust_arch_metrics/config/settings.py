"""Analysis configuration for rust-arch-metrics."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from ..core.exceptions import ConfigError
from .defaults import DEFAULT_IGNORE_PATTERNS, DEFAULT_MAX_WORKERS, MAX_WORKERS_ENV_VAR
from .thresholds import MetricThresholds


@dataclass
class AnalysisConfig:
    """Complete analysis configuration.

    Attributes:
        count_boolean_operators: Count ``&&`` / ``||`` as branch points
        count_body_references: Let types named inside method bodies
            (struct literals, ``Type::item`` paths, typed lets) count for CBO
        max_workers: Extraction worker threads (None = auto)
        ignore_patterns: Path component names pruned during discovery
        thresholds: Warning levels used by reporters
    """

    count_boolean_operators: bool = False
    count_body_references: bool = False
    max_workers: int | None = None
    ignore_patterns: set[str] = field(
        default_factory=lambda: set(DEFAULT_IGNORE_PATTERNS)
    )
    thresholds: MetricThresholds = field(default_factory=MetricThresholds)

    def __post_init__(self) -> None:
        if self.max_workers is not None and (
            isinstance(self.max_workers, bool)
            or not isinstance(self.max_workers, int)
            or self.max_workers < 1
        ):
            raise ConfigError(
                f"max_workers must be at least 1, got {self.max_workers}",
                context={"max_workers": self.max_workers},
            )

    @classmethod
    def load(cls, path: Path) -> AnalysisConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            AnalysisConfig instance (defaults if the file does not exist)

        Raises:
            ConfigError: If the file is not valid YAML or has invalid keys
        """
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in {path}: {e}", context={"path": str(path)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration in {path} must be a mapping",
                context={"path": str(path)},
            )

        logger.debug(f"Loaded analysis configuration from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            AnalysisConfig instance

        Raises:
            ConfigError: On unknown keys or wrongly typed values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                context={"unknown_keys": sorted(unknown)},
            )

        try:
            thresholds = MetricThresholds.from_dict(data.get("thresholds") or {})
        except TypeError as e:
            raise ConfigError(f"Invalid thresholds: {e}") from e

        ignore_patterns = data.get("ignore_patterns")
        return cls(
            count_boolean_operators=_require_bool(data, "count_boolean_operators"),
            count_body_references=_require_bool(data, "count_body_references"),
            max_workers=data.get("max_workers"),
            ignore_patterns=(
                _require_patterns(ignore_patterns)
                if ignore_patterns is not None
                else set(DEFAULT_IGNORE_PATTERNS)
            ),
            thresholds=thresholds,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "count_boolean_operators": self.count_boolean_operators,
            "count_body_references": self.count_body_references,
            "max_workers": self.max_workers,
            "ignore_patterns": sorted(self.ignore_patterns),
            "thresholds": self.thresholds.to_dict(),
        }

    def resolve_max_workers(self) -> int:
        """Return the effective number of extraction workers.

        Priority: explicit ``max_workers``, then the
        RUST_ARCH_METRICS_MAX_WORKERS environment variable, then
        min(DEFAULT_MAX_WORKERS, cpu count).
        """
        if self.max_workers is not None:
            return self.max_workers

        env_workers = os.environ.get(MAX_WORKERS_ENV_VAR)
        if env_workers:
            try:
                return max(1, int(env_workers))
            except ValueError as e:
                raise ConfigError(
                    f"{MAX_WORKERS_ENV_VAR} must be an integer, got {env_workers!r}"
                ) from e

        return max(1, min(DEFAULT_MAX_WORKERS, os.cpu_count() or 1))


def _require_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(
            f"{key} must be true or false, got {value!r}",
            context={"key": key, "value": value},
        )
    return value


def _require_patterns(value: Any) -> set[str]:
    """Validate ``ignore_patterns``: a list of strings, never a bare string."""
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise ConfigError(
            f"ignore_patterns must be a list of strings, got {value!r}",
            context={"key": "ignore_patterns", "value": value},
        )
    return set(value)
