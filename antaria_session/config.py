"""
Configuration schema for the tracing session.

This module defines the configuration structure for an editing session:
drag filter threshold, undo behavior, post-save behavior, logging level
and the region store backend.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from antaria_store import DirectoryRegionStore, InMemoryRegionStore

VALID_BACKENDS = {"memory", "directory"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


class ConfigError(ValueError):
    """Raised when a configuration file is missing or invalid."""
    pass


@dataclass(frozen=True)
class StoreConfig:
    """Region store configuration."""

    backend: str = "memory"  # "memory" or "directory"
    path: Optional[Path] = None

    def __post_init__(self):
        """Validate store configuration."""
        if self.backend not in VALID_BACKENDS:
            raise ConfigError(
                f"Invalid store backend: {self.backend}. "
                f"Must be one of {sorted(VALID_BACKENDS)}"
            )

        if self.backend == "directory" and self.path is None:
            raise ConfigError("Directory store requires 'path'")

        if self.path is not None and not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))

    def create_store(self):
        """Build the configured RegionStore."""
        if self.backend == "directory":
            return DirectoryRegionStore(self.path)
        return InMemoryRegionStore()


@dataclass(frozen=True)
class TracerConfig:
    """
    Main configuration for an editing session.

    Loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    # Drag filter
    min_distance_m: float = 3.0
    rebase_on_undo: bool = False

    # Session behavior
    keep_editing_after_save: bool = True

    # Observability
    log_level: str = "INFO"

    # Persistence
    store: StoreConfig = field(default_factory=StoreConfig)

    def __post_init__(self):
        """Validate tracer configuration."""
        if isinstance(self.min_distance_m, bool) or not isinstance(self.min_distance_m, (int, float)):
            raise ConfigError(
                f"min_distance_m must be a number, got {type(self.min_distance_m).__name__}"
            )
        if self.min_distance_m <= 0:
            raise ConfigError(
                f"min_distance_m must be > 0, got {self.min_distance_m}"
            )

        level = str(self.log_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(VALID_LOG_LEVELS)}"
            )
        object.__setattr__(self, "log_level", level)

        for name in ("rebase_on_undo", "keep_editing_after_save"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(
                    f"{name} must be true or false, got {value!r}"
                )

    @property
    def logging_level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level)

    def create_store(self):
        """Build the configured RegionStore."""
        return self.store.create_store()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TracerConfig":
        """
        Build a configuration from a parsed mapping.

        Missing keys fall back to defaults; unknown keys are rejected.
        """
        data = dict(data or {})
        store_data = data.pop("store", None) or {}

        known = {"min_distance_m", "rebase_on_undo", "keep_editing_after_save", "log_level"}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

        if not isinstance(store_data, dict):
            raise ConfigError("'store' must be a mapping")
        unknown_store = set(store_data) - {"backend", "path"}
        if unknown_store:
            raise ConfigError(f"Unknown store keys: {sorted(unknown_store)}")

        path = store_data.get("path")
        store = StoreConfig(
            backend=store_data.get("backend", "memory"),
            path=Path(path) if path is not None else None,
        )
        return cls(store=store, **data)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "TracerConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            min_distance_m: 3.0
            rebase_on_undo: false
            keep_editing_after_save: true
            log_level: "INFO"

            store:
              backend: "directory"
              path: "./data/regions"
        """
        path = Path(yaml_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {yaml_path}: {e}")

        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping in {yaml_path}")

        return cls.from_dict(data)
