"""
Configuration loader with environment variable support.

Configuration is built from layers, later layers overriding earlier ones:
1. config/default.yaml (base configuration)
2. config/{FOOTLINE_ENV}.yaml (environment-specific)
3. Environment variables (FOOTLINE_<SECTION>__<KEY>)

Also defines DetectorSettings, the validated parameters of a LineDetector.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from functools import reduce
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FOOTLINE_"
ENV_SELECTOR = "FOOTLINE_ENV"
ENV_SEPARATOR = "__"
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


def deep_merge(base: dict, override: dict) -> dict:
    """Return a copy of base with override merged in, section by section."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def parse_env_value(value: str) -> Any:
    """
    Interpret an environment variable with YAML scalar rules.

    "40" -> 40, "0.5" -> 0.5, "true" -> True, "[0, 255, 0]" -> [0, 255, 0].
    Text that is not valid YAML is kept as is.
    """
    if not value.strip():
        return value
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def env_overrides(environ: Mapping[str, str], prefix: str = ENV_PREFIX) -> dict:
    """
    Collect PREFIX<SECTION>__<KEY> variables into a nested dictionary.

    Levels are separated by a double underscore so that keys may contain
    single underscores.

    Example: FOOTLINE_DETECTOR__THRESHOLD_EDGE=40
        -> {'detector': {'threshold_edge': 40}}
    """
    overrides: dict[str, Any] = {}
    for name, raw in environ.items():
        if not name.startswith(prefix) or name == ENV_SELECTOR:
            continue
        path = name[len(prefix) :].lower().split(ENV_SEPARATOR)
        if not all(path):
            logger.warning(f"Ignoring malformed configuration variable {name}")
            continue
        node = overrides
        for key in path[:-1]:
            node = node.setdefault(key, {})
        node[path[-1]] = parse_env_value(raw)
    return overrides


class Config:
    """
    Layered configuration.

    Layers (later overrides earlier):
    1. default.yaml
    2. {FOOTLINE_ENV}.yaml (development, production, etc.)
    3. Environment variables (FOOTLINE_*)

    Usage:
        config = Config()
        radius = config.get('detector.local_max_radius', 5)
        # or
        radius = config['detector']['local_max_radius']
    """

    def __init__(self, config_dir: Path | None = None, env: str | None = None):
        """
        Args:
            config_dir: Directory holding the YAML files. Defaults to the project config/
            env: Environment file to layer over the defaults. Defaults to
                $FOOTLINE_ENV, or 'development'
        """
        self.config_dir = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR
        self.env = env or os.getenv(ENV_SELECTOR, "development")
        self.loaded_files: list[Path] = []
        self._config = self._load_config()

    def _read_layer(self, name: str) -> dict[str, Any]:
        path = self.config_dir / f"{name}.yaml"
        if not path.exists():
            return {}
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")
        self.loaded_files.append(path)
        return data

    def _load_config(self) -> dict[str, Any]:
        self.loaded_files = []
        layers = [
            self._read_layer("default"),
            self._read_layer(self.env),
            env_overrides(os.environ),
        ]
        logger.debug(f"Configuration loaded from {[str(p) for p in self.loaded_files]}")
        return reduce(deep_merge, layers, {})

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated path like 'detector.threshold_edge'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def __getitem__(self, key: str) -> Any:
        """Get top-level configuration section."""
        return self._config.get(key, {})

    @property
    def as_dict(self) -> dict[str, Any]:
        return self._config.copy()

    def reload(self) -> None:
        """Re-read files and environment variables."""
        self._config = self._load_config()


@dataclass(frozen=True)
class DetectorSettings:
    """
    Parameters of a LineDetector. Immutable once created.

    The defaults are a starting point and usually need tuning per scene.

    Attributes:
        local_max_radius: Lines in transform space must be a local max within this radius
        min_counts: Minimum number of votes for a histogram peak to become a line
        min_distance_from_origin: Peaks closer than this to a tile's center are ignored
        threshold_edge: Suppressed edge intensity must exceed this to be an edge pixel
        horizontal_divisions: Number of tile columns
        vertical_divisions: Number of tile rows
        gradient: Name of the gradient operator ('sobel', 'prewitt', 'three')
        strict_local_max: Require peaks to be strictly greater than their neighbors
        workers: Number of threads used to process tiles
    """

    local_max_radius: int = 5
    min_counts: int = 5
    min_distance_from_origin: float = 5
    threshold_edge: float = 30.0
    horizontal_divisions: int = 2
    vertical_divisions: int = 2
    gradient: str = "sobel"
    strict_local_max: bool = False
    workers: int = 1

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "DetectorSettings":
        """
        Build settings from a configuration section.

        Unknown keys are rejected so that typos do not silently fall back
        to defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ConfigurationError(f"Unknown detector option(s): {', '.join(unknown)}")
        return cls(**config)

    def validate(self) -> None:
        """Raise ConfigurationError for any out-of-range parameter."""
        positive_ints = {
            "local_max_radius": self.local_max_radius,
            "min_counts": self.min_counts,
            "horizontal_divisions": self.horizontal_divisions,
            "vertical_divisions": self.vertical_divisions,
            "workers": self.workers,
        }
        for name, value in positive_ints.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if not isinstance(self.threshold_edge, (int, float)) or self.threshold_edge <= 0:
            raise ConfigurationError(
                f"threshold_edge must be positive, got {self.threshold_edge!r}"
            )
        if (
            not isinstance(self.min_distance_from_origin, (int, float))
            or self.min_distance_from_origin < 0
        ):
            raise ConfigurationError(
                "min_distance_from_origin must be zero or positive, "
                f"got {self.min_distance_from_origin!r}"
            )
        if not isinstance(self.gradient, str):
            raise ConfigurationError(f"gradient must be a name, got {self.gradient!r}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
