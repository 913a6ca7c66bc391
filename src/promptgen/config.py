# -------------------------------------
# generation configuration
# -------------------------------------
"""
Per-expansion switches (GenerationConfig) and YAML run configuration.

A run configuration file is a flat YAML mapping, e.g.

    mode: most-likely
    tolerant: true
    num: 20
    out: prompts.txt
    seed: 42
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .selection import SelectionMode

logger = logging.getLogger(__name__)

CONFIG_KEYS = frozenset({"mode", "tolerant", "num", "out", "seed", "verbose", "dry_run"})

# accepted YAML types per key; bool is an int subclass so it is checked apart
_KEY_TYPES: dict[str, tuple[type, ...]] = {
    "mode": (str,),
    "tolerant": (bool,),
    "num": (int,),
    "out": (str,),
    "seed": (int, str, type(None)),
    "verbose": (bool,),
    "dry_run": (bool,),
}

# Module-level cache for loaded config files
_CONFIG_CACHE: dict[str, dict[str, Any]] = {}


class ConfigError(ValueError):
    pass


def check_types(d: dict[str, Any], source: str = "config") -> None:
    """Raise ConfigError if a known key in d holds a value of the wrong type."""
    for key, value in d.items():
        allowed = _KEY_TYPES.get(key)
        if allowed is None:
            continue
        if not isinstance(value, allowed) or (isinstance(value, bool) and bool not in allowed):
            names = " or ".join("null" if t is type(None) else t.__name__ for t in allowed)
            raise ConfigError(f"{key} in {source} must be {names}, got {value!r}")


@dataclass(frozen=True)
class GenerationConfig:
    selection_mode: SelectionMode = SelectionMode.RANDOM
    tolerate_malformed_weights: bool = False

    @classmethod
    def from_mapping(cls, d: dict[str, Any]) -> "GenerationConfig":
        """Build from the `mode` / `tolerant` keys of a config mapping."""
        try:
            mode = SelectionMode.parse(d.get("mode", SelectionMode.RANDOM))
        except ValueError as e:
            raise ConfigError(str(e)) from None
        tolerant = d.get("tolerant", False)
        if not isinstance(tolerant, bool):
            raise ConfigError(f"tolerant must be bool, got {tolerant!r}")
        return cls(
            selection_mode=mode,
            tolerate_malformed_weights=tolerant,
        )

    @property
    def deterministic(self) -> bool:
        return self.selection_mode is not SelectionMode.RANDOM


DEFAULT_CONFIG = GenerationConfig()


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load a YAML run configuration.

    Args:
        path: Path to the YAML file

    Returns:
        The validated mapping (an empty file gives {})

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the file is not a YAML mapping of known keys
    """
    path = Path(path)
    path_str = str(path.resolve())

    if path_str in _CONFIG_CACHE:
        return _CONFIG_CACHE[path_str]

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in '{path}': {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config '{path}' must be a mapping, got {type(data).__name__}")

    unknown = sorted(str(k) for k in data if k not in CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"unknown config keys in '{path}': {', '.join(unknown)}")

    check_types(data, f"'{path}'")
    # fail early on a bad mode
    GenerationConfig.from_mapping(data)

    logger.debug("loaded config %s: %s", path_str, data)
    _CONFIG_CACHE[path_str] = data
    return data


def clear_cache() -> None:
    """Clear the config file cache."""
    _CONFIG_CACHE.clear()
