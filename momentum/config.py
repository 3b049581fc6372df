"""
Configuration loading for Momentum.

Settings live in ``args/momentum.yaml`` under a top-level ``momentum`` key.
Set ``MOMENTUM_CONFIG`` to point at a different file.

Each file is parsed once per process; call ``clear_config_cache()`` after
editing it.

Usage:
    from momentum.config import get_section

    retry = get_section("database").get("retry", {})
"""

import functools
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from . import PROJECT_ROOT

CONFIG_PATH = PROJECT_ROOT / "args" / "momentum.yaml"


def get_config_path() -> Path:
    """Resolve the active config file, honouring MOMENTUM_CONFIG."""
    override = os.environ.get("MOMENTUM_CONFIG")
    if override:
        return Path(override)
    return CONFIG_PATH


@functools.lru_cache(maxsize=None)
def _read_config(path: Path) -> Dict[str, Any]:
    if path.exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}
    return {}


def load_config() -> Dict[str, Any]:
    """Load the full configuration file (empty dict if missing)."""
    return _read_config(get_config_path())


def clear_config_cache() -> None:
    """Forget parsed config files so the next read hits the disk."""
    _read_config.cache_clear()


def get_section(name: str) -> Dict[str, Any]:
    """Return one section of the ``momentum`` config block."""
    return load_config().get("momentum", {}).get(name, {}) or {}


def resolve_path(value: str) -> Path:
    """Resolve a configured path relative to the project root."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


__all__ = ["CONFIG_PATH", "clear_config_cache", "get_config_path", "get_section", "load_config", "resolve_path"]
