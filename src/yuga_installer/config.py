"""Installer settings and access."""

from __future__ import annotations

import copy
from typing import Any

__all__ = ["Config", "DEFAULTS"]

DEFAULTS: dict[str, Any] = {
    "installer": {
        "module_type": "yuga-module",
        "registry_file": "yuga-modules.yaml",
        "modules_dir": "modules",
        "manifest_name": "composer.json",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration accessor with dot-path key support.

    User-supplied data is layered over ``DEFAULTS``, so every documented
    key is always present.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = _deep_merge(DEFAULTS, data or {})

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def merged(self, overrides: dict[str, Any] | None) -> Config:
        """Return a new Config with ``overrides`` layered over this one."""
        if not overrides:
            return self
        return Config(_deep_merge(self._data, overrides))
