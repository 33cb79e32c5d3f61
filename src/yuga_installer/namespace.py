"""Primary namespace inference from a package's autoload rules."""

from __future__ import annotations

import logging
import re
from typing import Any

from yuga_installer.errors import AmbiguousNamespaceError
from yuga_installer.package import PackageLike

logger = logging.getLogger(__name__)

__all__ = ["resolve_namespace", "primary_namespace", "PSR4", "NAMESPACE_SEPARATOR"]

PSR4 = "psr-4"
NAMESPACE_SEPARATOR = "\\"

_SRC_PATH = re.compile(r"^(\./)?src/?$")
_ROOT_PATHS = ("", ".")


def _paths(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [p for p in value if isinstance(p, str)]
    return []


def _infer(path_map: dict[str, Any]) -> str | None:
    if len(path_map) == 1:
        return next(iter(path_map))

    src_matches = [prefix for prefix, value in path_map.items() if any(_SRC_PATH.match(p) for p in _paths(value))]
    if len(src_matches) == 1:
        return src_matches[0]

    # Every root-path entry is visited and the last one wins.
    namespace = None
    for prefix, value in path_map.items():
        if any(p in _ROOT_PATHS for p in _paths(value)):
            namespace = prefix
    return namespace


def resolve_namespace(autoload: dict[str, Any] | None, package_name: str) -> str:
    """Infer the single primary namespace from an autoload descriptor.

    Only the first ``psr-4`` section is considered:

    1. A section with exactly one prefix yields that prefix.
    2. Otherwise, the prefix whose path is ``src`` (optionally ``./src``
       or ``src/``), when exactly one such prefix exists.
    3. Otherwise, the last prefix whose path is ``""`` or ``"."``.

    Args:
        autoload: Mapping of loader type to loader rules.
        package_name: Used in the error raised when inference fails.

    Returns:
        The namespace with leading and trailing ``\\`` stripped.

    Raises:
        AmbiguousNamespaceError: If no rule above applies.
    """
    namespace = None
    for loader_type, path_map in (autoload or {}).items():
        if loader_type != PSR4:
            continue
        if isinstance(path_map, dict):
            namespace = _infer(path_map)
        break

    if namespace is None:
        raise AmbiguousNamespaceError(package_name=package_name)

    resolved = namespace.strip(NAMESPACE_SEPARATOR)
    logger.debug("Resolved primary namespace '%s' for package '%s'", resolved, package_name)
    return resolved


def primary_namespace(package: PackageLike) -> str:
    """Get the primary namespace for any package shape."""
    return resolve_namespace(package.autoload, package.name)
