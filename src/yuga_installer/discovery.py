"""Module discovery across resolved packages and the local modules directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from yuga_installer.errors import ManifestError
from yuga_installer.namespace import primary_namespace
from yuga_installer.package import PackageLike, load_manifest
from yuga_installer.paths import namespace_key

logger = logging.getLogger(__name__)

__all__ = ["discover_plugins", "scan_modules_dir", "MODULE_TYPE", "MANIFEST_NAME"]

MODULE_TYPE = "yuga-module"
MANIFEST_NAME = "composer.json"


def scan_modules_dir(
    modules_dir: str | os.PathLike[str],
    module_type: str = MODULE_TYPE,
    manifest_name: str = MANIFEST_NAME,
) -> list[tuple[str, str]]:
    """Find in-development modules in the immediate subdirectories of ``modules_dir``.

    Subdirectories without a readable, parseable descriptor of the module
    type are skipped. Returns ``(namespace, path)`` pairs in scan order.
    """
    root = Path(modules_dir)
    if not root.is_dir():
        return []

    try:
        entries = sorted(os.scandir(root), key=lambda e: e.name)
    except OSError as e:
        logger.error("OS error scanning %s: %s", root, e)
        return []

    results: list[tuple[str, str]] = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError as e:
            logger.error("OS error accessing %s: %s", entry.path, e)
            continue

        manifest_path = Path(entry.path) / manifest_name
        if not manifest_path.is_file() or not os.access(manifest_path, os.R_OK):
            logger.debug("No readable %s in %s, skipping", manifest_name, entry.path)
            continue

        try:
            package = load_manifest(manifest_path)
        except ManifestError as e:
            logger.warning("Skipping local module at %s: %s", entry.path, e.message)
            continue

        if package.type != module_type:
            continue

        results.append((primary_namespace(package), str(Path(root, entry.name))))
    return results


def discover_plugins(
    packages: Iterable[PackageLike],
    plugins_dir: str | os.PathLike[str],
    vendor_dir: str | os.PathLike[str],
    module_type: str = MODULE_TYPE,
    manifest_name: str = MANIFEST_NAME,
) -> dict[str, str]:
    """Map every discoverable module's primary namespace to its directory.

    Resolved packages of ``module_type`` live under
    ``vendor_dir/<pretty name>``. Local modules found in ``plugins_dir``
    take precedence over resolved packages with the same namespace.

    Returns:
        A dict ordered by registry key (the namespace with ``/`` separators).

    Raises:
        AmbiguousNamespaceError: If any module's namespace cannot be inferred.
    """
    results: dict[str, str] = {}

    for package in packages:
        if package.type != module_type:
            continue
        namespace = primary_namespace(package)
        results[namespace] = str(Path(vendor_dir, package.pretty_name))
        logger.debug("Resolved package '%s' provides '%s'", package.name, namespace)

    for namespace, path in scan_modules_dir(plugins_dir, module_type, manifest_name):
        if namespace in results:
            logger.info("Local module at %s overrides '%s' from %s", path, namespace, results[namespace])
        results[namespace] = path

    return dict(sorted(results.items(), key=lambda item: namespace_key(item[0])))
