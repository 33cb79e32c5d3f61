"""yuga_installer - Registry generator for Yuga framework modules."""

from __future__ import annotations

# Installer
from yuga_installer.installer import ModuleInstaller
from yuga_installer.advisor import POST_AUTOLOAD_DUMP_HOOK, UsageAdvisor

# Discovery
from yuga_installer.discovery import MODULE_TYPE, discover_plugins
from yuga_installer.namespace import primary_namespace, resolve_namespace
from yuga_installer.paths import namespace_key, normalize_path, relativize

# Registry file
from yuga_installer.registry_file import RegistryDocument, load_registry, patch_one, write_full

# Packages and host
from yuga_installer.package import LocalPackage, PackageLike, ResolvedPackage, load_manifest
from yuga_installer.host import AutoloadDumpEvent, HostConfig, Output, RootPackage, StreamOutput

# Config
from yuga_installer.config import Config

# Errors
from yuga_installer.errors import (
    AmbiguousNamespaceError,
    ErrorCodes,
    FilesystemError,
    InstallerError,
    MalformedRegistryError,
    ManifestError,
)

__version__ = "0.1.0"

__all__ = [
    # Installer
    "ModuleInstaller",
    "UsageAdvisor",
    "POST_AUTOLOAD_DUMP_HOOK",
    # Discovery
    "MODULE_TYPE",
    "discover_plugins",
    "primary_namespace",
    "resolve_namespace",
    "namespace_key",
    "normalize_path",
    "relativize",
    # Registry file
    "RegistryDocument",
    "load_registry",
    "patch_one",
    "write_full",
    # Packages and host
    "PackageLike",
    "ResolvedPackage",
    "LocalPackage",
    "load_manifest",
    "AutoloadDumpEvent",
    "HostConfig",
    "Output",
    "RootPackage",
    "StreamOutput",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "InstallerError",
    "AmbiguousNamespaceError",
    "MalformedRegistryError",
    "FilesystemError",
    "ManifestError",
]
