"""Installer for Yuga modules: host hooks and registry maintenance."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from yuga_installer.advisor import UsageAdvisor
from yuga_installer.config import Config
from yuga_installer.discovery import discover_plugins
from yuga_installer.host import AutoloadDumpEvent, HostConfig, Output, RootPackage, StreamOutput
from yuga_installer.namespace import primary_namespace
from yuga_installer.package import PackageLike
from yuga_installer.registry_file import patch_one, write_full

logger = logging.getLogger(__name__)

__all__ = ["ModuleInstaller", "EXTRA_KEY", "settings_for"]

EXTRA_KEY = "yuga-installer"


def settings_for(root_package: RootPackage | None, base: Config | None = None) -> Config:
    """Installer settings with the root package's ``extra.yuga-installer`` applied."""
    config = base or Config()
    overrides = root_package.extra.get(EXTRA_KEY) if root_package is not None else None
    if overrides is None:
        return config
    if not isinstance(overrides, dict):
        logger.warning("Ignoring non-mapping '%s' extra in root package", EXTRA_KEY)
        return config
    return config.merged({"installer": overrides})


class ModuleInstaller:
    """Keeps the module registry in step with the packages the host installs.

    The full rebuild in :meth:`post_autoload_dump` is authoritative; the
    per-package :meth:`install`, :meth:`update` and :meth:`uninstall`
    patches only bridge the gap until the next autoload dump.
    """

    def __init__(
        self,
        config: HostConfig | None = None,
        output: Output | None = None,
        root_package: RootPackage | None = None,
        settings: Config | None = None,
        advisor: UsageAdvisor | None = None,
    ) -> None:
        """Initialize the installer and run the usage check.

        Args:
            config: Host configuration; supplies the vendor directory.
            output: Host output channel for user-facing messages.
            root_package: The project the host is operating on.
            settings: Installer settings. Defaults are taken from ``Config``
                with the root package's overrides applied.
            advisor: A shared advisor, so the usage check runs once across
                every installer the host creates.
        """
        self.config = config or HostConfig()
        self.output = output or StreamOutput()
        self.root_package = root_package
        self.settings = settings or settings_for(root_package)
        self.advisor = advisor or UsageAdvisor(self.output)
        self.advisor.check_usage(root_package)

    @property
    def module_type(self) -> str:
        return self.settings.get("installer.module_type")

    @property
    def vendor_dir(self) -> Path:
        return Path(os.path.realpath(self.config.vendor_dir))

    @property
    def registry_path(self) -> Path:
        return self.vendor_dir / self.settings.get("installer.registry_file")

    def supports(self, package_type: str) -> bool:
        """Whether this installer handles packages of ``package_type``."""
        return package_type == self.module_type

    def get_install_path(self, package: PackageLike) -> Path:
        """Directory the host places ``package`` in."""
        return self.vendor_dir / package.pretty_name

    # ----- Incremental updates -----

    def update_config(self, namespace: str, path: str | os.PathLike[str] | None) -> bool:
        """Set or remove one namespace in the registry."""
        return patch_one(self.registry_path, namespace, path, output=self.output)

    def install(self, package: PackageLike) -> bool:
        """Register a newly installed module."""
        if not self.supports(package.type):
            return False
        namespace = primary_namespace(package)
        return self.update_config(namespace, self.get_install_path(package))

    def update(self, initial: PackageLike, target: PackageLike) -> bool:
        """Replace the registry entry of ``initial`` with that of ``target``."""
        changed = False
        if self.supports(initial.type):
            changed = self.update_config(primary_namespace(initial), None)
        if self.supports(target.type):
            changed = self.update_config(primary_namespace(target), self.get_install_path(target)) or changed
        return changed

    def uninstall(self, package: PackageLike) -> bool:
        """Drop a removed module from the registry."""
        if not self.supports(package.type):
            return False
        return self.update_config(primary_namespace(package), None)

    # ----- Full regeneration -----

    @classmethod
    def post_autoload_dump(cls, event: AutoloadDumpEvent) -> dict[str, str]:
        """Rebuild the registry from every module the host knows about.

        Registered as the root project's ``post-autoload-dump`` hook. Local
        modules are looked up in the ``modules`` directory beside the vendor
        directory.

        Returns:
            The discovered namespace-to-path mapping.

        Raises:
            AmbiguousNamespaceError: If a module's namespace cannot be inferred.
            FilesystemError: If the registry cannot be written.
        """
        settings = settings_for(event.root_package)
        vendor_dir = Path(os.path.realpath(event.config.vendor_dir))
        modules_dir = vendor_dir.parent / settings.get("installer.modules_dir")

        mapping = discover_plugins(
            event.packages,
            modules_dir,
            vendor_dir,
            module_type=settings.get("installer.module_type"),
            manifest_name=settings.get("installer.manifest_name"),
        )

        registry_path = vendor_dir / settings.get("installer.registry_file")
        write_full(mapping, registry_path)
        if event.output.is_verbose():
            event.output.write(f"<info>Generated {registry_path.name} with {len(mapping)} module(s)</info>")
        return mapping
