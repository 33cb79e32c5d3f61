"""Persisted namespace-to-path registry: serialization, atomic writes, patching."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from yuga_installer.errors import FilesystemError, MalformedRegistryError
from yuga_installer.paths import is_absolute, namespace_key, normalize_path, relativize

if TYPE_CHECKING:
    from yuga_installer.host import Output

logger = logging.getLogger(__name__)

__all__ = [
    "RegistryDocument",
    "serialize",
    "write_full",
    "patch_one",
    "ensure_registry",
    "load_registry",
    "REGISTRY_HEADER",
]

REGISTRY_HEADER = "# Generated by yuga-module-installer. Do not edit.\n"


class RegistryDocument(BaseModel):
    """Schema of the registry file.

    ``base_dir`` locates the project root relative to the directory holding
    the registry file. Module paths under the root are stored relative to
    it; any other path is stored absolute.
    """

    model_config = ConfigDict(extra="forbid")

    base_dir: str = ".."
    modules: dict[str, str] = {}

    def base_path(self, registry_path: str | os.PathLike[str]) -> Path:
        """The absolute project root this document's relative paths hang off."""
        if is_absolute(normalize_path(self.base_dir)):
            return Path(self.base_dir)
        return Path(os.path.normpath(Path(registry_path).absolute().parent / self.base_dir))

    def resolved_modules(self, registry_path: str | os.PathLike[str]) -> dict[str, Path]:
        """Namespace to absolute module directory, as the framework loads them."""
        base = self.base_path(registry_path)
        resolved: dict[str, Path] = {}
        for namespace, path in self.modules.items():
            if is_absolute(path):
                resolved[namespace] = Path(path)
            else:
                resolved[namespace] = Path(os.path.normpath(base / path))
        return resolved


def _base_dir_for(registry_path: Path, root: Path) -> str:
    try:
        rel = os.path.relpath(root, registry_path.parent)
    except ValueError:
        # Different drives on Windows.
        return normalize_path(root).rstrip("/")
    return rel.replace("\\", "/")


def _absolute(path: Path) -> Path:
    return Path(os.path.abspath(path))


def _default_root(registry_path: Path) -> Path:
    return registry_path.parent.parent


def _entry_path(path: str | os.PathLike[str], root: Path) -> str:
    normalized = normalize_path(path)
    if not is_absolute(normalized):
        normalized = normalize_path(os.path.abspath(path))
    return relativize(normalized, root)


def serialize(document: RegistryDocument) -> str:
    """Render a registry document as YAML with modules sorted by namespace."""
    data = {
        "base_dir": document.base_dir,
        "modules": dict(sorted(document.modules.items())),
    }
    body = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True, width=4096)
    return REGISTRY_HEADER + body


def _file_mode(path: Path) -> int:
    """Mode for the replacement file: the existing file's, else what the umask allows."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _atomic_write(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` so readers see either the old or new file.

    The temporary file is created owner-only, so it is given the existing
    file's permissions (or the umask default) before it takes its place.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(path=str(path.parent), operation="create directory", reason=str(e), cause=e) from e

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise FilesystemError(path=str(path), operation="write", reason=str(e), cause=e) from e


def write_full(
    mapping: Mapping[str, str | os.PathLike[str]],
    config_file: str | os.PathLike[str],
    root: str | os.PathLike[str] | None = None,
) -> RegistryDocument:
    """Rewrite the registry file from a complete namespace-to-path mapping.

    Args:
        mapping: Primary namespace to module directory.
        config_file: The registry file to (re)create.
        root: Project root paths are expressed against. Defaults to the
            parent of the registry file's directory.

    Returns:
        The document that was written.

    Raises:
        FilesystemError: If the directory cannot be created or the file written.
    """
    path = _absolute(Path(config_file))
    base = _absolute(Path(root)) if root is not None else _default_root(path)

    modules = {namespace_key(ns): _entry_path(p, base) for ns, p in mapping.items()}
    document = RegistryDocument(base_dir=_base_dir_for(path, base), modules=modules)

    _atomic_write(path, serialize(document))
    logger.info("Wrote %d module(s) to %s", len(modules), path)
    return document


def load_registry(config_file: str | os.PathLike[str]) -> RegistryDocument:
    """Load and validate an existing registry file.

    Raises:
        MalformedRegistryError: If the file cannot be read or does not hold
            the registry structure.
    """
    path = Path(config_file)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedRegistryError(registry_path=str(path), reason=str(e)) from e

    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise MalformedRegistryError(registry_path=str(path), reason=f"YAML parse error: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedRegistryError(registry_path=str(path), reason="registry must be a YAML mapping")
    if parsed.get("modules") is None and "modules" in parsed:
        parsed["modules"] = {}

    try:
        return RegistryDocument.model_validate(parsed)
    except ValidationError as e:
        raise MalformedRegistryError(registry_path=str(path), reason=str(e)) from e


def ensure_registry(config_file: str | os.PathLike[str], output: Output | None = None) -> bool:
    """Create an empty registry file if none exists.

    Returns:
        True if the file was created.
    """
    path = _absolute(Path(config_file))
    if path.exists():
        if output is not None and output.is_verbose():
            output.write(f"{path.name} exists.")
        return False

    document = RegistryDocument(base_dir=_base_dir_for(path, _default_root(path)))
    _atomic_write(path, serialize(document))
    if output is not None and output.is_verbose():
        output.write(f"Created {path.name}")
    return True


def patch_one(
    config_file: str | os.PathLike[str],
    namespace: str,
    path: str | os.PathLike[str] | None,
    output: Output | None = None,
) -> bool:
    """Set or remove a single registry entry, leaving all others as they are.

    A ``path`` of None removes ``namespace``. If the existing file is
    malformed, the patch is skipped and the file left untouched.

    Returns:
        True if the registry was rewritten.

    Raises:
        FilesystemError: If the registry cannot be created or written.
    """
    registry_path = _absolute(Path(config_file))
    ensure_registry(registry_path, output)

    try:
        document = load_registry(registry_path)
    except MalformedRegistryError as e:
        logger.warning("%s; module path configuration not updated", e.message)
        if output is not None:
            output.write(
                f"<error>ERROR - `{registry_path.name}` file is invalid. "
                "modules path configuration not updated.</error>"
            )
        return False

    key = namespace_key(namespace)
    modules = dict(document.modules)
    if path is None:
        if modules.pop(key, None) is None:
            logger.debug("'%s' not in %s, nothing to remove", key, registry_path)
        else:
            logger.info("Removed '%s' from %s", key, registry_path)
    else:
        modules[key] = _entry_path(path, document.base_path(registry_path))
        logger.info("Set '%s' -> %s in %s", key, modules[key], registry_path)

    _atomic_write(registry_path, serialize(document.model_copy(update={"modules": modules})))
    return True
