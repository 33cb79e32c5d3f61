"""Package descriptors: the resolved-package and local-descriptor shapes."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from yuga_installer.errors import ManifestError

logger = logging.getLogger(__name__)

__all__ = [
    "PackageLike",
    "ResolvedPackage",
    "LocalPackage",
    "load_manifest",
]


@runtime_checkable
class PackageLike(Protocol):
    """What the installer needs to know about any package.

    ``autoload`` maps a loader type (``psr-4``, ``classmap``, ...) to that
    loader's rules; for ``psr-4`` the rules map a namespace prefix to one
    source path or a list of them.
    """

    @property
    def name(self) -> str: ...

    @property
    def pretty_name(self) -> str: ...

    @property
    def type(self) -> str: ...

    @property
    def version(self) -> str: ...

    @property
    def autoload(self) -> dict[str, Any]: ...


@dataclass
class ResolvedPackage:
    """A package already placed on disk by the host dependency manager."""

    name: str
    type: str = "library"
    version: str = "dev-main"
    autoload: dict[str, Any] = field(default_factory=dict)
    pretty_name: str = ""

    def __post_init__(self) -> None:
        if not self.pretty_name:
            self.pretty_name = self.name


class LocalPackage(BaseModel):
    """A package descriptor parsed from a local module directory."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    type: str = "library"
    version: str = "dev-local"
    autoload: dict[str, Any] = Field(default_factory=dict)

    @field_validator("autoload", mode="before")
    @classmethod
    def _empty_autoload(cls, value: Any) -> Any:
        # Descriptors written by PHP tooling encode an empty map as [].
        if value is None or value == []:
            return {}
        return value

    @property
    def pretty_name(self) -> str:
        return self.name


def load_manifest(manifest_path: Path) -> LocalPackage:
    """Parse a local module descriptor (``composer.json``) file.

    A descriptor without a ``name`` takes the name of its directory.

    Raises:
        ManifestError: If the file cannot be read, parsed, or validated.
    """
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(manifest_path=str(manifest_path), reason=str(exc)) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(manifest_path=str(manifest_path), reason=f"JSON parse error: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(manifest_path=str(manifest_path), reason="descriptor must be a JSON object")

    try:
        package = LocalPackage.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(manifest_path=str(manifest_path), reason=str(exc)) from exc

    if not package.name:
        logger.debug("Descriptor %s has no name, using directory name", manifest_path)
        package.name = manifest_path.parent.name
    return package
