"""Cross-platform path normalization for registry entries."""

from __future__ import annotations

import os
import re

__all__ = ["normalize_path", "relativize", "namespace_key", "is_absolute"]

_SEPARATOR_RUN = re.compile(r"[\\/]+")
_DRIVE = re.compile(r"^[A-Za-z]:/")


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Convert a path to canonical forward-slash form with one trailing slash.

    Runs of ``/`` and ``\\`` collapse to a single ``/``, so
    ``C:\\proj\\\\vendor`` becomes ``C:/proj/vendor/``.
    """
    text = os.fspath(path)
    if not text:
        return ""
    return _SEPARATOR_RUN.sub("/", text).rstrip("/") + "/"


def is_absolute(path: str) -> bool:
    """Whether a normalized path is absolute on POSIX or Windows."""
    return path.startswith("/") or bool(_DRIVE.match(path))


def relativize(path: str | os.PathLike[str], root: str | os.PathLike[str]) -> str:
    """Express ``path`` relative to ``root`` when it falls under it.

    Both arguments are normalized first. Paths outside ``root`` come back
    normalized but absolute. The root itself becomes ``./``.
    """
    normalized = normalize_path(path)
    base = normalize_path(root)
    if not base:
        return normalized

    # Drive letters are case-insensitive.
    if _DRIVE.match(base):
        candidate, prefix = normalized.lower(), base.lower()
    else:
        candidate, prefix = normalized, base

    if not candidate.startswith(prefix):
        return normalized
    remainder = normalized[len(base):]
    return remainder or "./"


def namespace_key(namespace: str) -> str:
    """Render a namespace as a registry key: ``Vendor\\Sub`` -> ``Vendor/Sub``."""
    return namespace.replace("\\", "/")
