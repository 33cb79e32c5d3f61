"""Error hierarchy for the Yuga module installer."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "InstallerError",
    "AmbiguousNamespaceError",
    "ManifestError",
    "MalformedRegistryError",
    "FilesystemError",
    "ErrorCodes",
]

AUTOLOAD_DOCS_URL = "https://github.com/hsemix/module-installer#autoload"


class InstallerError(Exception):
    """Base error for all installer errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class AmbiguousNamespaceError(InstallerError):
    """Raised when a module's primary namespace cannot be inferred from its autoload rules."""

    def __init__(self, package_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="AMBIGUOUS_NAMESPACE",
            message=(
                f"Unable to get primary namespace for module {package_name}.\n"
                "Ensure you have added a proper 'autoload' section to your module's config"
                f" as stated in the README on {AUTOLOAD_DOCS_URL}"
            ),
            details={"package_name": package_name, "docs_url": AUTOLOAD_DOCS_URL},
            **kwargs,
        )

    @property
    def package_name(self) -> str:
        """The name of the package whose namespace could not be determined."""
        return self.details["package_name"]


class ManifestError(InstallerError):
    """Raised when a local module descriptor cannot be read or parsed."""

    def __init__(self, *, manifest_path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="MANIFEST_INVALID",
            message=f"Invalid module descriptor '{manifest_path}': {reason}",
            details={"manifest_path": manifest_path, "reason": reason},
            **kwargs,
        )


class MalformedRegistryError(InstallerError):
    """Raised when an existing registry file cannot be parsed into the registry structure."""

    def __init__(self, *, registry_path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="REGISTRY_MALFORMED",
            message=f"Registry file '{registry_path}' is invalid: {reason}",
            details={"registry_path": registry_path, "reason": reason},
            **kwargs,
        )

    @property
    def registry_path(self) -> str:
        """The path of the unparseable registry file."""
        return self.details["registry_path"]


class FilesystemError(InstallerError):
    """Raised when a directory cannot be created or a file cannot be written."""

    def __init__(self, *, path: str, operation: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="FILESYSTEM_ERROR",
            message=f"Failed to {operation} '{path}': {reason}",
            details={"path": path, "operation": operation, "reason": reason},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The filesystem path the failed operation targeted."""
        return self.details["path"]


class ErrorCodes:
    """All installer error codes as constants.

    Example:
        if error.code == ErrorCodes.AMBIGUOUS_NAMESPACE:
            fix_autoload_section()
    """

    AMBIGUOUS_NAMESPACE = "AMBIGUOUS_NAMESPACE"
    MANIFEST_INVALID = "MANIFEST_INVALID"
    REGISTRY_MALFORMED = "REGISTRY_MALFORMED"
    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
