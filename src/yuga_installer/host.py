"""Interfaces into the host dependency manager."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Protocol, Sequence, runtime_checkable

from yuga_installer.package import PackageLike

__all__ = [
    "Output",
    "StreamOutput",
    "RootPackage",
    "HostConfig",
    "AutoloadDumpEvent",
]


@runtime_checkable
class Output(Protocol):
    """The host's user-facing output channel."""

    def write(self, messages: str | Sequence[str]) -> None: ...

    def is_verbose(self) -> bool: ...


_TAG = re.compile(r"</?(error|info|comment|warning)>")
_ANSI = {
    "error": "\x1b[37;41m",
    "info": "\x1b[32m",
    "comment": "\x1b[33m",
    "warning": "\x1b[30;43m",
}
_RESET = "\x1b[0m"


class StreamOutput:
    """Output that writes lines to a text stream.

    Lines may carry ``<error>``, ``<info>``, ``<comment>`` or ``<warning>``
    style tags; they are rendered as ANSI colors when ``decorated`` is set
    and stripped otherwise.
    """

    def __init__(self, stream: IO[str] | None = None, verbose: bool = False, decorated: bool = False) -> None:
        self._stream = stream if stream is not None else sys.stderr
        self._verbose = verbose
        self._decorated = decorated

    def _render(self, line: str) -> str:
        if not self._decorated:
            return _TAG.sub("", line)
        return _TAG.sub(lambda m: _RESET if m.group(0).startswith("</") else _ANSI[m.group(1)], line)

    def write(self, messages: str | Sequence[str]) -> None:
        lines = [messages] if isinstance(messages, str) else list(messages)
        for line in lines:
            self._stream.write(self._render(line) + "\n")
        self._stream.flush()

    def is_verbose(self) -> bool:
        return self._verbose


@dataclass
class RootPackage:
    """The top-level package of the project the host is operating on."""

    name: str = "__root__"
    type: str = "project"
    scripts: dict[str, list[str]] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class HostConfig:
    """Host configuration the installer reads."""

    vendor_dir: Path = Path("vendor")

    def __post_init__(self) -> None:
        self.vendor_dir = Path(self.vendor_dir)


@dataclass
class AutoloadDumpEvent:
    """Fired by the host once the dependency graph has been resolved and installed."""

    packages: list[PackageLike]
    config: HostConfig = field(default_factory=HostConfig)
    root_package: RootPackage = field(default_factory=RootPackage)
    output: Output = field(default_factory=StreamOutput)
