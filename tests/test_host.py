"""Tests for the host-facing output channel and event types."""

from __future__ import annotations

import io
from pathlib import Path

from yuga_installer.host import AutoloadDumpEvent, HostConfig, Output, RootPackage, StreamOutput


class TestStreamOutput:
    def test_tags_stripped_when_plain(self) -> None:
        """Style tags are removed from undecorated output."""
        stream = io.StringIO()
        StreamOutput(stream).write("<error>boom</error> and <info>ok</info>")
        assert stream.getvalue() == "boom and ok\n"

    def test_tags_rendered_as_ansi(self) -> None:
        """Decorated output turns tags into ANSI escapes."""
        stream = io.StringIO()
        StreamOutput(stream, decorated=True).write("<error>boom</error>")
        assert stream.getvalue() == "\x1b[37;41mboom\x1b[0m\n"

    def test_list_of_lines(self) -> None:
        """Each message in a list is its own line."""
        stream = io.StringIO()
        StreamOutput(stream).write(["", "a", "b"])
        assert stream.getvalue() == "\na\nb\n"

    def test_verbosity(self) -> None:
        """Verbosity is reported as configured."""
        assert StreamOutput(io.StringIO()).is_verbose() is False
        assert StreamOutput(io.StringIO(), verbose=True).is_verbose() is True

    def test_satisfies_protocol(self) -> None:
        """StreamOutput is an Output."""
        assert isinstance(StreamOutput(io.StringIO()), Output)


class TestHostTypes:
    def test_host_config_coerces_path(self) -> None:
        """String vendor directories become Paths."""
        assert HostConfig(vendor_dir="deps").vendor_dir == Path("deps")

    def test_event_defaults(self) -> None:
        """An event needs only the package list."""
        event = AutoloadDumpEvent(packages=[])
        assert event.config.vendor_dir == Path("vendor")
        assert event.root_package == RootPackage()
        assert isinstance(event.output, StreamOutput)
