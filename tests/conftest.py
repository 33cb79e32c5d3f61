"""Shared test fixtures for the installer test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from module_helpers import RecordingOutput
from yuga_installer.host import HostConfig, RootPackage


@pytest.fixture
def output() -> RecordingOutput:
    """A non-verbose recording output."""
    return RecordingOutput()


@pytest.fixture
def verbose_output() -> RecordingOutput:
    """A verbose recording output."""
    return RecordingOutput(verbose=True)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root with empty vendor/ and modules/ directories."""
    root = tmp_path / "app"
    (root / "vendor").mkdir(parents=True)
    (root / "modules").mkdir()
    return root.resolve()


@pytest.fixture
def host_config(project: Path) -> HostConfig:
    """Host configuration pointing at the project's vendor directory."""
    return HostConfig(vendor_dir=project / "vendor")


@pytest.fixture
def library_root() -> RootPackage:
    """A root package that is itself a module under development."""
    return RootPackage(name="acme/widget", type="yuga-module")
