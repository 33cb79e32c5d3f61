"""Tests for package descriptors and local descriptor loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from yuga_installer.errors import ErrorCodes, ManifestError
from yuga_installer.package import LocalPackage, PackageLike, ResolvedPackage, load_manifest


class TestResolvedPackage:
    def test_pretty_name_defaults_to_name(self) -> None:
        """Without an explicit pretty name the name is used."""
        assert ResolvedPackage(name="acme/widget").pretty_name == "acme/widget"

    def test_explicit_pretty_name(self) -> None:
        """An explicit pretty name is kept."""
        assert ResolvedPackage(name="acme/widget", pretty_name="Acme/Widget").pretty_name == "Acme/Widget"

    def test_satisfies_protocol(self) -> None:
        """Resolved packages are PackageLike."""
        assert isinstance(ResolvedPackage(name="a/b"), PackageLike)


class TestLocalPackage:
    def test_satisfies_protocol(self) -> None:
        """Parsed descriptors are PackageLike too."""
        assert isinstance(LocalPackage(name="a/b"), PackageLike)

    def test_unknown_fields_ignored(self) -> None:
        """Descriptor fields the installer does not use are dropped."""
        pkg = LocalPackage.model_validate({"name": "a/b", "require": {"php": ">=8"}, "license": "MIT"})
        assert pkg.name == "a/b"
        assert pkg.pretty_name == "a/b"

    @pytest.mark.parametrize("autoload", [[], None])
    def test_empty_autoload_forms(self, autoload: object) -> None:
        """An empty list or null autoload reads as no autoload rules."""
        assert LocalPackage.model_validate({"name": "a/b", "autoload": autoload}).autoload == {}


class TestLoadManifest:
    def test_full_descriptor(self, tmp_path: Path) -> None:
        """All used fields are read from composer.json."""
        path = tmp_path / "composer.json"
        path.write_text(
            json.dumps(
                {
                    "name": "local/blog",
                    "type": "yuga-module",
                    "version": "0.2.0",
                    "autoload": {"psr-4": {"Blog\\": "src/"}},
                }
            )
        )
        pkg = load_manifest(path)
        assert pkg.name == "local/blog"
        assert pkg.type == "yuga-module"
        assert pkg.version == "0.2.0"
        assert pkg.autoload == {"psr-4": {"Blog\\": "src/"}}

    def test_tab_indented_json(self, tmp_path: Path) -> None:
        """Tab-indented JSON, common in hand-written descriptors, parses."""
        path = tmp_path / "composer.json"
        path.write_text('{\n\t"name": "local/tabs",\n\t"type": "yuga-module"\n}\n')
        assert load_manifest(path).name == "local/tabs"

    def test_name_from_directory(self, tmp_path: Path) -> None:
        """A nameless descriptor is named after its directory."""
        module_dir = tmp_path / "Shop"
        module_dir.mkdir()
        (module_dir / "composer.json").write_text('{"type": "yuga-module"}')
        assert load_manifest(module_dir / "composer.json").name == "Shop"

    def test_missing_type_defaults_to_library(self, tmp_path: Path) -> None:
        """Packages without a type are libraries."""
        path = tmp_path / "composer.json"
        path.write_text('{"name": "x/y"}')
        assert load_manifest(path).type == "library"

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON raises ManifestError naming the file."""
        path = tmp_path / "composer.json"
        path.write_text("{oops")
        with pytest.raises(ManifestError) as exc_info:
            load_manifest(path)
        assert exc_info.value.code == ErrorCodes.MANIFEST_INVALID
        assert str(path) in exc_info.value.message

    def test_not_an_object(self, tmp_path: Path) -> None:
        """A JSON array is not a descriptor."""
        path = tmp_path / "composer.json"
        path.write_text("[1, 2]")
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_wrong_field_type(self, tmp_path: Path) -> None:
        """Autoload must be an object."""
        path = tmp_path / "composer.json"
        path.write_text('{"name": "x/y", "autoload": "src/"}')
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """An unreadable descriptor raises ManifestError."""
        with pytest.raises(ManifestError):
            load_manifest(tmp_path / "composer.json")
