"""Tests for the yuga_installer public API surface."""

import yuga_installer


class TestPublicAPI:
    def test_all_names_importable(self):
        for name in yuga_installer.__all__:
            assert getattr(yuga_installer, name) is not None, name

    def test_core_entry_points_exported(self):
        from yuga_installer import ModuleInstaller, discover_plugins, patch_one, resolve_namespace, write_full

        assert callable(ModuleInstaller.post_autoload_dump)
        assert callable(discover_plugins)
        assert callable(resolve_namespace)
        assert callable(write_full)
        assert callable(patch_one)

    def test_hook_entry_point_resolves(self):
        """The advertised hook string points at the real hook."""
        import importlib

        module_path, attr_path = yuga_installer.POST_AUTOLOAD_DUMP_HOOK.split(":")
        target = importlib.import_module(module_path)
        for part in attr_path.split("."):
            target = getattr(target, part)
        assert target == yuga_installer.ModuleInstaller.post_autoload_dump

    def test_version(self):
        assert yuga_installer.__version__ == "0.1.0"
