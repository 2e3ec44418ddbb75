"""Tests for PluginManager: discovery, registration, and hook relay."""

from __future__ import annotations

import sys
from pathlib import Path

from umpctl.plugins import PluginManager, hookimpl


class _DummyPlugin:
    @hookimpl
    def post_run(self, program, run_id, ok, summary):
        pass


class _NotAPlugin:
    def post_run(self, program, run_id, ok, summary):
        pass


LOCAL_PLUGIN = '''
from umpctl.plugins import hookimpl


class Announcer:
    calls = []

    @hookimpl
    def post_run(self, program, run_id, ok, summary):
        Announcer.calls.append(program)
'''


class TestPluginManager:
    def test_hook_relay_accessible(self):
        pm = PluginManager()
        assert hasattr(pm.hook, "post_perform")
        assert hasattr(pm.hook, "post_run")

    def test_register_plugin_default_name(self):
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self):
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_discover_marks_loaded(self, tmp_path: Path):
        pm = PluginManager()
        assert not pm.is_loaded
        pm.discover_and_load(local_dir=tmp_path / "missing")
        assert pm.is_loaded

    def test_has_hook_impls(self):
        assert PluginManager._has_hook_impls(_DummyPlugin)
        assert not PluginManager._has_hook_impls(_NotAPlugin)


class TestLocalDiscovery:
    def test_loads_local_plugin_and_dispatches(self, tmp_path: Path):
        (tmp_path / "announce.py").write_text(LOCAL_PLUGIN)
        (tmp_path / "_private.py").write_text("raise RuntimeError('never imported')\n")

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path)

        assert "umpctl_local_plugin_announce.Announcer" in names
        pm.hook.post_run(program="emailer", run_id="r1", ok=True, summary={})
        announcer = sys.modules["umpctl_local_plugin_announce"].Announcer
        assert announcer.calls == ["emailer"]

    def test_broken_plugin_file_is_skipped(self, tmp_path: Path):
        (tmp_path / "broken.py").write_text("this is not python\n")
        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path)
        assert not any("broken" in name for name in names)
