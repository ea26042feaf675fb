from __future__ import annotations

import asyncio
import json

from textual.widgets import Button, Input, Switch

from statsd_notifier.frontend.app import ConfigPanelApp

CONFIG = {
    "statsd": {"host": "metrics.local", "port": 8125, "prefix": "ci"},
    "plugins": ["checkstyle", "junit"],
    "jobs": {
        "backend": {
            "prefix": "backend",
            "send_checkstyle": True,
            "send_pmd": False,
            "send_junit": True,
            "checkstyle_prefix": "checkstyle",
            "pmd_prefix": "pmd",
            "junit_prefix": "junit",
        }
    },
}


def _write(tmp_path, document=CONFIG):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_panel_is_unmodified_after_loading_and_reloading(tmp_path) -> None:
    app = ConfigPanelApp(config_path=_write(tmp_path))

    async def scenario() -> list[bool]:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.pause()
            after_load = app.config_state.dirty
            app.action_reload_config()
            await pilot.pause()
            await pilot.pause()
            return [after_load, app.config_state.dirty, app.query_one("#save-btn", Button).disabled]

    assert asyncio.run(scenario()) == [False, False, True]


def test_editing_host_marks_panel_modified_and_save_writes_it(tmp_path) -> None:
    path = _write(tmp_path)
    app = ConfigPanelApp(config_path=path)

    async def scenario() -> bool:
        async with app.run_test() as pilot:
            await pilot.pause()
            app.query_one("#global-host", Input).value = "statsd.example"
            await pilot.pause()
            modified = app.config_state.dirty
            app.action_save_config()
            await pilot.pause()
            return modified and not app.config_state.dirty

    assert asyncio.run(scenario()) is True
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["statsd"] == {"host": "statsd.example", "port": 8125, "prefix": "ci"}
    assert saved["jobs"] == CONFIG["jobs"]


def test_non_numeric_port_is_refused_on_save(tmp_path) -> None:
    path = _write(tmp_path)
    app = ConfigPanelApp(config_path=path)

    async def scenario() -> str | None:
        async with app.run_test() as pilot:
            await pilot.pause()
            app.query_one("#global-port", Input).value = "eighty"
            await pilot.pause()
            app.action_save_config()
            await pilot.pause()
            return app.config_state.error

    error = asyncio.run(scenario())
    assert error is not None and error.startswith("port must be an integer")
    assert json.loads(path.read_text(encoding="utf-8")) == CONFIG


def test_removing_checkstyle_plugin_disables_adding_steps(tmp_path) -> None:
    app = ConfigPanelApp(config_path=_write(tmp_path))

    async def scenario() -> tuple[bool, bool, list[str]]:
        async with app.run_test() as pilot:
            await pilot.pause()
            enabled_before = not app.query_one("#add-job", Button).disabled
            app.query_one("#plugin-checkstyle", Switch).value = False
            await pilot.pause()
            return enabled_before, app.query_one("#add-job", Button).disabled, app.config_state.section("plugins", list)

    enabled_before, disabled_after, plugins = asyncio.run(scenario())
    assert enabled_before is True
    assert disabled_after is True
    assert plugins == ["junit"]
