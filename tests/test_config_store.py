from __future__ import annotations

import json

import pytest

from statsd_notifier.adapters.json_config_store import JsonConfigStore
from statsd_notifier.core.config import GlobalConfig, NotifierConfig
from statsd_notifier.core.errors import ConfigError


def _step(**overrides) -> NotifierConfig:
    values = {
        "prefix": "backend",
        "send_checkstyle": True,
        "send_pmd": False,
        "send_junit": True,
        "checkstyle_prefix": "checkstyle",
        "pmd_prefix": "pmd",
        "junit_prefix": "junit",
    }
    values.update(overrides)
    return NotifierConfig(**values)


def test_global_config_round_trips(tmp_path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")
    store.save_global(GlobalConfig(host="metrics.local", port=8125, prefix="ci"))

    reloaded = JsonConfigStore(tmp_path / "config.json").load_global()

    assert reloaded == GlobalConfig(host="metrics.local", port=8125, prefix="ci")


def test_missing_file_gives_defaults(tmp_path) -> None:
    store = JsonConfigStore(tmp_path / "absent.json")

    assert store.load_global() == GlobalConfig(host="", port=8125, prefix="")
    assert store.load_jobs() == {}
    assert store.installed_plugins() == []


def test_configure_global_parses_form_and_saves(tmp_path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")

    config = store.configure_global({"host": "statsd.example", "port": "9125", "prefix": "builds"})

    assert config == GlobalConfig(host="statsd.example", port=9125, prefix="builds")
    saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert saved["statsd"] == {"host": "statsd.example", "port": 9125, "prefix": "builds"}


def test_configure_global_rejects_non_integer_port_without_saving(tmp_path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")
    store.save_global(GlobalConfig(host="metrics.local", port=8125, prefix="ci"))

    with pytest.raises(ValueError):
        store.configure_global({"host": "other", "port": "eighty", "prefix": ""})

    assert store.load_global().host == "metrics.local"


def test_saving_global_keeps_other_sections(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"plugins": ["pmd"], "logging": {"enabled": True}}), encoding="utf-8")
    store = JsonConfigStore(path)

    store.save_global(GlobalConfig(host="h", port=1, prefix="p"))

    data = store.read()
    assert data["plugins"] == ["pmd"]
    assert data["logging"] == {"enabled": True}


def test_invalid_json_raises_config_error(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        JsonConfigStore(path).read()


def test_non_object_root_raises_config_error(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ConfigError):
        JsonConfigStore(path).load_global()


def test_jobs_add_toggle_and_remove(tmp_path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")
    store.add_job("backend", _step())

    updated = store.set_job_flags("backend", send_pmd=True, send_junit=False)

    assert updated.send_pmd is True
    assert updated.send_junit is False
    assert store.get_job("backend") == _step(send_pmd=True, send_junit=False)
    assert store.remove_job("backend") is True
    assert store.remove_job("backend") is False
    assert store.get_job("backend") is None


def test_adding_an_existing_job_is_rejected(tmp_path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")
    store.add_job("backend", _step())

    with pytest.raises(ConfigError):
        store.add_job("backend", _step(prefix="other"))


def test_toggling_unknown_job_raises(tmp_path) -> None:
    with pytest.raises(ConfigError):
        JsonConfigStore(tmp_path / "config.json").set_job_flags("ghost", send_pmd=True)


def test_installed_plugins_are_stored_sorted(tmp_path) -> None:
    store = JsonConfigStore(tmp_path / "config.json")
    store.set_installed_plugins(["pmd", "checkstyle", "pmd"])

    assert store.installed_plugins() == ["checkstyle", "pmd"]


def test_step_name_fragments_are_fixed_but_flags_toggle() -> None:
    step = _step()

    step.send_checkstyle = False
    step.send_pmd = True
    step.send_junit = False

    assert (step.send_checkstyle, step.send_pmd, step.send_junit) == (False, True, False)
    for field_name in ("prefix", "checkstyle_prefix", "pmd_prefix", "junit_prefix"):
        with pytest.raises(AttributeError):
            setattr(step, field_name, "changed")


def test_global_config_is_immutable() -> None:
    config = GlobalConfig(host="metrics.local", port=8125, prefix="ci")

    with pytest.raises(AttributeError):
        config.host = "elsewhere"  # type: ignore[misc]


def test_string_send_flag_is_rejected_instead_of_coerced(tmp_path) -> None:
    path = tmp_path / "config.json"
    bad = _step().to_dict()
    bad["send_pmd"] = "false"
    path.write_text(json.dumps({"jobs": {"backend": bad, "frontend": _step().to_dict()}}), encoding="utf-8")
    store = JsonConfigStore(path)

    with pytest.raises(ConfigError, match="send_pmd must be true or false"):
        store.get_job("backend")
    assert store.get_job("frontend") == _step()


def test_raw_port_is_kept_when_loading(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"statsd": {"host": "metrics.local", "port": None}}), encoding="utf-8")

    assert JsonConfigStore(path).load_global() == GlobalConfig(host="metrics.local", port=None, prefix="")
