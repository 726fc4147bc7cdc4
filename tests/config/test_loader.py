# tests/config/test_loader.py
"""
Config Tests - YAML is optional input, code defaults always apply
"""

import logging

import pytest

from failflow import Fail
from failflow.config import (
    CONFIG_ENV_VAR,
    FailFlowConfig,
    get_config,
    load_config,
    set_config,
    validate_config,
)


def write_yaml(path, text):
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def test_defaults():
    config = FailFlowConfig.default()

    assert config.enable_suppression is True
    assert config.capture_trace is True
    assert config.trace_limit is None
    assert config.to_dict() == {
        "fail": {"enable_suppression": True, "capture_trace": True, "trace_limit": None}
    }


def test_from_yaml(tmp_path):
    path = write_yaml(tmp_path / "config.yml", "fail:\n  capture_trace: false\n  trace_limit: 5\n")

    config = FailFlowConfig.from_yaml(path)

    assert config.capture_trace is False
    assert config.trace_limit == 5
    assert config.enable_suppression is True


def test_missing_file_uses_defaults(tmp_path):
    assert FailFlowConfig.from_yaml(tmp_path / "nope.yml") == FailFlowConfig.default()


def test_no_yaml_anywhere_uses_defaults(no_user_config):
    assert FailFlowConfig.from_yaml() == FailFlowConfig.default()


def test_env_var_path(tmp_path, monkeypatch, no_user_config):
    path = write_yaml(tmp_path / "env.yml", "fail:\n  enable_suppression: false\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert FailFlowConfig.from_yaml().enable_suppression is False


def test_home_config(tmp_path, no_user_config):
    (tmp_path / ".failflow").mkdir()
    write_yaml(tmp_path / ".failflow" / "config.yml", "fail:\n  trace_limit: 3\n")

    assert FailFlowConfig.from_yaml().trace_limit == 3


def test_unknown_keys_are_ignored(tmp_path, caplog):
    path = write_yaml(tmp_path / "config.yml", "fail:\n  colour: blue\n  capture_trace: false\n")

    with caplog.at_level(logging.WARNING, logger="failflow.config.loader"):
        config = FailFlowConfig.from_yaml(path)

    assert config.capture_trace is False
    assert "colour" in caplog.text


def test_broken_yaml_uses_defaults(tmp_path, caplog):
    path = write_yaml(tmp_path / "config.yml", "fail: [unclosed\n")

    with caplog.at_level(logging.WARNING, logger="failflow.config.loader"):
        config = FailFlowConfig.from_yaml(path)

    assert config == FailFlowConfig.default()
    assert "Failed to load" in caplog.text


def test_non_mapping_yaml_uses_defaults(tmp_path):
    path = write_yaml(tmp_path / "config.yml", "- just\n- a list\n")

    assert FailFlowConfig.from_yaml(path) == FailFlowConfig.default()


def test_load_config_activates(tmp_path):
    path = write_yaml(tmp_path / "config.yml", "fail:\n  capture_trace: false\n")

    config = load_config(path)

    assert get_config() is config
    assert Fail("bad input", {"code": 42}).creation_stack is None


def test_load_config_rejects_invalid(tmp_path):
    path = write_yaml(tmp_path / "config.yml", "fail:\n  trace_limit: 0\n")

    with pytest.raises(ValueError, match="trace_limit"):
        load_config(path)

    assert get_config() == FailFlowConfig.default()


def test_set_config_returns_previous():
    custom = FailFlowConfig(trace_limit=4)

    previous = set_config(custom)

    assert previous == FailFlowConfig.default()
    assert get_config() is custom


def test_set_config_type_checked():
    with pytest.raises(TypeError):
        set_config({"capture_trace": False})


# ---- validator ----

def test_validate_default_is_clean():
    assert validate_config(FailFlowConfig.default()) == []


@pytest.mark.parametrize(
    "config, path",
    [
        (FailFlowConfig(trace_limit=0), "fail.trace_limit"),
        (FailFlowConfig(trace_limit=-1), "fail.trace_limit"),
        (FailFlowConfig(trace_limit="ten"), "fail.trace_limit"),
        (FailFlowConfig(capture_trace="yes"), "fail.capture_trace"),
        (FailFlowConfig(enable_suppression=1), "fail.enable_suppression"),
    ],
)
def test_validate_errors(config, path):
    issues = validate_config(config)

    assert [i.path for i in issues if i.level == "error"] == [path]


def test_validate_warns_on_useless_limit():
    issues = validate_config(FailFlowConfig(capture_trace=False, trace_limit=5))

    assert len(issues) == 1
    assert issues[0].level == "warn"
    assert "no effect" in str(issues[0])


def test_set_config_rejects_invalid():
    """An invalid config is refused and the active one is kept"""
    active = get_config()

    with pytest.raises(ValueError, match="trace_limit"):
        set_config(FailFlowConfig(trace_limit="3"))

    assert get_config() is active
    assert Fail("bad input", {"code": 42}).creation_stack is not None


def test_set_config_logs_warnings(caplog):
    with caplog.at_level(logging.WARNING, logger="failflow.config.loader"):
        set_config(FailFlowConfig(capture_trace=False, trace_limit=5))

    assert "no effect" in caplog.text


def test_unknown_keys_of_mixed_types(tmp_path, caplog):
    path = write_yaml(tmp_path / "config.yml", "fail:\n  1: one\n  colour: blue\n  capture_trace: false\n")

    with caplog.at_level(logging.WARNING, logger="failflow.config.loader"):
        config = FailFlowConfig.from_yaml(path)

    assert config.capture_trace is False
    assert "1, colour" in caplog.text
