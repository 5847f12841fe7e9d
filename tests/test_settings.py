import os

import pytest
from pydantic import ValidationError

from assetproxy.shared.settings import AppSettings, ProxySettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith("ASSETPROXY_") or name.upper() == "LOG_LEVEL":
            monkeypatch.delenv(name)


def test_defaults():
    settings = ProxySettings(_env_file=None)

    assert settings.host == "0.0.0.0"
    assert settings.port == 50051
    assert settings.plugin_paths == []
    assert settings.disable_entrypoint_plugins is False
    assert settings.strict_destroy is False
    assert settings.max_instances is None


def test_from_environment(monkeypatch, tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    monkeypatch.setenv("ASSETPROXY_HOST", "127.0.0.1")
    monkeypatch.setenv("ASSETPROXY_PORT", "6000")
    monkeypatch.setenv("ASSETPROXY_PLUGIN_PATH", os.pathsep.join([str(first), "", str(second)]))
    monkeypatch.setenv("ASSETPROXY_DISABLE_ENTRYPOINT_PLUGINS", "true")
    monkeypatch.setenv("ASSETPROXY_STRICT_DESTROY", "1")
    monkeypatch.setenv("ASSETPROXY_MAX_INSTANCES", "8")

    settings = ProxySettings(_env_file=None)

    assert settings.host == "127.0.0.1"
    assert settings.port == 6000
    assert settings.plugin_paths == [str(first), str(second)]
    assert settings.disable_entrypoint_plugins is True
    assert settings.strict_destroy is True
    assert settings.max_instances == 8


def test_empty_max_instances_is_unbounded(monkeypatch):
    monkeypatch.setenv("ASSETPROXY_MAX_INSTANCES", "")
    assert ProxySettings(_env_file=None).max_instances is None


@pytest.mark.parametrize("value", ["0", "-1", "many"])
def test_invalid_max_instances(monkeypatch, value):
    monkeypatch.setenv("ASSETPROXY_MAX_INSTANCES", value)
    with pytest.raises(ValidationError):
        ProxySettings(_env_file=None)


@pytest.mark.parametrize("port", ["-1", "70000"])
def test_invalid_port(monkeypatch, port):
    monkeypatch.setenv("ASSETPROXY_PORT", port)
    with pytest.raises(ValidationError):
        ProxySettings(_env_file=None)


def test_log_level(monkeypatch):
    assert AppSettings(_env_file=None).log_level == "INFO"

    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    assert AppSettings(_env_file=None).log_level == "DEBUG"
