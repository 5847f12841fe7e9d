"""Tests for the assetproxy CLI commands."""

import asyncclick as click
import pytest

from assetproxy.cli import cli
from assetproxy.cli.cli import identifiers, serve

from conftest import ALL_IDENTIFIERS


def test_commands_registered() -> None:
    assert {"serve", "identifiers"} <= set(cli.commands)


def test_identifiers_lists_plugins(plugins_dir, monkeypatch, capsys) -> None:
    monkeypatch.setattr("assetproxy.plugins.system.entry_points", lambda group: [])

    identifiers.callback(plugin_paths=(str(plugins_dir),))

    assert set(capsys.readouterr().out.split()) == ALL_IDENTIFIERS


class FakeServer:
    created = []

    def __init__(self, settings):
        self.settings = settings
        self.started_with = None

    @classmethod
    def from_settings(cls, settings):
        server = cls(settings)
        cls.created.append(server)
        return server

    async def start(self, port, host):
        self.started_with = (host, port)


@pytest.mark.anyio("asyncio")
async def test_serve_starts_server(plugins_dir, monkeypatch) -> None:
    FakeServer.created = []
    monkeypatch.setattr("assetproxy.server.ManagerProxyServer", FakeServer)

    await serve.callback(
        host="127.0.0.1",
        port=1234,
        plugin_paths=(str(plugins_dir),),
        strict_destroy=True
    )

    server = FakeServer.created[0]
    assert server.started_with == ("127.0.0.1", 1234)
    assert server.settings.plugin_paths == [str(plugins_dir)]
    assert server.settings.strict_destroy is True


@pytest.mark.anyio("asyncio")
async def test_serve_reports_failures(monkeypatch) -> None:
    class BrokenServer(FakeServer):
        async def start(self, port, host):
            raise OSError("address already in use")

    monkeypatch.setattr("assetproxy.server.ManagerProxyServer", BrokenServer)

    with pytest.raises(click.ClickException, match="address already in use"):
        await serve.callback(host=None, port=None, plugin_paths=(), strict_destroy=None)


@pytest.mark.anyio("asyncio")
async def test_serve_validates_overrides(monkeypatch) -> None:
    FakeServer.created = []
    monkeypatch.setattr("assetproxy.server.ManagerProxyServer", FakeServer)

    with pytest.raises(click.ClickException, match="Invalid server settings"):
        await serve.callback(host=None, port=70000, plugin_paths=(), strict_destroy=None)

    assert FakeServer.created == []
