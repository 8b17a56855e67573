import pytest
from click.testing import CliRunner

from ipv6request import cli


@pytest.fixture
def served(monkeypatch):
    calls = []

    def fake_serve(host, port, *, grace_seconds):
        calls.append((host, port, grace_seconds))

    monkeypatch.setattr(cli, "serve", fake_serve)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    return calls


def test_daemon_child_args_drop_daemon_flag():
    assert cli.daemon_child_args(["-d", "-port", "9000"]) == ["-port", "9000", "--daemon-child"]
    assert cli.daemon_child_args(["--daemon"]) == ["--daemon-child"]


def test_foreground_binds_all_interfaces(served):
    result = CliRunner().invoke(cli.main, ["-port", "9000"])

    assert result.exit_code == 0, result.output
    assert served == [("0.0.0.0", 9000, 5)]


def test_default_port_comes_from_settings(served, monkeypatch):
    monkeypatch.setenv("PORT", "8181")
    cli.get_settings.cache_clear()

    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 0, result.output
    assert served == [("0.0.0.0", 8181, 5)]


def test_daemon_child_binds_ipv6_loopback(served):
    result = CliRunner().invoke(cli.main, ["--port", "9000", "--daemon-child"])

    assert result.exit_code == 0, result.output
    assert served == [("::1", 9000, 5)]


def test_daemon_flag_spawns_child_and_returns(served, monkeypatch):
    spawned = []
    monkeypatch.setattr(cli, "spawn_daemon", lambda argv: spawned.append(list(argv)) or 4242)
    monkeypatch.setattr(cli.sys, "argv", ["ipv6request", "-d", "-port", "9000"])

    result = CliRunner().invoke(cli.main, ["-d", "-port", "9000"])

    assert result.exit_code == 0, result.output
    assert spawned == [["-d", "-port", "9000"]]
    assert served == []
