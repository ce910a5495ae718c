"""Tests for the check-alerts CLI commands."""
import argparse

import httpx
import pytest

from price_alert_monitor.cli.check_alerts import cmd_health, cmd_run


def _client(handler) -> httpx.Client:
    return httpx.Client(base_url="http://svc.test", transport=httpx.MockTransport(handler))


def test_run_sends_bearer_secret(capsys):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization")
        seen["path"] = request.url.path
        return httpx.Response(200, json={"success": True, "checked": 2, "triggered": 0, "duration_ms": 5})

    code = cmd_run(_client(handler), argparse.Namespace(secret="s3cret"))

    assert code == 0
    assert seen == {"auth": "Bearer s3cret", "path": "/api/notifications/check-alerts"}
    assert '"checked": 2' in capsys.readouterr().out


def test_run_without_secret_sends_no_header():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "authorization" not in request.headers
        return httpx.Response(200, json={"success": True})

    assert cmd_run(_client(handler), argparse.Namespace(secret="")) == 0


def test_run_raises_on_unauthorized(capsys):
    client = _client(lambda r: httpx.Response(401, json={"success": False, "error": "Unauthorized"}))

    with pytest.raises(httpx.HTTPStatusError):
        cmd_run(client, argparse.Namespace(secret="wrong"))
    assert "Unauthorized" in capsys.readouterr().out


def test_health():
    client = _client(lambda r: httpx.Response(200, json={"status": "ok"}))
    assert cmd_health(client, argparse.Namespace()) == 0
