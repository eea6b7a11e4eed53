from __future__ import annotations

import pytest
import requests

from nightwatch.alerts import notifier as notifier_module
from nightwatch.alerts.notifier import MESSAGE_LIMIT, Notifier, webhook_host


URL = "https://discord.example/api/webhooks/123/token"


class _Response:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


@pytest.fixture()
def posts(monkeypatch):
    calls = []

    def _post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        return _Response(204)

    monkeypatch.setattr(notifier_module.requests, "post", _post)
    return calls


def test_send_posts_content_payload(posts) -> None:
    assert Notifier(URL).send("Starting server...") is True
    assert posts == [{"url": URL, "json": {"content": "Starting server..."}, "timeout": 8.0}]


def test_long_messages_are_truncated(posts) -> None:
    Notifier(URL).send("x" * (MESSAGE_LIMIT + 50))
    content = posts[0]["json"]["content"]
    assert len(content) == MESSAGE_LIMIT
    assert content.endswith("...")


def test_noop_without_url(posts) -> None:
    notifier = Notifier("")
    assert notifier.enabled is False
    assert notifier.send("hello") is False
    assert posts == []


def test_network_errors_are_swallowed(monkeypatch) -> None:
    def _boom(*args, **kwargs):
        raise requests.ConnectionError("no route to host")

    monkeypatch.setattr(notifier_module.requests, "post", _boom)
    assert Notifier(URL).send("hello") is False


def test_error_status_reports_failure(monkeypatch) -> None:
    monkeypatch.setattr(
        notifier_module.requests, "post", lambda *a, **k: _Response(429, "rate limited")
    )
    assert Notifier(URL).send("hello") is False


def test_webhook_host_hides_token() -> None:
    assert webhook_host(URL) == "discord.example"
    assert webhook_host("not a url") == "unknown"
