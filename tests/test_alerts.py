"""Tests for forwarding abuse alerts to the security webhook."""

import json

import httpx
import pytest

from collabhub.models import AbuseAlert
from collabhub.notifications import alerts

from tests.helpers import NOW


@pytest.fixture
def alert():
    return AbuseAlert(
        user_id_prefix="user-abc",
        violation_type="auth_failure",
        violation_count=5,
        timestamp=NOW,
    )


@pytest.fixture
def mock_webhook(monkeypatch):
    """Route the module's AsyncClient through an in-process transport."""
    requests = []
    state = {"status": 200, "error": None}

    def handler(request: httpx.Request) -> httpx.Response:
        if state["error"]:
            raise state["error"]
        requests.append(request)
        return httpx.Response(state["status"])

    real_client = httpx.AsyncClient

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(alerts.httpx, "AsyncClient", client_factory)
    return requests, state


def test_format_alert_text(alert):
    text = alerts.format_alert_text(alert)
    assert "user-abc" in text
    assert "5× auth_failure" in text
    assert text.startswith("🚨 Repeated security violations detected")


@pytest.mark.asyncio
async def test_dry_run_returns_payload(alert, mock_webhook):
    requests, _ = mock_webhook
    out = await alerts.post_alert_to_webhook(alert, url="https://hooks.example/x", dry_run=True)
    payload = json.loads(out)
    assert payload["alert"]["violation_type"] == "auth_failure"
    assert payload["alert"]["user_id_prefix"] == "user-abc"
    assert requests == []


@pytest.mark.asyncio
async def test_skipped_without_url(alert, mock_webhook, monkeypatch):
    monkeypatch.setattr(alerts.Config, "SECURITY_WEBHOOK_URL", "")
    requests, _ = mock_webhook
    assert await alerts.post_alert_to_webhook(alert) == "Skipped"
    assert requests == []


@pytest.mark.asyncio
async def test_posted(alert, mock_webhook):
    requests, _ = mock_webhook
    assert await alerts.post_alert_to_webhook(alert, url="https://hooks.example/x") == "Posted"
    assert len(requests) == 1
    body = json.loads(requests[0].content)
    assert body["alert"]["violation_count"] == 5
    assert "text" in body


@pytest.mark.asyncio
async def test_http_error_is_logged_not_raised(alert, mock_webhook, caplog):
    _, state = mock_webhook
    state["status"] = 500
    assert await alerts.post_alert_to_webhook(alert, url="https://hooks.example/x") == "Failed"
    assert "Failed to post security alert" in caplog.text


@pytest.mark.asyncio
async def test_connection_error(alert, mock_webhook):
    _, state = mock_webhook
    state["error"] = httpx.ConnectError("connection refused")
    assert await alerts.post_alert_to_webhook(alert, url="https://hooks.example/x") == "Failed"


class TestForwardAlert:
    @pytest.fixture
    def sync_webhook(self, monkeypatch):
        requests = []
        state = {"status": 200}
        real_client = httpx.Client

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(state["status"])

        monkeypatch.setattr(
            alerts.httpx,
            "Client",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )
        return requests, state

    def test_posted(self, alert, sync_webhook):
        requests, _ = sync_webhook
        assert alerts.forward_alert(alert, url="https://hooks.example/x") == "Posted"
        assert json.loads(requests[0].content)["alert"]["violation_type"] == "auth_failure"

    def test_skipped_without_url(self, alert, sync_webhook, monkeypatch):
        monkeypatch.setattr(alerts.Config, "SECURITY_WEBHOOK_URL", "")
        requests, _ = sync_webhook
        assert alerts.forward_alert(alert) == "Skipped"
        assert requests == []

    def test_http_error_is_logged_not_raised(self, alert, sync_webhook, caplog):
        _, state = sync_webhook
        state["status"] = 503
        assert alerts.forward_alert(alert, url="https://hooks.example/x") == "Failed"
        assert "Failed to post security alert" in caplog.text
