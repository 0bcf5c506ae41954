"""Tests for the webhook client and alert channels."""
import json
import logging
import pytest
import requests
from unittest.mock import patch, MagicMock

from alerts.channels import ConsoleChannel, FileChannel, WebhookChannel, build_channels, AlertChannel
from notifications.webhook import WebhookClient

PAYLOAD = {
    "title": "Poor Sleep Alert",
    "message": "Your sleep last night fell below thresholds.",
    "meta": {"sleep_score": 65, "total_sleep_min": 320, "sleep_latency_min": 45,
             "hrv_avg_ms": 35, "date": "2025-10-29T08:00:00+00:00"},
}


# ── WebhookClient ────────────────────────────────────

class TestWebhookClient:
    @patch("notifications.webhook.requests.post")
    def test_posts_json(self, mock_post):
        mock_post.return_value = MagicMock(ok=True, status_code=200)
        client = WebhookClient("https://hooks.example.com/abc", timeout=5)
        assert client.post(PAYLOAD) is True

        mock_post.assert_called_once()
        assert mock_post.call_args[0][0] == "https://hooks.example.com/abc"
        assert mock_post.call_args.kwargs["json"] == PAYLOAD
        assert mock_post.call_args.kwargs["timeout"] == 5

    @patch("notifications.webhook.requests.post")
    def test_non_2xx_logged_not_raised(self, mock_post, caplog):
        mock_post.return_value = MagicMock(ok=False, status_code=502, reason="Bad Gateway",
                                           text="upstream down")
        with caplog.at_level(logging.ERROR, logger="sleepmonitor.webhook"):
            assert WebhookClient("https://hooks.example.com/abc").post(PAYLOAD) is False
        assert "HTTP 502" in caplog.text
        assert "upstream down" in caplog.text

    @patch("notifications.webhook.requests.post")
    def test_transport_error_swallowed(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")
        assert WebhookClient("https://hooks.example.com/abc").post(PAYLOAD) is False


# ── Channels ─────────────────────────────────────────

def test_channels_satisfy_protocol(tmp_path):
    for ch in (ConsoleChannel(), FileChannel(str(tmp_path / "a.jsonl")),
               WebhookChannel(MagicMock())):
        assert isinstance(ch, AlertChannel)


def test_console_channel_logs_payload(caplog):
    with caplog.at_level(logging.INFO, logger="sleepmonitor.alerts.channels"):
        assert ConsoleChannel().send(PAYLOAD) is True
    assert "Would notify" in caplog.text
    assert "fell below thresholds" in caplog.text


def test_webhook_channel_delegates():
    client = MagicMock()
    client.post.return_value = True
    assert WebhookChannel(client).send(PAYLOAD) is True
    client.post.assert_called_once_with(PAYLOAD)


def test_webhook_channel_reports_failure():
    client = MagicMock()
    client.post.return_value = False
    assert WebhookChannel(client).send(PAYLOAD) is False


def test_file_channel_appends_jsonl(tmp_path):
    path = tmp_path / "alerts.jsonl"
    ch = FileChannel(str(path))
    ch.send(PAYLOAD)
    ch.send(PAYLOAD)

    lines = path.read_text().strip().splitlines()
    assert len(lines) == 2
    entry = json.loads(lines[0])
    assert entry["title"] == "Poor Sleep Alert"
    assert entry["meta"]["sleep_score"] == 65
    assert "timestamp" in entry


def test_file_channel_bad_path(tmp_path):
    ch = FileChannel(str(tmp_path / "missing" / "alerts.jsonl"))
    assert ch.send(PAYLOAD) is False


# ── build_channels ───────────────────────────────────

def test_build_channels_without_webhook():
    channels = build_channels({"webhook": {"url": ""}, "alerts": {"log_path": ""}})
    assert len(channels) == 1
    assert isinstance(channels[0], ConsoleChannel)


def test_build_channels_with_webhook_and_log(tmp_path):
    config = {
        "webhook": {"url": "https://hooks.example.com/abc"},
        "alerts": {"log_path": str(tmp_path / "alerts.jsonl")},
        "http": {"timeout": 10},
    }
    channels = build_channels(config)
    assert isinstance(channels[0], WebhookChannel)
    assert channels[0].client.url == "https://hooks.example.com/abc"
    assert channels[0].client.timeout == 10
    assert isinstance(channels[1], FileChannel)
