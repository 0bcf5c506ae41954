"""Alert notification channels."""
import json
import logging
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

logger = logging.getLogger("sleepmonitor.alerts.channels")


@runtime_checkable
class AlertChannel(Protocol):
    def send(self, payload: dict) -> bool: ...


class ConsoleChannel:
    """Log the payload instead of delivering it. Used when no webhook is configured."""

    def send(self, payload):
        logger.info(f"Would notify: {payload['message']} {json.dumps(payload['meta'])}")
        return True


class WebhookChannel:
    """POST payloads to the configured webhook."""

    def __init__(self, client):
        self.client = client

    def send(self, payload):
        sent = self.client.post(payload)
        if sent:
            meta = payload["meta"]
            logger.info(
                f"Alert sent: score {meta['sleep_score']}, total {meta['total_sleep_min']} min, "
                f"streak {meta.get('streak', 'n/a')}."
            )
        return sent


class FileChannel:
    """Append payloads to a JSON lines log file."""

    def __init__(self, log_path="data/alerts.jsonl"):
        self.log_path = log_path

    def send(self, payload):
        entry = {"timestamp": datetime.now(timezone.utc).isoformat(), **payload}
        try:
            with open(self.log_path, "a") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError as e:
            logger.warning(f"Failed to write alert to file: {e}")
            return False
        return True


def build_channels(config):
    """Channels for a run: webhook when a URL is set, else console; plus an optional file log."""
    from notifications.webhook import WebhookClient

    url = config.get("webhook", {}).get("url")
    if url:
        timeout = config.get("http", {}).get("timeout", 30)
        channels = [WebhookChannel(WebhookClient(url, timeout=timeout))]
    else:
        channels = [ConsoleChannel()]

    log_path = config.get("alerts", {}).get("log_path")
    if log_path:
        channels.append(FileChannel(log_path))
    return channels
