"""Webhook client for alert payloads.

Uses raw HTTP POST via requests. Delivery failures are logged and reported
through the return value; they never raise.
"""
import logging
import requests

logger = logging.getLogger("sleepmonitor.webhook")


class WebhookClient:
    """Thin wrapper around a JSON webhook endpoint."""

    def __init__(self, url: str, timeout: int = 30):
        self.url = url
        self.timeout = timeout

    def post(self, payload: dict) -> bool:
        """POST ``payload`` as JSON. Returns True on a 2xx response."""
        try:
            resp = requests.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Webhook error: %s", e)
            return False

        if not resp.ok:
            logger.error("Webhook failed: HTTP %s %s", resp.status_code, resp.reason or "")
            logger.error("Webhook response: %s", resp.text)
            return False
        return True
