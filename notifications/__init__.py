"""Outbound notification clients."""
from notifications.webhook import WebhookClient
