"""Alert system module."""
from alerts.engine import AlertEngine, analyze_sleep, count_streak, is_poor_night, classify
from alerts.payload import build_payload
from alerts.channels import ConsoleChannel, FileChannel, WebhookChannel, build_channels
