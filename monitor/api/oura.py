"""Oura API v2 client for sleep sessions."""
import logging
from datetime import datetime, timedelta, timezone
from config import ConfigError
from utils.http_client import APIError, HTTPClient
from models.sleep import SleepRecord

logger = logging.getLogger("sleepmonitor.oura")

DEFAULT_BASE_URL = "https://api.ouraring.com/v2/usercollection"


def sleep_window(days=7, today=None):
    """Return (start_date, end_date) ISO strings for the trailing window ending today (UTC)."""
    today = today or datetime.now(timezone.utc).date()
    start = today - timedelta(days=days)
    return start.isoformat(), today.isoformat()


class OuraClient:
    def __init__(self, token, base_url=DEFAULT_BASE_URL, timeout=30):
        if not token:
            raise ConfigError("OURA_TOKEN is not set")
        self.client = HTTPClient(base_url=base_url, token=token, timeout=timeout, source="Oura API")

    def get_sleep(self, start_date, end_date):
        """Fetch every sleep item in the date window, following pagination."""
        params = {"start_date": start_date, "end_date": end_date}
        items = []
        seen_tokens = set()
        while True:
            data = self.client.get_json("/sleep", params=params)
            items.extend(data.get("data") or [])
            next_token = data.get("next_token")
            if not next_token:
                break
            if next_token in seen_tokens:
                raise APIError(f"Oura API repeated page token {next_token!r}", source="Oura API")
            seen_tokens.add(next_token)
            params = {**params, "next_token": next_token}
        logger.debug(f"Fetched {len(items)} sleep items for {start_date}..{end_date}")
        return items

    def get_completed_sleep(self, days=7, today=None):
        """Completed sessions in the trailing window, most recent first."""
        start_date, end_date = sleep_window(days, today)
        records = [SleepRecord.from_api(item) for item in self.get_sleep(start_date, end_date)]
        completed = [r for r in records if r.is_completed]
        completed.sort(key=lambda r: r.ended_at, reverse=True)
        return completed
