"""SleepMonitor - Central orchestrator for fetching and evaluating sleep."""
import logging

logger = logging.getLogger("sleepmonitor.monitor")


class SleepMonitor:
    def __init__(self, api, alert_engine, config=None):
        self.api = api
        self.alert_engine = alert_engine
        self.config = config or {}

    @property
    def window_days(self):
        return self.config.get("oura", {}).get("window_days", 7)

    def fetch_records(self):
        """Completed sessions in the trailing window, most recent first."""
        records = self.api.get_completed_sleep(days=self.window_days)
        logger.debug(f"{len(records)} completed session(s) in the last {self.window_days} days")
        return records

    def run_once(self):
        """Fetch, evaluate and notify once.

        Returns ``(result, payload)``. Both are None when the window holds no
        completed sessions; payload is None when the night needs no alert.
        Provider errors propagate.
        """
        records = self.fetch_records()
        if not records:
            logger.info("No completed sleep records in window.")
            return None, None

        result, payload = self.alert_engine.check(records)
        if payload is None:
            logger.info(f"No alert: score {result.sleep_score}, total {result.total_sleep_min} min.")
        return result, payload
