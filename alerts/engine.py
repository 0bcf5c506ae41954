"""Sleep evaluation engine: poor-night predicate, streak, escalation."""
import logging
from models.alerts import AlertResult
from models.enums import AlertKind

logger = logging.getLogger("sleepmonitor.alerts.engine")


def is_poor_night(record, thresholds):
    """A night is poor if it misses any threshold. Missing latency never counts."""
    latency = record.sleep_latency_min
    return (
        record.score < thresholds.score_threshold
        or record.total_sleep_min < thresholds.min_total_sleep_min
        or (latency is not None and latency > thresholds.max_latency_min)
    )


def count_streak(records, thresholds):
    """Consecutive poor nights from the most recent record; stops at the first good night."""
    streak = 0
    for record in records:
        if not is_poor_night(record, thresholds):
            break
        streak += 1
    return streak


def analyze_sleep(records, thresholds):
    """Evaluate the latest of ``records`` (most recent first).

    Returns None when there is nothing to evaluate.
    """
    if not records:
        return None

    latest = records[0]
    poor_night = is_poor_night(latest, thresholds)
    return AlertResult(
        poor_night=poor_night,
        streak=count_streak(records, thresholds) if poor_night else 0,
        sleep_score=latest.score,
        total_sleep_min=latest.total_sleep_min,
        sleep_latency_min=latest.sleep_latency_min,
        hrv_avg_ms=latest.average_hrv,
        date=latest.end_time,
    )


def classify(result, thresholds):
    """Escalation policy: streak alert once the streak reaches the threshold."""
    if result is None or not result.poor_night:
        return AlertKind.NONE
    if result.streak >= thresholds.streak_threshold:
        return AlertKind.STREAK
    return AlertKind.POOR_SLEEP


class AlertEngine:
    def __init__(self, thresholds, channels=None):
        self.thresholds = thresholds
        self.channels = channels or []

    def evaluate(self, records):
        return analyze_sleep(records, self.thresholds)

    def check(self, records):
        """Evaluate records and dispatch a payload to every channel if the night was poor.

        Returns ``(result, payload)``; payload is None when no alert fires.
        """
        from alerts.payload import build_payload

        result = self.evaluate(records)
        payload = build_payload(result, self.thresholds)
        if payload is None:
            return result, None

        for channel in self.channels:
            try:
                channel.send(payload)
            except Exception as e:
                logger.error(f"Channel {type(channel).__name__} failed: {e}")
        return result, payload
