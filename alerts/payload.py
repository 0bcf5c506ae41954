"""Notification payload formatting."""
from alerts.engine import classify
from models.enums import AlertKind

STREAK_TITLE = "⚠️ Sleep Streak Alert"
POOR_SLEEP_TITLE = "Poor Sleep Alert"


def build_payload(result, thresholds):
    """Build the webhook payload for ``result``, or None when no alert applies."""
    kind = classify(result, thresholds)
    if kind is AlertKind.NONE:
        return None

    meta = {
        "sleep_score": result.sleep_score,
        "total_sleep_min": result.total_sleep_min,
        "sleep_latency_min": result.sleep_latency_min,
        "hrv_avg_ms": result.hrv_avg_ms,
        "date": result.date,
    }

    if kind is AlertKind.STREAK:
        title = STREAK_TITLE
        message = (
            f"You've had {result.streak} consecutive poor nights. "
            "Consider reviewing your sleep routine."
        )
        meta["streak"] = result.streak
    else:
        latency = result.sleep_latency_min if result.sleep_latency_min is not None else "N/A"
        title = POOR_SLEEP_TITLE
        message = (
            "Your sleep last night fell below thresholds. "
            f"Score: {result.sleep_score}, Total: {result.total_sleep_min} min, "
            f"Latency: {latency} min."
        )

    return {"title": title, "message": message, "meta": meta}
