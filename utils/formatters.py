"""Formatting utilities for display."""
from datetime import datetime


def format_minutes(minutes):
    """Format a minute count as hours and minutes: 320 → '5h 20m'."""
    if minutes is None:
        return "N/A"
    minutes = int(minutes)
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h {mins:02d}m"


def format_optional(value, suffix=""):
    """Render None as 'N/A', otherwise the value with an optional suffix."""
    if value is None:
        return "N/A"
    return f"{value}{suffix}"


def format_night(end_time):
    """Short date label for a session end timestamp: 'Wed Oct 29'."""
    if not end_time:
        return "N/A"
    try:
        dt = datetime.fromisoformat(str(end_time).replace("Z", "+00:00"))
    except ValueError:
        return str(end_time)[:10]
    return dt.strftime("%a %b %d")
