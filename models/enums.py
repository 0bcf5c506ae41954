"""Enums for sleep session types and alert kinds."""
from enum import Enum


class SessionType(str, Enum):
    LONG_SLEEP = "long_sleep"
    SLEEP = "sleep"
    LATE_NAP = "late_nap"
    REST = "rest"
    DELETED = "deleted"


# Full overnight sessions; naps and rest periods are ignored
COMPLETED_TYPES = frozenset({SessionType.LONG_SLEEP.value, SessionType.SLEEP.value})


class AlertKind(str, Enum):
    NONE = "NONE"
    POOR_SLEEP = "POOR_SLEEP"
    STREAK = "STREAK"
