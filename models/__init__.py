"""Data models."""
from models.enums import SessionType, AlertKind, COMPLETED_TYPES
from models.sleep import SleepRecord, Thresholds
from models.alerts import AlertResult
