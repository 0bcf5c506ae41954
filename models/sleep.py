"""Dataclasses for sleep sessions and evaluation thresholds."""
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from models.enums import COMPLETED_TYPES

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class SleepRecord:
    """One sleep session as returned by the provider. Durations are in seconds."""
    score: float = 0
    total_sleep_duration: float = 0
    sleep_latency: Optional[float] = None
    average_hrv: Optional[float] = None
    end_time: str = ""
    type: str = "long_sleep"
    day: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_api(cls, item: dict) -> "SleepRecord":
        score = item.get("score")
        total = item.get("total_sleep_duration")
        return cls(
            score=score if score is not None else 0,
            total_sleep_duration=total if total is not None else 0,
            sleep_latency=item.get("sleep_latency"),
            average_hrv=item.get("average_hrv"),
            end_time=item.get("end_time") or "",
            type=item.get("type") or "",
            day=item.get("day"),
            id=item.get("id"),
        )

    @property
    def total_sleep_min(self) -> int:
        return math.floor(self.total_sleep_duration / 60)

    @property
    def sleep_latency_min(self) -> Optional[int]:
        if self.sleep_latency is None:
            return None
        return math.floor(self.sleep_latency / 60)

    @property
    def is_completed(self) -> bool:
        return self.type in COMPLETED_TYPES

    @property
    def ended_at(self) -> datetime:
        """End time as an aware datetime; unparseable values sort oldest."""
        if not self.end_time:
            return _EPOCH
        try:
            dt = datetime.fromisoformat(self.end_time.replace("Z", "+00:00"))
        except ValueError:
            return _EPOCH
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt


@dataclass(frozen=True)
class Thresholds:
    score_threshold: float = 75
    min_total_sleep_min: float = 360
    max_latency_min: float = 30
    streak_threshold: int = 2

    @classmethod
    def from_config(cls, config: dict) -> "Thresholds":
        t = config.get("thresholds", {})
        return cls(
            score_threshold=t.get("sleep_score", 75),
            min_total_sleep_min=t.get("min_total_sleep_min", 360),
            max_latency_min=t.get("max_sleep_latency_min", 30),
            streak_threshold=t.get("poor_nights_streak", 2),
        )
