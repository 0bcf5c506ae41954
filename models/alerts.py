"""Dataclass for a single sleep evaluation."""
from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class AlertResult:
    poor_night: bool = False
    streak: int = 0
    sleep_score: float = 0
    total_sleep_min: int = 0
    sleep_latency_min: Optional[int] = None
    hrv_avg_ms: Optional[float] = None
    date: Optional[str] = None

    def to_dict(self):
        return asdict(self)
