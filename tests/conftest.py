"""Shared test fixtures."""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import ENV_MAP
from models.sleep import SleepRecord, Thresholds


def make_record(score=82, minutes=420, latency_min=15, hrv=55,
                end_time="2025-10-27T08:00:00+00:00", type="long_sleep"):
    """Build a SleepRecord from minute values. latency_min=None means no latency reported."""
    return SleepRecord(
        score=score,
        total_sleep_duration=minutes * 60,
        sleep_latency=latency_min * 60 if latency_min is not None else None,
        average_hrv=hrv,
        end_time=end_time,
        type=type,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and any ./.env file."""
    for key in ENV_MAP:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def thresholds():
    return Thresholds()


@pytest.fixture
def poor_record():
    return make_record(score=65, minutes=320, latency_min=45, hrv=35,
                       end_time="2025-10-29T08:00:00+00:00")


@pytest.fixture
def good_record():
    return make_record()


@pytest.fixture
def mock_nights():
    """Two poor nights followed by a good one, most recent first."""
    return [
        make_record(score=65, minutes=320, latency_min=45, hrv=35,
                    end_time="2025-10-29T08:00:00+00:00"),
        make_record(score=68, minutes=340, latency_min=38, hrv=32,
                    end_time="2025-10-28T08:00:00+00:00"),
        make_record(score=82, minutes=420, latency_min=15, hrv=55,
                    end_time="2025-10-27T08:00:00+00:00"),
    ]


@pytest.fixture
def oura_items():
    """Raw provider items, unsorted, including a nap."""
    return [
        {"id": "a", "type": "long_sleep", "score": 82, "total_sleep_duration": 25200,
         "sleep_latency": 900, "average_hrv": 55, "end_time": "2025-10-27T08:00:00+00:00",
         "day": "2025-10-27"},
        {"id": "b", "type": "late_nap", "score": None, "total_sleep_duration": 1800,
         "sleep_latency": None, "average_hrv": None, "end_time": "2025-10-29T15:30:00+00:00",
         "day": "2025-10-29"},
        {"id": "c", "type": "long_sleep", "score": 65, "total_sleep_duration": 19200,
         "sleep_latency": 2700, "average_hrv": 35, "end_time": "2025-10-29T08:00:00+00:00",
         "day": "2025-10-29"},
        {"id": "d", "type": "sleep", "score": 68, "total_sleep_duration": 20400,
         "sleep_latency": 2280, "average_hrv": 32, "end_time": "2025-10-28T08:00:00+00:00",
         "day": "2025-10-28"},
    ]
