"""
Time system.

Tick-based time values, sleep tracking, the time-speed model and its
configuration.
"""

from .time_value import TimeValue, time_of_day
from .sleep_status import SleepStatus
from .speed import time_speed, normalized_tunable_sigmoid, lerp
from .config import TimeConfig, ClientTimeConfig, EffectCondition

__all__ = [
    "TimeValue",
    "time_of_day",
    "SleepStatus",
    "time_speed",
    "normalized_tunable_sigmoid",
    "lerp",
    "TimeConfig",
    "ClientTimeConfig",
    "EffectCondition",
]
