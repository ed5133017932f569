"""
Time-speed model.

Maps the current time and sleep state to a multiplier on the base rate of one
tick per simulation step. Pure functions only: the controller calls
time_speed() for both the current and the look-ahead time in a single step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .time_value import TimeValue

if TYPE_CHECKING:
    from .config import TimeConfig
    from .sleep_status import SleepStatus


def lerp(t: float, a: float, b: float) -> float:
    """Linearly interpolates between a (t=0) and b (t=1)."""
    return a + t * (b - a)


def normalized_tunable_sigmoid(ratio: float, curve: float) -> float:
    """
    Map ``ratio`` in [0, 1] to a weight in [0, 1] along an S-curve.

    The curve passes through (0, 0), (0.5, 0.5) and (1, 1) and is odd-symmetric
    about its midpoint. ``curve`` = 0 is the identity; as it approaches 1 the
    middle steepens into a step at 0.5.
    """
    ratio = min(1.0, max(0.0, ratio))
    x = 2.0 * ratio - 1.0
    k = -min(1.0, max(0.0, curve))

    denominator = k - 2.0 * k * abs(x) + 1.0
    if denominator == 0.0:
        # Only reachable at x == 0 with the steepest curve
        return 0.5

    y = (x - x * k) / denominator
    return (y + 1.0) / 2.0


def is_day(time: TimeValue, config: "TimeConfig") -> bool:
    """True when the time of day falls in [day_start, night_start)."""
    return time.between_mod(config.day_start, config.night_start)


def time_speed(time: TimeValue, sleep_status: "SleepStatus", config: "TimeConfig") -> float:
    """
    Calculate the time-speed multiplier at ``time``.

    A return value of 1 is the host's native rate. Predictions for times other
    than the current one assume the sleep state stays as it is.
    """
    if not config.enable_sleep_feature or sleep_status.all_awake():
        if is_day(time, config):
            return config.day_speed
        return config.night_speed

    if sleep_status.all_asleep() and config.sleep_speed_all >= 0:
        return config.sleep_speed_all

    weight = normalized_tunable_sigmoid(sleep_status.ratio(), config.sleep_speed_curve)
    return lerp(weight, config.sleep_speed_min, config.sleep_speed_max)
