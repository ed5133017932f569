"""
Observer-side time interpolation.

Detects time updates from the authority and eases the displayed clock toward
them over the following frames, so the sky never visibly jumps.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from engine.error_handler import get_logger
from settings import DAY_LENGTH_TICKS
from world.time.config import ClientTimeConfig
from world.time.time_value import time_of_day

if TYPE_CHECKING:
    from world.level import Level

logger = get_logger("interpolator")


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class TimeInterpolator:
    """
    Critically damped follower of the authoritative time of one level.

    Created uninitialized; the first frame reads the level's current time as
    both the target and the displayed value.
    """

    def __init__(self, level: "Level") -> None:
        self.level = level
        self.initialized = False
        self.target_time: int = 0
        self.time_velocity: float = 0.0
        self.last_time: int = 0
        self.last_partial_tick: float = 0.0

    def _init(self) -> None:
        time = self.level.get_day_time()
        self.target_time = time
        self.last_time = time
        self.initialized = True

    def partial_tick(self, partial_tick: float) -> None:
        """
        Advance the displayed time for one render frame.

        Args:
            partial_tick: Progress from the last simulation step to the next, in [0, 1)
        """
        if not self.initialized:
            self._init()

        tick_delta = self._partial_time_delta(partial_tick)
        self._update_target_time()
        self._interpolate_time(tick_delta)

    def _partial_time_delta(self, partial_tick: float) -> float:
        """Fraction of a step since the previous frame. Assumes at least one frame per step."""
        delta = partial_tick - self.last_partial_tick
        if delta < 0:
            delta += 1
        self.last_partial_tick = partial_tick
        return delta

    def _update_target_time(self) -> None:
        """
        Pick up a new authoritative time and restore the displayed one.

        A jump of more than a day is not swept through: the displayed time
        moves to the target's day, keeping its time of day, and eases from
        there.
        """
        time = self.level.get_day_time()
        if time == self.last_time:
            return

        self.target_time = time

        if abs(self.last_time - time) > DAY_LENGTH_TICKS:
            realigned = time - time_of_day(time) + time_of_day(self.last_time)
            if realigned < 0:
                logger.warning(
                    "Could not realign time on level %s (target %d), snapping",
                    self.level.level_id,
                    time,
                )
                realigned = time
                self.time_velocity = 0.0
            else:
                logger.debug("Realigned time on level %s to day of %d", self.level.level_id, time)
            self.last_time = realigned

        self.level.set_day_time(self.last_time)

    def _interpolate_time(self, tick_delta: float) -> None:
        time = self.level.get_day_time()

        duration = 1.0  # interpolate over one step
        omega = 2.0 / duration
        x = omega * tick_delta
        exp = 1.0 / (1.0 + x + 0.48 * x * x + 0.235 * x * x * x)
        change = time - self.target_time

        temp = (self.time_velocity + omega * change) * tick_delta
        time = self.target_time + int((change + temp) * exp)
        self.time_velocity = (self.time_velocity - omega * temp) * exp

        # Reached or crossed the target
        if _sign(change) != _sign(time - self.target_time):
            time = self.target_time
            self.time_velocity = 0.0

        self._set_day_time(time)

    def _set_day_time(self, time: int) -> None:
        self.level.set_day_time(time)
        self.last_time = time

    def undo_autonomous_tick(self) -> None:
        """Cancel the +1 the host client adds every step. Call once per step."""
        if self.level.daylight_cycle_enabled():
            self.level.set_day_time(self.level.get_day_time() - 1)


class ClientTimeManager:
    """Maps observed level ids to their interpolator."""

    def __init__(self, config: Optional[ClientTimeConfig] = None) -> None:
        self.config = config or ClientTimeConfig()
        self.interpolators: Dict[str, TimeInterpolator] = {}

    def get(self, level_id: str) -> Optional[TimeInterpolator]:
        return self.interpolators.get(level_id)

    def on_level_load(self, level: "Level") -> Optional[TimeInterpolator]:
        """Called when a level becomes active on this observer."""
        if level.level_id in self.config.excluded_level_ids:
            return None
        interpolator = TimeInterpolator(level)
        self.interpolators[level.level_id] = interpolator
        return interpolator

    def on_level_unload(self, level: "Level") -> None:
        self.interpolators.pop(level.level_id, None)

    def on_render_frame(self, level_id: str, partial_tick: float, paused: bool = False) -> None:
        """Called every render frame for the level currently shown."""
        interpolator = self.interpolators.get(level_id)
        if paused or interpolator is None:
            return
        interpolator.partial_tick(partial_tick)

    def on_client_tick(self, level_id: str, paused: bool = False) -> None:
        """Called at the end of every client simulation step."""
        interpolator = self.interpolators.get(level_id)
        if paused or interpolator is None:
            return
        interpolator.undo_autonomous_tick()
