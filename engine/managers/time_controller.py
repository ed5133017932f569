"""
Authoritative time controller.

Owns the clock of one level: advances it every simulation step at the current
time-speed, runs catch-up effects, ends sleep cycles at morning and broadcasts
the result to observers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional, Set

from engine.error_handler import get_logger
from engine.net.packets import TimePacket
from settings import DAY_LENGTH_TICKS, OVERFLOW_THRESHOLD
from systems.time_effects import EffectRegistry, TimeContext, create_default_registry
from telemetry.logger import telemetry
from world.time.sleep_status import SleepStatus
from world.time.speed import time_speed
from world.time.time_value import TimeValue

if TYPE_CHECKING:
    from engine.net.broadcast import Broadcaster
    from world.level import Level
    from world.time.config import TimeConfig

logger = get_logger("controller")

SleepFinishedListener = Callable[["Level", int], None]


class TimeController:
    """
    Drives the clock of a single level.

    The controller is the only writer of the level's time. The host calls
    tick() once per simulation step; the host's own +1 per step is cancelled
    at the end of every tick so the net change is exactly the computed delta.
    """

    def __init__(
        self,
        level: "Level",
        config: "TimeConfig",
        effects: Optional[EffectRegistry] = None,
        broadcaster: Optional["Broadcaster"] = None,
        sleep_status: Optional[SleepStatus] = None,
        overflow_threshold: int = OVERFLOW_THRESHOLD,
    ) -> None:
        self.level = level
        self.config = config
        self.effects = effects if effects is not None else create_default_registry()
        self.broadcaster = broadcaster
        self.sleep_status = sleep_status if sleep_status is not None else SleepStatus()
        self.overflow_threshold = overflow_threshold

        self.derived_level_ids: Set[str] = set()
        self._time_fraction: float = 0.0
        self._sleep_finished_listeners: List[SleepFinishedListener] = []

    # ------------------------------------------------------------------
    # Clock access
    # ------------------------------------------------------------------

    def get_day_time(self) -> TimeValue:
        """The level's time, including the fractional accumulator."""
        return TimeValue(self.level.get_day_time(), self._time_fraction)

    def set_day_time(self, time: TimeValue) -> TimeValue:
        """Store the whole ticks on the level and keep the fraction here."""
        self._time_fraction = time.fraction
        self.level.set_day_time(time.ticks)
        return time

    def time_speed(self, time: TimeValue) -> float:
        return time_speed(time, self.sleep_status, self.config)

    # ------------------------------------------------------------------
    # Step
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Perform all time and sleep calculations. Should run once per step."""
        if not self.level.daylight_cycle_enabled():
            return

        old_time = self.get_day_time()
        time_delta = self._tick_time()
        time = self.get_day_time()

        context = TimeContext(
            controller=self,
            level=self.level,
            sleep_status=self.sleep_status,
            config=self.config,
            time=time,
            time_delta=time_delta,
            elapsed_whole_ticks=max(0, time.ticks - old_time.ticks),
        )
        self.effects.dispatch(context)

        if self._anyone_sleeping() and TimeValue.crossed_morning(old_time, time):
            self._handle_morning()

        self._prevent_time_overflow()
        self.broadcast_time()

        telemetry.tick_step()
        if telemetry.should_log_step():
            telemetry.log(
                "time_step",
                level=self.level.level_id,
                time=float(self.get_day_time()),
                delta=float(time_delta),
            )

        self._compensate_host_tick()

    def _tick_time(self) -> TimeValue:
        """Advance time by the current time-speed and return the elapsed amount."""
        time = self.get_day_time()

        time_delta = TimeValue.from_float(self.time_speed(time))
        time_delta = self._correct_for_overshoot(time, time_delta)

        self.set_day_time(time + time_delta)
        return time_delta

    def _anyone_sleeping(self) -> bool:
        return self.config.enable_sleep_feature and not self.sleep_status.all_awake()

    def _correct_for_overshoot(self, time: TimeValue, time_delta: TimeValue) -> TimeValue:
        """
        Re-rate the part of a step that lands past a speed breakpoint.

        While everyone is awake the breakpoints are day_start and night_start;
        while anyone sleeps it is the start of the next day.
        """
        if float(time_delta) == 0.0:
            return time_delta

        next_time = time + time_delta
        time_of_day = time.time_of_day()
        next_time_of_day = next_time.time_of_day()

        if not self._anyone_sleeping():
            for boundary in (self.config.night_start, self.config.day_start):
                if TimeValue(boundary).between_mod(time_of_day, next_time_of_day):
                    time_until = (TimeValue(boundary) - time_of_day).time_of_day()
                    return self._split_at_breakpoint(time_until, time_delta, self.time_speed(next_time))
            return time_delta

        time_until_morning = TimeValue(DAY_LENGTH_TICKS) - time_of_day
        if time_until_morning < time_delta:
            return self._split_at_breakpoint(time_until_morning, time_delta, self.config.day_speed)
        return time_delta

    @staticmethod
    def _split_at_breakpoint(time_until: TimeValue, time_delta: TimeValue, next_speed: float) -> TimeValue:
        # Unused share of the step, re-spent at the post-breakpoint speed
        remainder_ratio = 1.0 - time_until.divide(time_delta)
        return time_until + next_speed * remainder_ratio

    def _handle_morning(self) -> None:
        time_ticks = self.level.get_day_time()

        for listener in list(self._sleep_finished_listeners):
            listener(self.level, time_ticks)

        self.sleep_status.remove_all_sleepers()
        self.level.wake_up_all()

        if self.level.weather_cycle_enabled() and self.config.clear_weather_on_wake:
            self.level.stop_weather()

        logger.debug("Sleep cycle complete on level: %s", self.level.level_id)
        telemetry.log("sleep_cycle_complete", level=self.level.level_id, time=time_ticks)

    def _prevent_time_overflow(self) -> None:
        """Keep the counter below the threshold, modulo a whole number of lunar cycles."""
        time = self.get_day_time()
        if time.ticks > self.overflow_threshold:
            self.set_day_time(time - self.overflow_threshold)
            logger.debug("Time overflow guard applied on level: %s", self.level.level_id)
            telemetry.log("time_overflow", level=self.level.level_id, time=time.ticks)

    def _compensate_host_tick(self) -> None:
        """Undo the +1 the host adds to the clock after every step."""
        self.level.set_day_time(self.level.get_day_time() - 1)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def manages_level(self, level_id: str) -> bool:
        """True for this controller's level and any level derived from it."""
        return level_id == self.level.level_id or level_id in self.derived_level_ids

    def attach_derived_level(self, level_id: str) -> None:
        self.derived_level_ids.add(level_id)

    def detach_derived_level(self, level_id: str) -> None:
        self.derived_level_ids.discard(level_id)

    def broadcast_time(self) -> int:
        """Send the current time to every observer of a managed level."""
        if self.broadcaster is None:
            return 0
        return self.broadcaster.broadcast(TimePacket.from_level(self.level), self.manages_level)

    def add_sleep_finished_listener(self, listener: SleepFinishedListener) -> None:
        self._sleep_finished_listeners.append(listener)

    def remove_sleep_finished_listener(self, listener: SleepFinishedListener) -> None:
        if listener in self._sleep_finished_listeners:
            self._sleep_finished_listeners.remove(listener)
