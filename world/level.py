"""
Level abstraction.

The day cycle engine never reaches into host internals; it talks to a level
through this interface. SimLevel is an in-memory implementation used by the
demo host and the tests.
"""

from abc import ABC, abstractmethod
from typing import Hashable, Optional, Set


class Level(ABC):
    """
    A world whose clock the engine drives (authority side) or displays
    (observer side).

    Derived levels (``parent_id`` set) share the clock of their parent.
    """

    def __init__(self, level_id: str, parent_id: Optional[str] = None) -> None:
        self.level_id = level_id
        self.parent_id = parent_id

    @property
    def is_derived(self) -> bool:
        return self.parent_id is not None

    @abstractmethod
    def get_day_time(self) -> int:
        """Raw tick count of the level clock."""
        ...

    @abstractmethod
    def set_day_time(self, ticks: int) -> None:
        ...

    def daylight_cycle_enabled(self) -> bool:
        """Whether the host advances this level's clock at all."""
        return True

    def weather_cycle_enabled(self) -> bool:
        return True

    def stop_weather(self) -> None:
        pass

    def wake_up_all(self) -> None:
        pass

    def tick_block_entities(self) -> None:
        pass


class SimLevel(Level):
    """
    In-memory level that behaves like a host level.

    ``tick()`` is the host's own per-step update: it advances the clock by one
    tick whenever the daylight cycle is enabled, which is the increment both
    the controller and the interpolator cancel.
    """

    def __init__(
        self,
        level_id: str,
        day_time: int = 0,
        parent_id: Optional[str] = None,
        daylight_cycle: bool = True,
        weather_cycle: bool = True,
    ) -> None:
        super().__init__(level_id, parent_id)
        self.day_time = day_time
        self.daylight_cycle = daylight_cycle
        self.weather_cycle = weather_cycle
        self.raining = False
        self.block_entity_ticks = 0
        self.sleeping: Set[Hashable] = set()

    def get_day_time(self) -> int:
        return self.day_time

    def set_day_time(self, ticks: int) -> None:
        self.day_time = int(ticks)

    def daylight_cycle_enabled(self) -> bool:
        return self.daylight_cycle

    def weather_cycle_enabled(self) -> bool:
        return self.weather_cycle

    def stop_weather(self) -> None:
        self.raining = False

    def wake_up_all(self) -> None:
        self.sleeping.clear()

    def tick_block_entities(self) -> None:
        self.block_entity_ticks += 1

    def tick(self) -> None:
        """Host update for one simulation step."""
        self.tick_block_entities()
        if self.daylight_cycle:
            self.day_time += 1
