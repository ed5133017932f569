# systems/time_effects.py

"""
Catch-up effects.

Effects run once per controller step, after time has advanced, and let
dependent systems keep pace when time moves faster than one tick per step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from world.time.config import EffectCondition

if TYPE_CHECKING:
    from engine.managers.time_controller import TimeController
    from world.level import Level
    from world.time.config import TimeConfig
    from world.time.sleep_status import SleepStatus
    from world.time.time_value import TimeValue


@dataclass(frozen=True)
class TimeContext:
    """
    What an effect gets to see about the step that just ran.

    elapsed_whole_ticks:
        ``floor(new_time) - floor(old_time)``; 0 on a fractional-only step.
    """
    controller: "TimeController"
    level: "Level"
    sleep_status: "SleepStatus"
    config: "TimeConfig"
    time: "TimeValue"
    time_delta: "TimeValue"
    elapsed_whole_ticks: int


class TimeEffect(ABC):
    """A handler invoked with the context of every time step."""

    @abstractmethod
    def on_time_tick(self, context: TimeContext) -> None:
        ...


class BlockEntityTimeEffect(TimeEffect):
    """
    Progresses block entities to match the current time-speed.

    The host already ticks block entities once per step, so only the extra
    ``elapsed_whole_ticks - 1`` steps are run here.
    """

    def __init__(self, condition: Optional[EffectCondition] = None) -> None:
        # None defers to the configured condition at dispatch time
        self.condition = condition

    def on_time_tick(self, context: TimeContext) -> None:
        condition = self.condition or context.config.block_entity_effect
        extra_ticks = context.elapsed_whole_ticks - 1

        if (
            extra_ticks <= 0
            or condition == EffectCondition.NEVER
            or (condition == EffectCondition.SLEEPING and context.sleep_status.all_awake())
        ):
            return

        for _ in range(extra_ticks):
            context.level.tick_block_entities()


class EffectRegistry:
    """
    Ordered registry of time effects.

    Effects are dispatched in registration order.
    """

    def __init__(self) -> None:
        self._effects: Dict[str, TimeEffect] = {}

    def register(self, effect_id: str, effect: TimeEffect) -> None:
        if effect_id in self._effects:
            raise ValueError(f"Time effect '{effect_id}' is already registered")
        self._effects[effect_id] = effect

    def unregister(self, effect_id: str) -> Optional[TimeEffect]:
        return self._effects.pop(effect_id, None)

    def get(self, effect_id: str) -> Optional[TimeEffect]:
        return self._effects.get(effect_id)

    def is_registered(self, effect_id: str) -> bool:
        return effect_id in self._effects

    def entries(self) -> List[Tuple[str, TimeEffect]]:
        return list(self._effects.items())

    def dispatch(self, context: TimeContext) -> None:
        for effect in list(self._effects.values()):
            effect.on_time_tick(context)

    def __len__(self) -> int:
        return len(self._effects)


def create_default_registry() -> EffectRegistry:
    """Registry holding the built-in effects."""
    registry = EffectRegistry()
    registry.register("block_entity", BlockEntityTimeEffect())
    return registry
