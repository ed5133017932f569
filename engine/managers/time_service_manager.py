"""
Time service management.

Maps level ids to their TimeController and routes host callbacks to them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Hashable, Optional

from engine.error_handler import get_logger
from systems.time_effects import EffectRegistry, create_default_registry

from .time_controller import TimeController

if TYPE_CHECKING:
    from engine.net.broadcast import Broadcaster
    from world.level import Level
    from world.time.config import TimeConfig

logger = get_logger("time_services")


class TimeServiceManager:
    """
    Owns one TimeController per managed level.

    Responsibilities:
    - Create a controller when a level loads and drop it when it unloads
    - Attach derived levels to their parent's controller instead
    - Skip levels listed in the config's excluded ids
    - Forward sleep/wake and participant events to the right controller
    """

    def __init__(
        self,
        config: "TimeConfig",
        broadcaster: Optional["Broadcaster"] = None,
        effects: Optional[EffectRegistry] = None,
    ) -> None:
        self.config = config
        self.broadcaster = broadcaster
        self.effects = effects if effects is not None else create_default_registry()
        self.controllers: Dict[str, TimeController] = {}
        self._derived_parents: Dict[str, str] = {}

    def get(self, level_id: str) -> Optional[TimeController]:
        return self.controllers.get(level_id)

    def has_controller(self, level_id: str) -> bool:
        return level_id in self.controllers

    # ------------------------------------------------------------------
    # Level lifecycle
    # ------------------------------------------------------------------

    def on_level_load(self, level: "Level") -> Optional[TimeController]:
        """
        Called by the host when a level becomes active.

        Returns:
            The new controller, or None if the level is excluded or derived
        """
        if level.level_id in self.config.excluded_level_ids:
            logger.info("Level %s is excluded from time control", level.level_id)
            return None

        if level.is_derived:
            self._derived_parents[level.level_id] = level.parent_id
            parent = self.controllers.get(level.parent_id)
            if parent is not None:
                parent.attach_derived_level(level.level_id)
            return None

        controller = TimeController(
            level,
            self.config,
            effects=self.effects,
            broadcaster=self.broadcaster,
        )
        for derived_id, parent_id in self._derived_parents.items():
            if parent_id == level.level_id:
                controller.attach_derived_level(derived_id)

        if level.level_id in self.controllers:
            logger.info("Replacing time controller for level %s", level.level_id)
        self.controllers[level.level_id] = controller
        logger.info("Time controller created for level %s", level.level_id)
        return controller

    def on_level_unload(self, level: "Level") -> None:
        """Called by the host when a level becomes inactive."""
        parent_id = self._derived_parents.pop(level.level_id, None)
        if parent_id is not None:
            parent = self.controllers.get(parent_id)
            if parent is not None:
                parent.detach_derived_level(level.level_id)
            return

        if self.controllers.pop(level.level_id, None) is not None:
            logger.info("Time controller removed for level %s", level.level_id)

    def on_level_tick(self, level_id: str) -> None:
        """Called by the host at the start of every simulation step of a level."""
        controller = self.controllers.get(level_id)
        if controller is not None:
            controller.tick()

    # ------------------------------------------------------------------
    # Participants
    # ------------------------------------------------------------------

    def on_participants_changed(self, level_id: str, participant_count: int) -> None:
        controller = self.controllers.get(level_id)
        if controller is not None:
            controller.sleep_status.update(participant_count)

    def on_sleep(self, level_id: str, participant_id: Hashable) -> None:
        controller = self.controllers.get(level_id)
        if controller is not None:
            controller.sleep_status.add_sleeper(participant_id)

    def on_wake(self, level_id: str, participant_id: Hashable) -> None:
        controller = self.controllers.get(level_id)
        if controller is not None:
            controller.sleep_status.remove_sleeper(participant_id)
