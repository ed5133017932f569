"""
Sleep tracking for a single level.
"""

from typing import Hashable, Set


class SleepStatus:
    """
    Tracks which participants of a level are asleep.

    The eligible participant count is pushed in by the host (spectators and
    the like are not counted); sleepers are added and removed as the host
    reports sleep/wake events.
    """

    def __init__(self, participant_count: int = 0) -> None:
        self._sleepers: Set[Hashable] = set()
        self._participant_count: int = max(0, participant_count)

    @property
    def participant_count(self) -> int:
        return self._participant_count

    def update(self, participant_count: int) -> None:
        """Set the number of eligible participants in the level."""
        self._participant_count = max(0, participant_count)

    def add_sleeper(self, participant_id: Hashable) -> None:
        self._sleepers.add(participant_id)

    def remove_sleeper(self, participant_id: Hashable) -> None:
        self._sleepers.discard(participant_id)

    def remove_all_sleepers(self) -> None:
        self._sleepers.clear()

    def is_sleeping(self, participant_id: Hashable) -> bool:
        return participant_id in self._sleepers

    def sleeper_count(self) -> int:
        return min(len(self._sleepers), self._participant_count)

    def all_awake(self) -> bool:
        return self.sleeper_count() == 0

    def all_asleep(self) -> bool:
        return self._participant_count > 0 and self.sleeper_count() >= self._participant_count

    def ratio(self) -> float:
        """Fraction of eligible participants asleep, 0 when there are none."""
        if self._participant_count == 0:
            return 0.0
        return self.sleeper_count() / self._participant_count
