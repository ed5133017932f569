"""
Fan-out of time packets to observers.

Delivery is fire-and-forget: a failing observer is logged and skipped, and
never stops the remaining sends.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict, List

from engine.error_handler import log_error

from .packets import TimePacket

if TYPE_CHECKING:
    from world.level import Level


class Observer(ABC):
    """A connected observer watching one level."""

    def __init__(self, observer_id: str, level_id: str) -> None:
        self.observer_id = observer_id
        self.level_id = level_id

    @abstractmethod
    def send(self, packet: TimePacket) -> None:
        ...


class LoopbackObserver(Observer):
    """
    Delivers packets straight onto a local level, round-tripping them through
    the wire encoding the way a real connection would.
    """

    def __init__(self, observer_id: str, level: "Level") -> None:
        super().__init__(observer_id, level.level_id)
        self.level = level
        self.received = 0

    def send(self, packet: TimePacket) -> None:
        decoded = TimePacket.decode(packet.encode())
        self.level.set_day_time(decoded.time_ticks)
        self.received += 1


class Broadcaster:
    """Ordered set of observers, keyed by observer id."""

    def __init__(self) -> None:
        self._observers: Dict[str, Observer] = {}

    def add(self, observer: Observer) -> None:
        self._observers[observer.observer_id] = observer

    def remove(self, observer_id: str) -> None:
        self._observers.pop(observer_id, None)

    def observers(self) -> List[Observer]:
        return list(self._observers.values())

    def broadcast(self, packet: TimePacket, accepts: Callable[[str], bool]) -> int:
        """
        Send ``packet`` to every observer whose level id ``accepts`` allows.

        Returns:
            Number of observers the packet was delivered to
        """
        delivered = 0
        for observer in self.observers():
            if not accepts(observer.level_id):
                continue
            try:
                observer.send(packet)
                delivered += 1
            except Exception as e:
                log_error(e, f"broadcast_time[{observer.observer_id}]")
        return delivered
