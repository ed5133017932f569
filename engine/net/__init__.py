from .packets import TimePacket
from .broadcast import Broadcaster, Observer, LoopbackObserver

__all__ = [
    "TimePacket",
    "Broadcaster",
    "Observer",
    "LoopbackObserver",
]
