"""
Time snapshot packet.

Sent once per simulation step to every observer of a level. Only the raw tick
count travels; observers derive time of day and day count themselves.
"""

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict

from engine.error_handler import PacketError

if TYPE_CHECKING:
    from world.level import Level


@dataclass(frozen=True)
class TimePacket:
    time_ticks: int

    @classmethod
    def from_level(cls, level: "Level") -> "TimePacket":
        return cls(time_ticks=level.get_day_time())

    def to_dict(self) -> Dict[str, Any]:
        return {"time_ticks": self.time_ticks}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimePacket":
        value = data.get("time_ticks") if isinstance(data, dict) else None
        # bool is an int subclass but never a valid tick count
        if not isinstance(value, int) or isinstance(value, bool):
            raise PacketError(f"Invalid time packet: {data!r}")
        return cls(time_ticks=value)

    def encode(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def decode(cls, payload: bytes) -> "TimePacket":
        try:
            data = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise PacketError(f"Undecodable time packet: {e}") from e
        return cls.from_dict(data)
