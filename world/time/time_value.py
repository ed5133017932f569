"""
Tick-based time values.

A TimeValue is a whole tick count plus a fractional accumulator, so that
time can advance by non-integer amounts every step without drifting.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from settings import DAY_LENGTH_TICKS

Number = Union[int, float]


def time_of_day(ticks: int) -> int:
    """Reduce a raw tick count to its time of day."""
    return ticks % DAY_LENGTH_TICKS


@dataclass(frozen=True, order=True)
class TimeValue:
    """
    Whole ticks plus a fraction in [0, 1).

    Values compare lexicographically by (ticks, fraction). Construction
    always carries the fraction into the tick count, so
    ``TimeValue(5, -0.25) == TimeValue(4, 0.75)``.
    """
    ticks: int = 0
    fraction: float = 0.0

    def __post_init__(self) -> None:
        ticks = int(self.ticks)
        fraction = float(self.fraction)
        carry = math.floor(fraction)
        ticks += carry
        fraction -= carry
        # Float rounding on tiny negative fractions can land exactly on 1.0
        if fraction >= 1.0:
            ticks += 1
            fraction = 0.0
        object.__setattr__(self, "ticks", ticks)
        object.__setattr__(self, "fraction", fraction)

    @classmethod
    def from_float(cls, value: Number) -> "TimeValue":
        whole = math.floor(value)
        return cls(whole, value - whole)

    @classmethod
    def coerce(cls, value: Union["TimeValue", Number]) -> "TimeValue":
        if isinstance(value, TimeValue):
            return value
        return cls.from_float(value)

    def __float__(self) -> float:
        return self.ticks + self.fraction

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: Union["TimeValue", Number]) -> "TimeValue":
        other = TimeValue.coerce(other)
        return TimeValue(self.ticks + other.ticks, self.fraction + other.fraction)

    def subtract(self, other: Union["TimeValue", Number]) -> "TimeValue":
        other = TimeValue.coerce(other)
        return TimeValue(self.ticks - other.ticks, self.fraction - other.fraction)

    def divide(self, other: Union["TimeValue", Number]) -> float:
        return float(self) / float(other)

    def __add__(self, other: Union["TimeValue", Number]) -> "TimeValue":
        return self.add(other)

    def __sub__(self, other: Union["TimeValue", Number]) -> "TimeValue":
        return self.subtract(other)

    # ------------------------------------------------------------------
    # Day arithmetic
    # ------------------------------------------------------------------

    def time_of_day(self) -> "TimeValue":
        return TimeValue(time_of_day(self.ticks), self.fraction)

    def day(self) -> int:
        """Number of whole days elapsed."""
        return self.ticks // DAY_LENGTH_TICKS

    def between_mod(
        self,
        start: Union["TimeValue", Number],
        end: Union["TimeValue", Number],
    ) -> bool:
        """
        Check whether this time of day lies in [start, end), modulo the day length.

        When ``start`` is later in the day than ``end`` the interval wraps
        through midnight.
        """
        value = self.time_of_day()
        start = TimeValue.coerce(start).time_of_day()
        end = TimeValue.coerce(end).time_of_day()

        if start <= end:
            return start <= value < end
        return value >= start or value < end

    @staticmethod
    def crossed_morning(old_time: "TimeValue", new_time: "TimeValue") -> bool:
        """True when ``new_time`` falls in a later day than ``old_time``."""
        return new_time.day() > old_time.day()

    def __str__(self) -> str:
        return f"{float(self):.4f}"
