"""Closed real intervals."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Interval:
    """A real interval; bounds given in reverse order are swapped."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            low, high = self.max, self.min
            object.__setattr__(self, "min", low)
            object.__setattr__(self, "max", high)

    @classmethod
    def empty(cls) -> Interval:
        return cls(math.inf, -math.inf)

    @classmethod
    def universe(cls) -> Interval:
        return cls(-math.inf, math.inf)

    def size(self) -> float:
        return self.max - self.min

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x