"""RGB colours in linear space and their PPM byte encoding."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from eanray.interval import Interval
from eanray.vector import Vec3

Number = Union[int, float]

_INTENSITY = Interval(0.0, 0.999)


def linear_to_gamma(component: float) -> float:
    """Apply gamma-2 correction to a linear component."""
    return math.sqrt(component) if component > 0.0 else 0.0


def _to_byte(component: float) -> int:
    return int(_INTENSITY.clamp(linear_to_gamma(component)) * 256.0)


@dataclass(frozen=True, slots=True)
class Color:
    """An immutable linear RGB colour."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def red(cls) -> Color:
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def from_vector(cls, v: Vec3) -> Color:
        return cls(v.x, v.y, v.z)

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def __neg__(self) -> Color:
        return Color(-self.r, -self.g, -self.b)

    def __add__(self, other: Color | Number) -> Color:
        if isinstance(other, Color):
            return Color(self.r + other.r, self.g + other.g, self.b + other.b)
        if isinstance(other, (int, float)):
            return Color(self.r + other, self.g + other, self.b + other)
        return NotImplemented

    __radd__ = __add__

    def __mul__(self, other: Color | Number) -> Color:
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (int, float)):
            return Color(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, t: Number) -> Color:
        if not isinstance(t, (int, float)):
            return NotImplemented
        return self * (1.0 / t)

    def __str__(self) -> str:
        return str(Vec3(self.r, self.g, self.b))

    def to_bytes_string(self) -> str:
        """Return the gamma-corrected ``"R G B"`` byte triple for a PPM file."""
        return " ".join(str(_to_byte(c)) for c in self)