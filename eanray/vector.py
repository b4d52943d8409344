"""Three-dimensional vectors and the random sampling helpers built on them."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Union

Number = Union[int, float]

_NEAR_ZERO = 1e-8
_MIN_LENGTH_SQUARED = 1e-160


def _format_real(value: float) -> str:
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _sqrt_or_nan(value: float) -> float:
    return math.sqrt(value) if value >= 0.0 else math.nan


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector, also used for points in space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> Vec3:
        return cls(0.0, 0.0, 0.0)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vec3 | Number) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x + other, self.y + other, self.z + other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Vec3 | Number) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x - other, self.y - other, self.z - other)
        return NotImplemented

    def __mul__(self, other: Vec3 | Number) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, t: Number) -> Vec3:
        if not isinstance(t, (int, float)):
            return NotImplemented
        return self * (1.0 / t)

    def __str__(self) -> str:
        return " ".join(_format_real(c) for c in self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.dot(self)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def unit(self) -> Vec3:
        """Return this vector scaled to length one.

        Raises ZeroDivisionError for the zero vector.
        """
        return self / self.length()

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector about a unit normal."""
        return self - normal * 2.0 * self.dot(normal)

    def near_zero(self) -> bool:
        return all(abs(c) < _NEAR_ZERO for c in self)


def refract(unit_direction: Vec3, normal: Vec3, etai_over_etat: float) -> Vec3:
    """Refract a unit direction through a surface with the given unit normal.

    Components become NaN when the refraction is impossible.
    """
    cos_theta = -min(unit_direction.dot(normal), 1.0)
    perpendicular = (unit_direction + normal * cos_theta) * etai_over_etat
    parallel = normal * -_sqrt_or_nan(1.0 - perpendicular.length_squared())
    return perpendicular + parallel


def random_range(min_value: float, max_value: float) -> float:
    """Return a random real in [min_value, max_value)."""
    if not min_value < max_value:
        raise ValueError(f"empty range: {min_value}..{max_value}")
    return min_value + (max_value - min_value) * random.random()


def random_real() -> float:
    """Return a random real in [0, 1)."""
    return random_range(0.0, 1.0)


def random_vector(min_value: float, max_value: float) -> Vec3:
    return Vec3(
        random_range(min_value, max_value),
        random_range(min_value, max_value),
        random_range(min_value, max_value),
    )


def random_unit_vector() -> Vec3:
    """Return a uniformly distributed random unit vector."""
    while True:
        candidate = random_vector(-1.0, 1.0)
        length_squared = candidate.length_squared()
        # Reject tiny vectors so the normalisation stays well defined.
        if _MIN_LENGTH_SQUARED < length_squared <= 1.0:
            return candidate / math.sqrt(length_squared)


def random_on_hemisphere(normal: Vec3) -> Vec3:
    """Return a random unit vector in the hemisphere around ``normal``."""
    on_sphere = random_unit_vector()
    return on_sphere if on_sphere.dot(normal) > 0.0 else -on_sphere


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def normalize_to_01(value):
    """Map a value (or vector) from [-1, 1] to [0, 1]."""
    return (value + 1.0) * 0.5