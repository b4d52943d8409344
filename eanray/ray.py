"""Rays with an origin and a direction."""

from __future__ import annotations

from dataclasses import dataclass

from eanray.vector import Vec3


@dataclass(frozen=True, slots=True)
class Ray:
    """A half-line starting at ``origin`` and heading along ``direction``."""

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Return the point reached after travelling ``t`` directions."""
        return self.origin + self.direction * t