"""Surface materials that decide how light scatters off a hit."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from eanray.color import Color
from eanray.hit import HitRecord
from eanray.ray import Ray
from eanray.vector import random_unit_vector, refract


class Material(ABC):
    """A surface's scattering behaviour."""

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord) -> tuple[Ray, Color] | None:
        """Return the scattered ray and its attenuation, or None if absorbed."""


@dataclass(frozen=True, slots=True)
class Lambertian(Material):
    """A matte, diffusely reflecting surface."""

    albedo: Color

    def scatter(self, ray_in: Ray, rec: HitRecord) -> tuple[Ray, Color] | None:
        direction = rec.normal + random_unit_vector()
        if direction.near_zero():
            direction = rec.normal
        return Ray(rec.p, direction), self.albedo


@dataclass(frozen=True, slots=True)
class Metal(Material):
    """A mirror-like surface; ``fuzz`` (at most 1) blurs the reflection."""

    albedo: Color
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        if not self.fuzz < 1.0:
            object.__setattr__(self, "fuzz", 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> tuple[Ray, Color] | None:
        reflected = ray_in.direction.reflect(rec.normal)
        direction = reflected.unit() + random_unit_vector() * self.fuzz
        return Ray(rec.p, direction), self.albedo


@dataclass(frozen=True, slots=True)
class Dielectric(Material):
    """A transparent, always refracting surface such as glass or water."""

    refraction_index: float

    def scatter(self, ray_in: Ray, rec: HitRecord) -> tuple[Ray, Color] | None:
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index
        refracted = refract(ray_in.direction.unit(), rec.normal, ri)
        return Ray(rec.p, refracted), Color.white()