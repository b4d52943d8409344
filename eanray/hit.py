"""Ray–object intersection records and collections of hittable objects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from eanray.interval import Interval
from eanray.ray import Ray
from eanray.vector import Vec3

if TYPE_CHECKING:
    from eanray.materials import Material


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Where a ray met a surface, and what the surface is made of."""

    p: Vec3
    normal: Vec3
    material: Material
    t: float
    front_face: bool


def face_normal(ray: Ray, outward_normal: Vec3) -> tuple[bool, Vec3]:
    """Return whether the ray hits the front face, and the normal facing the ray."""
    front_face = ray.direction.dot(outward_normal) < 0.0
    return front_face, outward_normal if front_face else -outward_normal


class Hittable(ABC):
    """Anything a ray can hit."""

    @abstractmethod
    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        """Return the nearest hit with ``t`` strictly inside ``ray_t``, if any."""


class HittableList(Hittable):
    """A group of objects hit as one; the closest hit wins."""

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def add(self, obj: Hittable) -> None:
        self.objects.append(obj)

    def hit(self, ray: Ray, ray_t: Interval) -> HitRecord | None:
        closest: HitRecord | None = None
        for obj in self.objects:
            if closest is None:
                closest = obj.hit(ray, ray_t)
            else:
                closest = obj.hit(ray, Interval(ray_t.min, closest.t)) or closest
        return closest